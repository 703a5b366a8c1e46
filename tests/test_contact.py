import pytest
import urllib3
from fastapi.testclient import TestClient

from app.core.errors import MailDeliveryError
from app.main import create_app
from app.services.email import BrevoMailSender

from tests.conftest import FakeMailSender

URL = "/api/contact"


def test_founder_inquiry_is_sent(client, sender):
    res = client.post(URL, json={"name": "Jo", "email": "jo@x.com", "message": "Hi"})

    assert res.status_code == 200
    assert res.json()["success"] is True

    assert len(sender.sent) == 1
    mail = sender.sent[0]
    assert mail.subject == "[FOUNDER INQUIRY] from Jo"
    assert mail.reply_to == "jo@x.com"
    assert mail.to_address == "inbox@alphaframe.io"
    assert mail.from_address == "owner@alphaframe.io"
    assert mail.from_name == "AlphaFrame Website"


@pytest.mark.parametrize("field", ["name", "email", "message"])
def test_missing_required_field_is_rejected(client, sender, field):
    payload = {"name": "Jo", "email": "jo@x.com", "message": "Hi"}
    del payload[field]

    res = client.post(URL, json=payload)

    assert res.status_code == 400
    assert res.json() == {"error": "Missing fields", "details": field}
    assert sender.sent == []


def test_blank_name_counts_as_missing(client):
    res = client.post(URL, json={"name": "   ", "email": "jo@x.com", "message": "Hi"})
    assert res.status_code == 400
    assert res.json()["details"] == "name"


def test_marketer_message_still_required(client):
    res = client.post(URL, json={"name": "Jo", "email": "jo@x.com", "inquiryType": "marketer"})
    assert res.status_code == 400
    assert res.json()["details"] == "message"


def test_marketer_subject_marks_hunter_application(client, sender):
    res = client.post(
        URL,
        json={"name": "Jo", "email": "jo@x.com", "message": "Hire me", "inquiryType": "marketer"},
    )

    assert res.status_code == 200
    assert "[HUNTER APPLICATION]" in sender.sent[0].subject


def test_product_inquiry_without_message(client, sender):
    res = client.post(
        URL,
        json={
            "name": "Jo",
            "email": "jo@x.com",
            "inquiryType": "product_inquiry",
            "productName": "Pitch Deck",
        },
    )

    assert res.status_code == 200
    mail = sender.sent[0]
    assert mail.subject == "[PRODUCT INQUIRY] Pitch Deck from Jo"
    assert "Message:\nNot provided" in mail.text


def test_invalid_email_is_rejected(client, sender):
    res = client.post(URL, json={"name": "Jo", "email": "not-an-email", "message": "Hi"})

    assert res.status_code == 400
    assert res.json()["error"] == "Invalid fields"
    assert "email" in res.json()["details"]
    assert sender.sent == []


def test_unknown_inquiry_type_is_rejected(client):
    res = client.post(
        URL,
        json={"name": "Jo", "email": "jo@x.com", "message": "Hi", "inquiryType": "investor"},
    )
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid fields"


def test_invalid_json_body(client):
    res = client.post(
        URL,
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid request body"}


def test_non_object_body(client):
    res = client.post(URL, json=["Jo", "jo@x.com"])
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid request body"


def test_empty_body_reports_all_missing_fields(client):
    res = client.post(URL)
    assert res.status_code == 400
    assert res.json() == {"error": "Missing fields", "details": "name, email, message"}


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
def test_other_methods_not_allowed(client, method):
    res = client.request(method, URL)
    assert res.status_code == 405
    assert res.json() == {"error": "Method not allowed"}


def test_bare_options_is_accepted(client):
    res = client.options(URL)
    assert res.status_code == 204


def test_cors_preflight_allows_any_origin(client):
    res = client.options(
        URL,
        headers={
            "Origin": "https://alphaframe.io",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "*"
    assert "POST" in res.headers["access-control-allow-methods"]


def test_send_failure_maps_to_500(settings):
    failing = FakeMailSender(error=MailDeliveryError("SMTP send failed: timed out"))
    client = TestClient(create_app(settings, mail_sender=failing))

    res = client.post(URL, json={"name": "Jo", "email": "jo@x.com", "message": "Hi"})

    assert res.status_code == 500
    body = res.json()
    assert body["error"] == "Failed to send message"
    assert "timed out" in body["details"]


def test_missing_mail_sender_maps_to_500(app, client):
    app.state.mail_sender = None

    res = client.post(URL, json={"name": "Jo", "email": "jo@x.com", "message": "Hi"})

    assert res.status_code == 500
    assert res.json() == {"error": "Email service is not configured"}


def test_user_input_is_escaped_in_html(client, sender):
    client.post(URL, json={"name": "Jo", "email": "jo@x.com", "message": "<script>x</script>"})

    html = sender.sent[0].html
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


@pytest.mark.parametrize(
    "extra",
    [
        {"name": "Jo\nBcc: victim@x.com"},
        {"inquiryType": "product_inquiry", "productName": "Deck\r\nBcc: victim@x.com"},
    ],
)
def test_control_characters_in_subject_fields_are_rejected(client, sender, extra):
    payload = {"name": "Jo", "email": "jo@x.com", "message": "Hi"}
    payload.update(extra)

    res = client.post(URL, json=payload)

    assert res.status_code == 400
    assert res.json()["error"] == "Invalid fields"
    assert sender.sent == []


def test_padded_product_inquiry_type_waives_message(client, sender):
    res = client.post(
        URL,
        json={"name": "Jo", "email": "jo@x.com", "inquiryType": " product_inquiry "},
    )

    assert res.status_code == 200
    assert sender.sent[0].subject == "[PRODUCT INQUIRY] N/A from Jo"


def test_brevo_unreachable_maps_to_json_500(settings):
    class UnreachableApi:
        def send_transac_email(self, email):
            raise urllib3.exceptions.MaxRetryError(pool=None, url="/v3/smtp/email", reason=None)

    brevo = BrevoMailSender(api_key="key", api=UnreachableApi())
    client = TestClient(create_app(settings, mail_sender=brevo))

    res = client.post(URL, json={"name": "Jo", "email": "jo@x.com", "message": "Hi"})

    assert res.status_code == 500
    assert res.json()["error"] == "Failed to send message"


def test_unexpected_error_still_returns_json(settings):
    broken = FakeMailSender(error=KeyError("boom"))
    client = TestClient(create_app(settings, mail_sender=broken), raise_server_exceptions=False)

    res = client.post(URL, json={"name": "Jo", "email": "jo@x.com", "message": "Hi"})

    assert res.status_code == 500
    assert res.headers["content-type"] == "application/json"
    assert res.json() == {"error": "Server error"}


def test_error_schema_is_documented(client):
    schema = client.get("/openapi.json").json()

    assert "ErrorOut" in schema["components"]["schemas"]
    responses = schema["paths"]["/api/contact"]["post"]["responses"]
    assert {"400", "405", "500"} <= set(responses)
