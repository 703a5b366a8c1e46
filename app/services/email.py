import logging
import smtplib
from dataclasses import dataclass
from email.errors import MessageError
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Protocol

import sib_api_v3_sdk
import urllib3
from sib_api_v3_sdk.rest import ApiException

from app.core.config import Settings
from app.core.errors import ConfigurationError, MailDeliveryError

logger = logging.getLogger(__name__)


#Outbound email handed to a mail sender
@dataclass(frozen=True)
class MailMessage:
    from_address: str
    to_address: str
    subject: str
    html: str
    text: str
    from_name: str | None = None
    reply_to: str | None = None


class MailSender(Protocol):
    provider: str

    def send(self, message: MailMessage) -> None:
        ...


# -------------------------------------------------------------------
# SMTP transport
# -------------------------------------------------------------------
class SmtpMailSender:
    """
    Sends mail through an authenticated SMTP account.
    Port 465 uses implicit TLS, any other port upgrades with STARTTLS.
    """

    provider = "smtp"

    def __init__(self, *, host: str, port: int, username: str, password: str):
        self.host = host
        self.port = port
        self.username = username
        self.password = password

    def _build(self, message: MailMessage) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = formataddr((message.from_name or "", message.from_address))
        msg["To"] = message.to_address
        msg["Subject"] = message.subject
        if message.reply_to:
            msg["Reply-To"] = message.reply_to

        msg.attach(MIMEText(message.text, "plain", "utf-8"))
        msg.attach(MIMEText(message.html, "html", "utf-8"))
        return msg

    def _connect(self) -> smtplib.SMTP:
        if self.port == 465:
            return smtplib.SMTP_SSL(self.host, self.port)

        server = smtplib.SMTP(self.host, self.port)
        server.starttls()
        return server

    def send(self, message: MailMessage) -> None:
        logger.info("Sending email via SMTP %s:%s to %s", self.host, self.port, message.to_address)

        try:
            with self._connect() as server:
                server.login(self.username, self.password)
                server.send_message(self._build(message))

        except (smtplib.SMTPException, MessageError, OSError) as e:
            raise MailDeliveryError(f"SMTP send failed: {e}") from e


# -------------------------------------------------------------------
# Brevo transactional email API
# -------------------------------------------------------------------
class BrevoMailSender:
    """Sends mail through the Brevo transactional email HTTP API."""

    provider = "brevo"

    def __init__(self, *, api_key: str, api: sib_api_v3_sdk.TransactionalEmailsApi | None = None):
        if api is None:
            config = sib_api_v3_sdk.Configuration()
            config.api_key["api-key"] = api_key
            api_client = sib_api_v3_sdk.ApiClient(config)

            #One attempt per send, connection errors are reported not retried
            api_client.rest_client.pool_manager.connection_pool_kw["retries"] = False

            api = sib_api_v3_sdk.TransactionalEmailsApi(api_client)

        self.api = api

    def send(self, message: MailMessage) -> None:
        logger.info("Sending email via Brevo to %s", message.to_address)

        sender = {"email": message.from_address}
        if message.from_name:
            sender["name"] = message.from_name

        email = sib_api_v3_sdk.SendSmtpEmail(
            sender=sender,
            to=[{"email": message.to_address}],
            reply_to={"email": message.reply_to} if message.reply_to else None,
            subject=message.subject,
            html_content=message.html,
            text_content=message.text,
        )

        try:
            self.api.send_transac_email(email)
        except ApiException as e:
            raise MailDeliveryError(f"Brevo email failed: {e.status} {e.reason}") from e
        except (urllib3.exceptions.HTTPError, OSError) as e:
            raise MailDeliveryError(f"Brevo unreachable: {e}") from e


# -------------------------------------------------------------------
# Factory (fail fast on missing configuration)
# -------------------------------------------------------------------
def build_mail_sender(settings: Settings) -> MailSender:
    if not settings.sender_address:
        raise ConfigurationError("MAIL_FROM or EMAIL_USER must be set")

    if settings.MAIL_PROVIDER == "brevo":
        if not settings.BREVO_API_KEY:
            raise ConfigurationError("BREVO_API_KEY is not set")
        return BrevoMailSender(api_key=settings.BREVO_API_KEY)

    if not (settings.EMAIL_USER and settings.EMAIL_PASS):
        raise ConfigurationError("EMAIL_USER and EMAIL_PASS must be set for SMTP")

    return SmtpMailSender(
        host=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.EMAIL_USER,
        password=settings.EMAIL_PASS,
    )


#Build the outgoing message with the configured sender and recipient
def compose_message(
    settings: Settings,
    *,
    subject: str,
    html: str,
    text: str,
    reply_to: str | None = None,
) -> MailMessage:
    return MailMessage(
        from_address=settings.sender_address,
        from_name=settings.MAIL_FROM_NAME,
        to_address=settings.recipient_address,
        reply_to=reply_to,
        subject=subject,
        html=html,
        text=text,
    )
