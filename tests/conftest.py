import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app


class FakeMailSender:
    provider = "fake"

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.sent = []

    def send(self, message):
        if self.error:
            raise self.error
        self.sent.append(message)


def make_settings(**overrides) -> Settings:
    values = {
        "EMAIL_USER": "owner@alphaframe.io",
        "EMAIL_PASS": "app-password",
        "MAIL_TO": "inbox@alphaframe.io",
        "SUPABASE_URL": None,
        "SUPABASE_ANON_KEY": None,
        "BACKEND_ALLOW_STUB": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def sender():
    return FakeMailSender()


@pytest.fixture
def app(settings, sender):
    return create_app(settings, mail_sender=sender)


@pytest.fixture
def client(app):
    return TestClient(app)
