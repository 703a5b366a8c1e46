import importlib
import logging

import pytest
from mangum import Mangum

from app.core.config import get_settings
from app.services.email import SmtpMailSender


@pytest.fixture
def handler_env(monkeypatch):
    monkeypatch.setenv("MAIL_PROVIDER", "smtp")
    monkeypatch.setenv("EMAIL_USER", "owner@alphaframe.io")
    monkeypatch.setenv("EMAIL_PASS", "app-password")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    for name in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "BACKEND_ALLOW_STUB", "MAIL_FROM", "MAIL_TO"):
        monkeypatch.delenv(name, raising=False)

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_entrypoint_wires_app_and_lambda_handler(handler_env):
    module = importlib.import_module("app.handler")
    module = importlib.reload(module)

    assert isinstance(module.handler, Mangum)
    assert isinstance(module.app.state.mail_sender, SmtpMailSender)
    assert module.app.state.settings.EMAIL_USER == "owner@alphaframe.io"
    assert module.app.state.backend is None


def test_entrypoint_configures_logging(handler_env, monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))

    importlib.reload(importlib.import_module("app.handler"))

    assert calls and calls[-1]["level"] == logging.DEBUG
