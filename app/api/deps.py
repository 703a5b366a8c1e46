from fastapi import Request

from app.core.config import Settings
from app.core.errors import IntegrationError
from app.services.email import MailSender


# =========================
# Per-process collaborators (built by create_app, kept on app.state)
# =========================
def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_mail_sender(request: Request) -> MailSender:
    sender = getattr(request.app.state, "mail_sender", None)
    if sender is None:
        raise IntegrationError("Email service is not configured")
    return sender


def get_backend(request: Request):
    return getattr(request.app.state, "backend", None)
