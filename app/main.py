import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.core.backend import create_backend_client
from app.core.config import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS, Settings, get_settings
from app.core.errors import register_exception_handlers
from app.services.email import MailSender, build_mail_sender

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    mail_sender: MailSender | None = None,
    backend=None,
) -> FastAPI:
    """
    Build the API.

    Collaborators are created once here and kept on app.state; pass
    mail_sender / backend to inject them (tests use fakes). Missing
    mail configuration raises ConfigurationError at startup.
    """
    settings = settings or get_settings()

    #Create application instance
    app = FastAPI(title=settings.APP_NAME)

    #Permissive CORS for the static site calling this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )

    register_exception_handlers(app)

    #Mail sender for the configured provider (fail fast)
    if mail_sender is None:
        mail_sender = build_mail_sender(settings)

    #Supabase client is only bootstrapped when configured or stubbing is allowed
    if backend is None and (settings.backend_configured or settings.BACKEND_ALLOW_STUB):
        backend = create_backend_client(
            settings.SUPABASE_URL,
            settings.SUPABASE_ANON_KEY,
            allow_stub=settings.BACKEND_ALLOW_STUB,
        )

    app.state.settings = settings
    app.state.mail_sender = mail_sender
    app.state.backend = backend

    logger.info("Mail provider: %s", mail_sender.provider)

    #Register all API routes under the main application
    app.include_router(api_router)

    return app
