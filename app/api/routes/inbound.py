import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_app_settings, get_mail_sender
from app.core.config import Settings
from app.core.errors import IntegrationError, MailDeliveryError
from app.schemas.contact import ErrorOut
from app.schemas.inbound import InboundEmail, InboundOut
from app.services.email import MailSender, compose_message
from app.services.formatting import format_inbound

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/inbound",
    tags=["Inbound"],
)


# =========================
# WEBHOOK: forward a received email to the site owner
# =========================
@router.post(
    "",
    response_model=InboundOut,
    responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
def forward_inbound(
    payload: InboundEmail,
    settings: Settings = Depends(get_app_settings),
    sender: MailSender = Depends(get_mail_sender),
):
    subject, html, text = format_inbound(payload)

    try:
        sender.send(
            compose_message(settings, subject=subject, html=html, text=text)
        )
    except MailDeliveryError as e:
        logger.exception("Inbound forward failed")
        raise IntegrationError("Internal Server Error") from e

    return InboundOut()
