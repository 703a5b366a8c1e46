import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Response

from app.api.deps import get_app_settings, get_mail_sender
from app.core.config import Settings
from app.core.errors import IntegrationError, MailDeliveryError
from app.schemas.contact import ContactSuccessOut, ErrorOut
from app.services.email import MailSender, compose_message
from app.services.formatting import format_inquiry
from app.services.validation import parse_inquiry

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/contact",
    tags=["Contact"],
)


# =========================
# PUBLIC: submit contact form
# =========================
@router.post(
    "",
    response_model=ContactSuccessOut,
    responses={
        400: {"model": ErrorOut},
        405: {"model": ErrorOut},
        500: {"model": ErrorOut},
    },
)
def submit_contact(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    settings: Settings = Depends(get_app_settings),
    sender: MailSender = Depends(get_mail_sender),
):
    inquiry = parse_inquiry(payload)
    subject, html, text = format_inquiry(inquiry)

    message = compose_message(
        settings,
        subject=subject,
        html=html,
        text=text,
        reply_to=str(inquiry.email),
    )

    try:
        sender.send(message)
    except MailDeliveryError as e:
        logger.exception("CONTACT FUNCTION ERROR")
        raise IntegrationError(details=str(e)) from e

    return ContactSuccessOut()


# =========================
# PUBLIC: CORS preflight without Origin headers
# =========================
@router.options("")
def contact_preflight():
    return Response(status_code=204)
