from typing import Any

from pydantic import ValidationError

from app.core.errors import InputError
from app.schemas.contact import InquiryMessage, InquiryType

REQUIRED_FIELDS = ["name", "email", "message"]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def missing_fields(payload: dict[str, Any]) -> list[str]:
    """
    Names of required fields that are absent or blank.
    The message is optional for product inquiries.
    """
    required = list(REQUIRED_FIELDS)
    inquiry_type = str(payload.get("inquiryType") or "").strip()
    if inquiry_type == InquiryType.PRODUCT_INQUIRY.value:
        required.remove("message")

    return [field for field in required if _is_blank(payload.get(field))]


#Turn a parsed JSON body into an InquiryMessage or raise InputError (400)
def parse_inquiry(payload: dict[str, Any] | None) -> InquiryMessage:
    payload = payload or {}

    missing = missing_fields(payload)
    if missing:
        raise InputError("Missing fields", details=", ".join(missing))

    try:
        return InquiryMessage.model_validate(payload)
    except ValidationError as e:
        fields = sorted({
            str(err["loc"][0]) for err in e.errors() if err.get("loc")
        })
        raise InputError(
            "Invalid fields",
            details=", ".join(fields) or None,
        ) from e
