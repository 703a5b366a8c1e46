import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

"""
CONTACT FORM SCHEMA
"""

#Header-breaking characters, rejected in fields that end up in the subject line
CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


#Intent of a contact form submission, drives the subject line
class InquiryType(str, Enum):
    FOUNDER = "founder"
    MARKETER = "marketer"
    PRODUCT_INQUIRY = "product_inquiry"


#Validated contact form submission (camelCase JSON keys, snake_case attributes)
class InquiryMessage(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    name: str = Field(min_length=1)
    email: EmailStr
    website: Optional[str] = None
    message: Optional[str] = None
    inquiry_type: Optional[InquiryType] = Field(default=None, alias="inquiryType")
    phone: Optional[str] = None
    socials: Optional[str] = None
    product_name: Optional[str] = Field(default=None, alias="productName")

    @field_validator(
        "website",
        "message",
        "inquiry_type",
        "phone",
        "socials",
        "product_name",
        mode="before",
    )
    @classmethod
    def _blank_is_absent(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("name", "product_name")
    @classmethod
    def _single_line(cls, value):
        if value is not None and CONTROL_CHARS.search(value):
            raise ValueError("must not contain control characters")
        return value

    @model_validator(mode="after")
    def _message_required(self):
        if not self.message and self.kind is not InquiryType.PRODUCT_INQUIRY:
            raise ValueError("message is required")
        return self

    @property
    def kind(self) -> InquiryType:
        return self.inquiry_type or InquiryType.FOUNDER


#Response returned when the contact email was handed to the mail provider
class ContactSuccessOut(BaseModel):
    success: bool = True
    message: str = "Message sent successfully"


class ErrorOut(BaseModel):
    error: str
    details: Optional[str] = None
