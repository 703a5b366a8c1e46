from html import escape

from app.schemas.contact import InquiryMessage, InquiryType
from app.schemas.inbound import InboundEmail

NOT_PROVIDED = "Not provided"
NOT_APPLICABLE = "N/A"

SUBJECT_PREFIXES = {
    InquiryType.FOUNDER: "[FOUNDER INQUIRY]",
    InquiryType.MARKETER: "[HUNTER APPLICATION]",
    InquiryType.PRODUCT_INQUIRY: "[PRODUCT INQUIRY]",
}

INBOUND_SUBJECT_PREFIX = "[New Inquiry]"


# -------------------------------------------------------------------
# Contact form
# -------------------------------------------------------------------
def format_subject(inquiry: InquiryMessage) -> str:
    prefix = SUBJECT_PREFIXES.get(inquiry.kind, SUBJECT_PREFIXES[InquiryType.FOUNDER])

    if inquiry.kind is InquiryType.PRODUCT_INQUIRY:
        return f"{prefix} {inquiry.product_name or NOT_APPLICABLE} from {inquiry.name}"

    return f"{prefix} from {inquiry.name}"


def _inquiry_rows(inquiry: InquiryMessage) -> list[tuple[str, str]]:
    return [
        ("Name", inquiry.name),
        ("Email", str(inquiry.email)),
        ("Website", inquiry.website or NOT_PROVIDED),
        ("Phone", inquiry.phone or NOT_PROVIDED),
        ("Socials", inquiry.socials or NOT_PROVIDED),
        ("Product", inquiry.product_name or NOT_APPLICABLE),
        ("Inquiry type", inquiry.kind.value),
    ]


def format_inquiry(inquiry: InquiryMessage) -> tuple[str, str, str]:
    """
    Build (subject, html, text) for a contact form submission.
    Absent optional fields are rendered with placeholder text.
    """
    rows = _inquiry_rows(inquiry)
    message = inquiry.message or NOT_PROVIDED

    html_lines = [
        f"<p><strong>{label}:</strong> {escape(value)}</p>" for label, value in rows
    ]
    html_lines.append("<p><strong>Message:</strong></p>")
    html_lines.append(f"<p>{escape(message)}</p>")

    text_lines = [f"{label}: {value}" for label, value in rows]
    text_lines.append("")
    text_lines.append("Message:")
    text_lines.append(message)

    return format_subject(inquiry), "\n".join(html_lines), "\n".join(text_lines)


# -------------------------------------------------------------------
# Inbound forwarding
# -------------------------------------------------------------------
def format_inbound(email: InboundEmail) -> tuple[str, str, str]:
    to = ", ".join(email.to) if isinstance(email.to, list) else (email.to or "")
    sender = email.sender or ""

    if email.html:
        content = email.html
    else:
        content = escape(email.text or "")

    subject = f"{INBOUND_SUBJECT_PREFIX} {email.subject or ''}".rstrip()

    html = f"""
<div style="font-family: sans-serif; padding: 20px; background: #f4f4f4;">
  <div style="background: white; padding: 20px; border-radius: 8px;">
    <h2 style="margin-top:0;">New Message Received</h2>
    <p><strong>From:</strong> {escape(sender)}</p>
    <p><strong>To:</strong> {escape(to)}</p>
    <hr style="border: 0; border-top: 1px solid #eee; margin: 20px 0;" />
    <div style="color: #333;">
      {content}
    </div>
  </div>
</div>
"""

    text = f"From: {sender}\nTo: {to}\n\n{email.text or ''}"

    return subject, html, text
