"""Transformers between Resend-shaped records and Nylas wire records.

Everything here is pure: each call builds new records from its inputs. The
only side channel is the advisory ``warn`` sink used when a request carries a
feature Nylas cannot express; it defaults to this module's logger and can be
swapped for any ``Callable[[str], None]`` (tests pass a list's ``append``).
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Mapping, Sequence

from .models import (
    DEFAULT_CONTENT_TYPE,
    Attachment,
    GetEmailResponse,
    NylasAttachment,
    NylasDomainSendRequest,
    NylasDomainSendResponse,
    NylasMessage,
    NylasSendRequest,
    NylasSendResponse,
    Participant,
    SendEmailRequest,
    SendEmailResponse,
)
from .utils import epoch_to_iso, iso_to_epoch, to_base64

logger = logging.getLogger(__name__)

WarningSink = Callable[[str], None]

WARNING_PREFIX = "nylas-resend: "
SENT_EVENT = "email.sent"

# "Name <email@example.com>" or "<email@example.com>"
_ADDRESS_RE = re.compile(r"(?:(.+?)\s*)?<(.+?)>")


def _log_warning(message: str) -> None:
    logger.warning(message)


# ---------------------------------------------------------------------------
# Address parsing
# ---------------------------------------------------------------------------


def _trim(value: str) -> str:
    # str.strip() keeps U+FEFF; a leading BOM must not end up in the address.
    return value.strip().strip("\ufeff").strip()


def parse_email_address(value: str) -> Participant:
    """Split ``"Name <addr>"`` into a participant; anything else is a bare address."""
    trimmed = _trim(value)
    match = _ADDRESS_RE.fullmatch(trimmed)
    if match:
        name = _trim(match.group(1) or "")
        email = _trim(match.group(2))
        if name:
            return Participant(name=name, email=email)
        return Participant(email=email)
    return Participant(email=trimmed)


def to_participants(value: str | Sequence[str] | None) -> list[Participant] | None:
    """Normalise a ``str | list[str]`` recipient field; None stays None."""
    if value is None or value == "":
        return None
    addresses = [value] if isinstance(value, str) else list(value)
    return [parse_email_address(address) for address in addresses]


def format_participant(participant: Participant) -> str:
    if participant.name:
        return f"{participant.name} <{participant.email}>"
    return participant.email


def participants_to_emails(participants: Sequence[Participant] | None) -> list[str]:
    """Bare addresses only; display names are dropped."""
    if not participants:
        return []
    return [participant.email for participant in participants]


# ---------------------------------------------------------------------------
# Request transformers (Resend -> Nylas)
# ---------------------------------------------------------------------------


def coerce_send_request(request: SendEmailRequest | Mapping[str, Any]) -> SendEmailRequest:
    if isinstance(request, SendEmailRequest):
        return request
    return SendEmailRequest.model_validate(request)


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


def _warn_common(request: SendEmailRequest, warn: WarningSink, headers_hint: str) -> None:
    if request.headers:
        warn(WARNING_PREFIX + headers_hint)
    if request.tags:
        warn(WARNING_PREFIX + "Tags are not supported by Nylas API. Tags will be ignored.")


def _to_nylas_attachment(attachment: Attachment) -> NylasAttachment:
    return NylasAttachment(
        filename=attachment.filename,
        content=to_base64(attachment.content),
        content_type=attachment.content_type or DEFAULT_CONTENT_TYPE,
        content_id=attachment.content_id or None,
    )


def transform_send_request(
    request: SendEmailRequest | Mapping[str, Any], warn: WarningSink | None = None
) -> NylasSendRequest:
    """Build the grant-based send body (OAuth-connected mailbox identity)."""
    request = coerce_send_request(request)
    warn = warn or _log_warning
    _warn_common(
        request,
        warn,
        "Custom headers are not supported by Nylas JSON API. "
        "Headers will be ignored. Use raw MIME format for custom headers.",
    )

    send_at = None
    if request.scheduled_at:
        send_at = iso_to_epoch(request.scheduled_at)

    attachments = None
    if request.attachments:
        attachments = [_to_nylas_attachment(att) for att in request.attachments]

    return NylasSendRequest(
        subject=request.subject,
        body=request.html or request.text or "",
        from_=[parse_email_address(request.from_)] if request.from_ else None,
        to=to_participants(request.to) or [],
        cc=to_participants(request.cc) or None,
        bcc=to_participants(request.bcc) or None,
        reply_to=to_participants(request.reply_to) or None,
        attachments=attachments,
        send_at=send_at,
    )


def transform_domain_send_request(
    request: SendEmailRequest | Mapping[str, Any], warn: WarningSink | None = None
) -> NylasDomainSendRequest:
    """Build the domain-based (transactional) send body.

    The domain endpoint has no attachments, scheduling or reply-to; those
    fields are dropped after a warning rather than failing the send.
    """
    request = coerce_send_request(request)
    warn = warn or _log_warning
    _warn_common(
        request,
        warn,
        "Custom headers are not supported by Nylas domain send API. Headers will be ignored.",
    )
    if request.attachments:
        warn(
            WARNING_PREFIX + "Attachments are not supported by Nylas domain send API. "
            "Attachments will be ignored."
        )
    if _is_present(request.scheduled_at):
        warn(
            WARNING_PREFIX + "Scheduled send is not supported by Nylas domain send API. "
            "scheduledAt will be ignored."
        )
    if _is_present(request.reply_to):
        warn(
            WARNING_PREFIX + "Reply-to is not supported by Nylas domain send API. "
            "replyTo will be ignored."
        )

    return NylasDomainSendRequest(
        from_=parse_email_address(request.from_),
        to=to_participants(request.to) or [],
        cc=to_participants(request.cc) or None,
        bcc=to_participants(request.bcc) or None,
        subject=request.subject,
        body=request.html or request.text or "",
        is_plaintext=not request.html and bool(request.text),
    )


def build_send_request(
    request: SendEmailRequest | Mapping[str, Any],
    *,
    domain_based: bool,
    warn: WarningSink | None = None,
) -> NylasSendRequest | NylasDomainSendRequest:
    """Pick the wire variant for the configured sending mode."""
    if domain_based:
        return transform_domain_send_request(request, warn)
    return transform_send_request(request, warn)


# ---------------------------------------------------------------------------
# Response transformers (Nylas -> Resend)
# ---------------------------------------------------------------------------


def transform_send_response(response: NylasSendResponse) -> SendEmailResponse:
    return SendEmailResponse(id=response.data.id)


def transform_domain_send_response(response: NylasDomainSendResponse) -> SendEmailResponse:
    return SendEmailResponse(id=response.data.id)


def transform_message_to_email(message: NylasMessage) -> GetEmailResponse:
    """Nylas has a single body field, so ``text`` and ``html`` both mirror it."""
    return GetEmailResponse(
        id=message.id,
        from_=format_participant(message.from_[0]) if message.from_ else "",
        to=participants_to_emails(message.to),
        cc=participants_to_emails(message.cc),
        bcc=participants_to_emails(message.bcc),
        reply_to=participants_to_emails(message.reply_to),
        subject=message.subject,
        text=message.body,
        html=message.body,
        created_at=epoch_to_iso(message.date),
        last_event=SENT_EVENT,
    )
