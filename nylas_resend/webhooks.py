"""Webhook handling: turn Nylas ``message.created`` deliveries into Resend inbound events.

Input is whatever the HTTP layer deserialised from the request body and is
treated as untrusted. It goes through three steps:

  1. shape guard    -- a mapping with a string ``type`` and ``data.object`` mapping
  2. event guard    -- ``type`` is exactly ``message.created``
  3. decode+convert -- pydantic decode into NylasWebhookPayload, then mapping

Failing any step yields ``None``. Nothing here raises on bad input.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from pydantic import ValidationError

from .models import (
    InboundEmailEvent,
    NylasWebhookPayload,
    WebhookAttachment,
    WebhookEventData,
)
from .transformers import format_participant, participants_to_emails

logger = logging.getLogger(__name__)

MESSAGE_CREATED = "message.created"
EMAIL_RECEIVED = "email.received"


def is_nylas_message_webhook(payload: Any) -> bool:
    """Structural check only; the event type is not inspected."""
    if isinstance(payload, NylasWebhookPayload):
        return True
    if not isinstance(payload, Mapping):
        return False
    if not isinstance(payload.get("type"), str):
        return False
    data = payload.get("data")
    if not isinstance(data, Mapping):
        return False
    return isinstance(data.get("object"), Mapping)


def is_message_created_webhook(payload: Any) -> bool:
    if not is_nylas_message_webhook(payload):
        return False
    if isinstance(payload, NylasWebhookPayload):
        return payload.type == MESSAGE_CREATED
    return payload["type"] == MESSAGE_CREATED


def parse_nylas_webhook(payload: Any) -> NylasWebhookPayload | None:
    """Decode a message.created delivery; any other input yields None."""
    if not is_message_created_webhook(payload):
        return None
    if isinstance(payload, NylasWebhookPayload):
        return payload
    try:
        return NylasWebhookPayload.model_validate(payload)
    except ValidationError as exc:
        logger.debug("Ignoring malformed %s webhook: %s", MESSAGE_CREATED, exc)
        return None


def transform_webhook_to_inbound_event(payload: NylasWebhookPayload) -> InboundEmailEvent:
    message = payload.data.object

    attachments = None
    if message.attachments is not None:
        attachments = [
            WebhookAttachment(filename=att.filename, content_type=att.content_type, size=att.size)
            for att in message.attachments
        ]

    return InboundEmailEvent(
        type=EMAIL_RECEIVED,
        created_at=payload.time,
        data=WebhookEventData(
            id=message.id,
            from_=format_participant(message.from_[0]) if message.from_ else "",
            to=participants_to_emails(message.to),
            cc=participants_to_emails(message.cc),
            bcc=participants_to_emails(message.bcc),
            reply_to=participants_to_emails(message.reply_to),
            subject=message.subject,
            text=message.body,
            html=message.body,
            created_at=payload.time,
            attachments=attachments,
        ),
    )


def handle_inbound_webhook(payload: Any) -> InboundEmailEvent | None:
    """Return the Resend-format inbound event, or None if this delivery is not one."""
    decoded = parse_nylas_webhook(payload)
    if decoded is None:
        return None
    return transform_webhook_to_inbound_event(decoded)


def parse_webhook_body(body: str | bytes) -> InboundEmailEvent | None:
    """JSON-decode a raw request body and hand it to :func:`handle_inbound_webhook`."""
    try:
        payload = json.loads(body)
    except (TypeError, ValueError):
        logger.debug("Webhook body is not valid JSON; ignoring")
        return None
    return handle_inbound_webhook(payload)


def is_inbound_email_event(event: Any) -> bool:
    return event is not None and getattr(event, "type", None) == EMAIL_RECEIVED
