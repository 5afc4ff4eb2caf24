"""Resend-compatible SDK adapter for Nylas."""

from .client import Resend
from .config import Settings
from .emails import Emails
from .models import (
    ApiResponse,
    Attachment,
    GetEmailResponse,
    InboundEmailEvent,
    ListEmailsResponse,
    NylasMessage,
    NylasWebhookPayload,
    Participant,
    ResendError,
    SendEmailRequest,
    SendEmailResponse,
    Tag,
    WebhookAttachment,
    WebhookEventData,
)
from .nylas_client import NylasClient, NylasRequestError
from .transformers import (
    build_send_request,
    format_participant,
    parse_email_address,
    participants_to_emails,
    to_participants,
    transform_domain_send_request,
    transform_message_to_email,
    transform_send_request,
    transform_send_response,
)
from .webhooks import (
    handle_inbound_webhook,
    is_inbound_email_event,
    is_message_created_webhook,
    is_nylas_message_webhook,
    parse_nylas_webhook,
    parse_webhook_body,
    transform_webhook_to_inbound_event,
)

__all__ = [
    "ApiResponse",
    "Attachment",
    "Emails",
    "GetEmailResponse",
    "InboundEmailEvent",
    "ListEmailsResponse",
    "NylasClient",
    "NylasMessage",
    "NylasRequestError",
    "NylasWebhookPayload",
    "Participant",
    "Resend",
    "ResendError",
    "SendEmailRequest",
    "SendEmailResponse",
    "Settings",
    "Tag",
    "WebhookAttachment",
    "WebhookEventData",
    "build_send_request",
    "format_participant",
    "handle_inbound_webhook",
    "is_inbound_email_event",
    "is_message_created_webhook",
    "is_nylas_message_webhook",
    "parse_email_address",
    "parse_nylas_webhook",
    "parse_webhook_body",
    "participants_to_emails",
    "to_participants",
    "transform_domain_send_request",
    "transform_message_to_email",
    "transform_send_request",
    "transform_send_response",
    "transform_webhook_to_inbound_event",
]
