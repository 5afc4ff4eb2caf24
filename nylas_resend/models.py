"""Typed records for both sides of the adapter.

Public records mirror the Resend SDK field names (camelCase on the wire,
e.g. ``replyTo``/``createdAt``); Nylas records keep Nylas' snake_case names
(``reply_to``/``send_at``). Python attributes are snake_case on both sides and
``to_dict()`` renders the exact external spelling, omitting absent fields.
"""

from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

T = TypeVar("T")

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class Record(BaseModel):
    """Immutable record that serialises with its external field names."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


class Participant(Record):
    """One address credited to a message role (from/to/cc/bcc/reply-to)."""

    name: str | None = None
    email: str


# ---------------------------------------------------------------------------
# Resend-compatible request/response records
# ---------------------------------------------------------------------------


class Attachment(Record):
    """File attachment as supplied by callers; content is base64 text or raw bytes."""

    filename: str
    content: str | bytes | None = None
    content_type: str | None = Field(None, alias="contentType")
    content_id: str | None = Field(None, alias="contentId")


class Tag(Record):
    name: str
    value: str


class SendEmailRequest(Record):
    """Resend ``emails.send`` payload."""

    from_: str = Field(alias="from")
    to: str | list[str]
    subject: str
    text: str | None = None
    html: str | None = None
    cc: str | list[str] | None = None
    bcc: str | list[str] | None = None
    reply_to: str | list[str] | None = Field(None, alias="replyTo")
    headers: dict[str, str] | None = None
    attachments: list[Attachment] | None = None
    tags: list[Tag] | None = None
    scheduled_at: str | None = Field(None, alias="scheduledAt")


class SendEmailResponse(Record):
    id: str


class GetEmailResponse(Record):
    """Resend email record as returned by ``emails.get`` and ``emails.list``."""

    id: str
    object: Literal["email"] = "email"
    from_: str = Field(alias="from")
    to: list[str]
    cc: list[str] = Field(default_factory=list)
    bcc: list[str] = Field(default_factory=list)
    reply_to: list[str] = Field(default_factory=list, alias="replyTo")
    subject: str
    text: str | None = None
    html: str | None = None
    created_at: str = Field(alias="createdAt")
    scheduled_at: str | None = Field(None, alias="scheduledAt")
    last_event: str | None = Field(None, alias="lastEvent")


class ListEmailsResponse(Record):
    object: Literal["list"] = "list"
    data: list[GetEmailResponse]


class ResendError(Record):
    """Uniform error shape returned to callers instead of raising."""

    message: str
    name: str
    status_code: int | None = Field(None, alias="statusCode")


class ApiResponse(BaseModel, Generic[T]):
    """``{data, error}`` result; exactly one of the two is populated."""

    model_config = ConfigDict(frozen=True)

    data: T | None = None
    error: ResendError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        data = self.data.to_dict() if isinstance(self.data, Record) else self.data
        error = self.error.to_dict() if self.error is not None else None
        return {"data": data, "error": error}


# ---------------------------------------------------------------------------
# Resend-compatible webhook records
# ---------------------------------------------------------------------------


class WebhookAttachment(Record):
    """Attachment metadata only; webhook deliveries never carry content."""

    filename: str
    content_type: str | None = Field(None, alias="contentType")
    size: int | None = None


class WebhookEventData(Record):
    id: str
    from_: str = Field(alias="from")
    to: list[str]
    cc: list[str] = Field(default_factory=list)
    bcc: list[str] = Field(default_factory=list)
    reply_to: list[str] = Field(default_factory=list, alias="replyTo")
    subject: str
    text: str | None = None
    html: str | None = None
    created_at: str | int | None = Field(None, alias="createdAt")
    attachments: list[WebhookAttachment] | None = None


class InboundEmailEvent(Record):
    type: Literal["email.received"] = "email.received"
    created_at: str | int | None = Field(None, alias="createdAt")
    data: WebhookEventData


# ---------------------------------------------------------------------------
# Nylas wire records
# ---------------------------------------------------------------------------


class NylasAttachment(Record):
    filename: str
    content: str
    content_type: str = DEFAULT_CONTENT_TYPE
    content_id: str | None = None


class NylasSendRequest(Record):
    """Grant-based send body for ``POST /grants/{grant_id}/messages/send``."""

    subject: str
    body: str
    from_: list[Participant] | None = Field(None, alias="from")
    to: list[Participant]
    cc: list[Participant] | None = None
    bcc: list[Participant] | None = None
    reply_to: list[Participant] | None = None
    attachments: list[NylasAttachment] | None = None
    send_at: int | None = None


class NylasDomainSendRequest(Record):
    """Domain-based (transactional) send body for ``POST /domains/{domain}/messages/send``."""

    from_: Participant = Field(alias="from")
    to: list[Participant]
    cc: list[Participant] | None = None
    bcc: list[Participant] | None = None
    subject: str | None = None
    body: str | None = None
    is_plaintext: bool | None = None


class NylasMessageAttachment(Record):
    id: str | None = None
    grant_id: str | None = None
    filename: str = ""
    content_type: str | None = None
    size: int | None = None
    content_id: str | None = None
    is_inline: bool | None = None


class NylasMessage(Record):
    """Message object shared by the messages API and message.created webhooks."""

    id: str
    grant_id: str | None = None
    from_: list[Participant] = Field(default_factory=list, alias="from")
    to: list[Participant] = Field(default_factory=list)
    cc: list[Participant] | None = None
    bcc: list[Participant] | None = None
    reply_to: list[Participant] | None = None
    subject: str = ""
    body: str = ""
    date: int = 0
    thread_id: str | None = None
    snippet: str | None = None
    starred: bool | None = None
    unread: bool | None = None
    folders: list[str] | None = None
    attachments: list[NylasMessageAttachment] | None = None

    @field_validator("subject", "body", mode="before")
    @classmethod
    def _none_to_empty_str(cls, value):
        if value is None:
            return ""
        return value


class NylasMessageReference(Record):
    id: str


class NylasSendResponse(Record):
    request_id: str | None = None
    data: NylasMessage


class NylasDomainSendResponse(Record):
    request_id: str | None = None
    data: NylasMessageReference


class NylasMessageResponse(Record):
    request_id: str | None = None
    data: NylasMessage


class NylasMessagesListResponse(Record):
    request_id: str | None = None
    data: list[NylasMessage] = Field(default_factory=list)
    next_cursor: str | None = None


class NylasWebhookData(Record):
    application_id: str | None = None
    grant_id: str | None = None
    object: NylasMessage


class NylasWebhookPayload(Record):
    """CloudEvents-style envelope Nylas posts to webhook endpoints."""

    specversion: str | None = None
    type: StrictStr
    source: str | None = None
    id: str | None = None
    time: str | int | None = None
    webhook_delivery_attempt: int | None = None
    data: NylasWebhookData
