"""Resend-compatible ``emails`` namespace backed by Nylas."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from .models import (
    ApiResponse,
    GetEmailResponse,
    ListEmailsResponse,
    NylasDomainSendRequest,
    ResendError,
    SendEmailRequest,
    SendEmailResponse,
)
from .nylas_client import NylasClient, NylasRequestError
from .transformers import (
    WarningSink,
    build_send_request,
    coerce_send_request,
    transform_domain_send_response,
    transform_message_to_email,
    transform_send_response,
)

logger = logging.getLogger(__name__)

VALIDATION_ERROR = "validation_error"


def to_resend_error(exc: BaseException) -> ResendError:
    """Map anything raised during a call into the uniform Resend error shape."""
    if isinstance(exc, NylasRequestError):
        return ResendError(
            message=exc.message,
            name=exc.error_type or "api_error",
            status_code=exc.status_code,
        )
    message = str(exc) or type(exc).__name__
    return ResendError(message=message, name=type(exc).__name__)


def _validation_error(message: str) -> ApiResponse:
    return ApiResponse(error=ResendError(message=message, name=VALIDATION_ERROR))


def _missing_field(request: SendEmailRequest | Mapping[str, Any]) -> str | None:
    if isinstance(request, SendEmailRequest):
        values = {"from": request.from_, "to": request.to, "subject": request.subject}
    else:
        values = request
    for field in ("from", "to", "subject"):
        value = values.get(field)
        if not value:
            return field
    return None


class Emails:
    """Send, get and list emails with Resend's call shapes."""

    def __init__(self, client: NylasClient, warn: WarningSink | None = None) -> None:
        self.client = client
        self.warn = warn

    def send(self, request: SendEmailRequest | Mapping[str, Any]) -> ApiResponse[SendEmailResponse]:
        """Send an email.

        Uses domain-based send when a Nylas domain is configured, otherwise
        grant-based send through the connected mailbox.
        """
        try:
            missing = _missing_field(request)
            if missing:
                return _validation_error(f"Missing required field: {missing}")

            try:
                request = coerce_send_request(request)
            except ValidationError as exc:
                return _validation_error(str(exc))

            nylas_request = build_send_request(
                request, domain_based=self.client.has_domain(), warn=self.warn
            )
            if isinstance(nylas_request, NylasDomainSendRequest):
                response = transform_domain_send_response(
                    self.client.send_domain_message(nylas_request)
                )
            else:
                response = transform_send_response(self.client.send_message(nylas_request))
            logger.info("Sent email %s", response.id)
            return ApiResponse(data=response)
        except Exception as exc:
            logger.debug("emails.send failed", exc_info=True)
            return ApiResponse(error=to_resend_error(exc))

    def get(self, email_id: str) -> ApiResponse[GetEmailResponse]:
        try:
            if not email_id:
                return _validation_error("Missing required parameter: emailId")
            response = self.client.get_message(email_id)
            return ApiResponse(data=transform_message_to_email(response.data))
        except Exception as exc:
            logger.debug("emails.get failed", exc_info=True)
            return ApiResponse(error=to_resend_error(exc))

    def list(self, limit: int | None = None) -> ApiResponse[ListEmailsResponse]:
        try:
            response = self.client.list_messages(limit=limit)
            emails = [transform_message_to_email(message) for message in response.data]
            return ApiResponse(data=ListEmailsResponse(data=emails))
        except Exception as exc:
            logger.debug("emails.list failed", exc_info=True)
            return ApiResponse(error=to_resend_error(exc))
