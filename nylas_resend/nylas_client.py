"""Nylas v3 HTTP helper focused on sending and reading messages."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests
from requests import Response

from .config import Settings
from .models import (
    NylasDomainSendRequest,
    NylasDomainSendResponse,
    NylasMessageResponse,
    NylasMessagesListResponse,
    NylasSendRequest,
    NylasSendResponse,
)

logger = logging.getLogger(__name__)

API_VERSION = "v3"


class NylasRequestError(Exception):
    """Nylas answered with an error status or a body that is not JSON."""

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.request_id = request_id


class NylasClient:
    """Thin wrapper that authenticates with Nylas and exchanges typed records."""

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()
        self.base_url = settings.base_url.rstrip("/")

    @property
    def grant_id(self) -> str:
        return self.settings.grant_id

    @property
    def domain(self) -> str | None:
        return self.settings.domain

    def has_domain(self) -> bool:
        return self.settings.has_domain

    def send_message(self, request: NylasSendRequest) -> NylasSendResponse:
        """Send through the connected mailbox identity (grant)."""
        payload = self._request("POST", f"{self._grant_path()}/messages/send", body=request.to_dict())
        return NylasSendResponse.model_validate(payload)

    def send_domain_message(self, request: NylasDomainSendRequest) -> NylasDomainSendResponse:
        """Send a transactional message from the configured domain."""
        if not self.domain:
            raise ValueError(
                "Domain is required for sending transactional emails. Set the domain option in config."
            )
        path = f"/domains/{quote(self.domain)}/messages/send"
        payload = self._request("POST", path, body=request.to_dict())
        return NylasDomainSendResponse.model_validate(payload)

    def get_message(self, message_id: str) -> NylasMessageResponse:
        path = f"{self._grant_path()}/messages/{quote(message_id, safe='')}"
        return NylasMessageResponse.model_validate(self._request("GET", path))

    def list_messages(
        self, limit: int | None = None, page_token: str | None = None
    ) -> NylasMessagesListResponse:
        params: dict[str, Any] = {}
        if limit:
            params["limit"] = str(limit)
        if page_token:
            params["page_token"] = page_token
        payload = self._request("GET", f"{self._grant_path()}/messages", params=params or None)
        return NylasMessagesListResponse.model_validate(payload)

    def _request(
        self,
        method: str,
        path: str,
        body: dict | None = None,
        params: dict | None = None,
    ) -> Any:
        url = f"{self.base_url}/{API_VERSION}{path}"
        headers = {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Accept": "application/json",
        }
        if body is not None:
            headers["Content-Type"] = "application/json"

        logger.debug("Nylas %s %s", method, url)
        resp = self.session.request(
            method,
            url,
            headers=headers,
            json=body,
            params=params,
            timeout=self.settings.request_timeout,
        )
        payload = self._parse_response_body(resp)

        if resp.status_code >= 400:
            logger.error("Nylas request failed (%s): %s", resp.status_code, resp.text)
            error = payload.get("error") if isinstance(payload, dict) else None
            error = error if isinstance(error, dict) else {}
            raise NylasRequestError(
                error.get("message") or f"Request failed with status {resp.status_code}",
                resp.status_code,
                error.get("type"),
                payload.get("request_id") if isinstance(payload, dict) else None,
            )
        return payload

    @staticmethod
    def _parse_response_body(response: Response) -> Any:
        try:
            return response.json()
        except ValueError:
            raise NylasRequestError(
                f"Invalid JSON response: {response.text[:100]}", response.status_code
            ) from None

    def _grant_path(self) -> str:
        return f"/grants/{quote(self.grant_id, safe='')}"
