"""Resend-compatible entry point."""

from __future__ import annotations

import os
from typing import Any, Mapping

import requests

from .config import Settings
from .emails import Emails
from .nylas_client import NylasClient
from .transformers import WarningSink


class Resend:
    """Drop-in stand-in for the Resend client that talks to Nylas.

    ``config`` may be a :class:`Settings`, a Resend-style mapping
    (``{"apiKey": ..., "grantId": ..., "domain": ..., "baseUrl": ...}``) or a
    bare API key, in which case ``NYLAS_GRANT_ID`` must be set in the
    environment.
    """

    def __init__(
        self,
        config: Settings | Mapping[str, Any] | str,
        *,
        session: requests.Session | None = None,
        warn: WarningSink | None = None,
    ) -> None:
        self.settings = self._resolve_settings(config)
        self.client = NylasClient(self.settings, session=session)
        self.emails = Emails(self.client, warn=warn)

    @staticmethod
    def _resolve_settings(config: Settings | Mapping[str, Any] | str) -> Settings:
        if isinstance(config, Settings):
            return config
        if isinstance(config, str):
            if not os.getenv("NYLAS_GRANT_ID"):
                raise ValueError(
                    "NYLAS_GRANT_ID environment variable is required when using string API key. "
                    "Either set the environment variable or pass a config object with "
                    "{ apiKey, grantId }."
                )
            return Settings(api_key=config)
        return Settings.from_mapping(config)

    def get_grant_id(self) -> str:
        return self.client.grant_id

    def get_base_url(self) -> str:
        return self.client.base_url

    def get_domain(self) -> str | None:
        return self.client.domain
