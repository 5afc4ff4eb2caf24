"""Configuration management for the Nylas-backed Resend adapter."""

from __future__ import annotations

from typing import Any, Mapping

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env early so BaseSettings can pick values up seamlessly.
load_dotenv()

DEFAULT_BASE_URL = "https://api.us.nylas.com"

# Resend-style config keys accepted by Settings.from_mapping.
_CONFIG_KEYS = {
    "apiKey": "api_key",
    "grantId": "grant_id",
    "domain": "domain",
    "baseUrl": "base_url",
}


class Settings(BaseSettings):
    """Adapter configuration derived from environment variables or explicit values."""

    api_key: str = Field("", alias="NYLAS_API_KEY")
    grant_id: str = Field("", alias="NYLAS_GRANT_ID")
    domain: str | None = Field(None, alias="NYLAS_DOMAIN")
    base_url: str = Field(DEFAULT_BASE_URL, alias="NYLAS_API_URL")
    request_timeout: float = Field(30, alias="NYLAS_TIMEOUT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _validate_credentials(self):
        if not self.api_key:
            raise ValueError("apiKey is required")
        if not self.grant_id:
            raise ValueError("grantId is required")
        return self

    @field_validator("api_key", "grant_id", mode="before")
    @classmethod
    def _strip(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("domain", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @field_validator("base_url", mode="before")
    @classmethod
    def _normalize_base_url(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_BASE_URL
        if isinstance(value, str):
            return value.strip().rstrip("/")
        return value

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "Settings":
        """Build settings from a Resend-style ``{apiKey, grantId, ...}`` mapping.

        Only the mapping is consulted for these keys; NYLAS_* environment
        variables never fill gaps in an explicit config object.
        """
        if not config.get("apiKey"):
            raise ValueError("apiKey is required")
        if not config.get("grantId"):
            raise ValueError("grantId is required")
        # Blank values go through the validators (domain -> None, base_url -> default).
        values = {field_name: config.get(key) or "" for key, field_name in _CONFIG_KEYS.items()}
        for key, value in config.items():
            if key not in _CONFIG_KEYS and value is not None:
                values[key] = value
        return cls(**values)

    @property
    def has_domain(self) -> bool:
        return bool(self.domain)
