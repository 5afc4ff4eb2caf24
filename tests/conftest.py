"""
Shared pytest fixtures for the adapter tests.

No test touches the network: the requests session is always a MagicMock.
"""

import json
from unittest.mock import MagicMock

import pytest

from nylas_resend.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer NYLAS_* variables from leaking into tests."""
    for name in ("NYLAS_API_KEY", "NYLAS_GRANT_ID", "NYLAS_DOMAIN", "NYLAS_API_URL", "NYLAS_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    return Settings(api_key="test-api-key", grant_id="grant-123")


@pytest.fixture
def domain_settings():
    return Settings(api_key="test-api-key", grant_id="grant-123", domain="acme.nylas.email")


def make_response(payload=None, status_code: int = 200, text: str | None = None):
    """Build a fake requests.Response carrying a JSON payload (or raw text)."""
    response = MagicMock()
    response.status_code = status_code
    if text is None:
        response.text = json.dumps(payload)
        response.json.return_value = payload
    else:
        response.text = text
        response.json.side_effect = ValueError("not json")
    return response


@pytest.fixture
def session():
    mock_session = MagicMock()
    mock_session.request.return_value = make_response({"request_id": "req-1", "data": {"id": "msg-1"}})
    return mock_session


def make_nylas_message(**overrides) -> dict:
    """Minimal Nylas message object as the API returns it."""
    message = {
        "id": "msg-1",
        "grant_id": "grant-123",
        "from": [{"name": "Alice", "email": "alice@example.com"}],
        "to": [{"name": "Bob", "email": "bob@example.com"}],
        "subject": "Hello",
        "body": "<p>Hi Bob</p>",
        "date": 1700000000,
    }
    message.update(overrides)
    return message
