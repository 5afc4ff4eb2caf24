"""Utility helpers shared across modules."""

from __future__ import annotations

import base64
import math
from datetime import UTC, datetime


def parse_iso_datetime(value: str) -> datetime:
    """Convert ISO strings (with trailing Z) into aware UTC datetimes."""
    return ensure_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))


def ensure_utc(dt: datetime) -> datetime:
    """Force a datetime into UTC without altering instant."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def isoformat_utc(dt: datetime) -> str:
    """Return a millisecond-precision ISO string with a trailing Z."""
    return ensure_utc(dt).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def epoch_to_iso(seconds: float) -> str:
    """Render a Nylas epoch-seconds timestamp the way Resend reports dates."""
    return isoformat_utc(datetime.fromtimestamp(seconds, tz=UTC))


def iso_to_epoch(value: str) -> int | None:
    """Floor an ISO timestamp to epoch seconds; None when it cannot be parsed."""
    try:
        return math.floor(parse_iso_datetime(value).timestamp())
    except (TypeError, ValueError, OverflowError):
        return None


def to_base64(content: str | bytes | bytearray | None) -> str:
    """Pass base64 strings through and encode raw bytes."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    return base64.b64encode(bytes(content)).decode("ascii")
