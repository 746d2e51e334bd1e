"""Timestamp utilities."""

from datetime import datetime, timezone


def now() -> str:
    """Current UTC time as an ISO 8601 string with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def session_stamp() -> str:
    """Compact local timestamp for naming log directories (e.g. 20251114_123456)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")
