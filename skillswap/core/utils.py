"""
Small helpers shared by the persistence layer.
"""

from datetime import datetime, timedelta, timezone
import uuid


def new_id() -> str:
    """Collision-resistant record identifier."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def from_iso(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp. A trailing "Z" (as written by JavaScript's
    toISOString) is accepted; naive values are read as UTC.
    """
    raw = (value or "").strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def later_than(previous: datetime, now: datetime) -> datetime:
    """Return now, or the smallest instant strictly after previous when the clock has not advanced."""
    if now > previous:
        return now
    return previous + timedelta(microseconds=1)
