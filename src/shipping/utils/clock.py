"""UTC handling for domain timestamps.

Every timestamp held by a value object or aggregate is timezone-aware. Values
that reach a command handler or the handling factory without a timezone are
taken to be UTC already.
"""

from datetime import UTC, datetime


def as_utc(value: datetime | str | None) -> datetime | None:
    """Return ``value`` as an aware UTC datetime. ISO strings are parsed first."""
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def is_naive(value) -> bool:
    return isinstance(value, datetime) and value.utcoffset() is None
