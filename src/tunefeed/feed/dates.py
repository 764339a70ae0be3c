"""RFC-822 date handling for feed dates."""

from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime


def format_rfc822(value: datetime) -> str:
    """Format a datetime as an RFC-822 date in GMT.

    Naive datetimes are taken to be UTC.

    Examples:
        >>> format_rfc822(datetime(2024, 1, 5, 12, 0, tzinfo=timezone.utc))
        'Fri, 05 Jan 2024 12:00:00 GMT'
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def parse_rfc822(text: str | None) -> datetime | None:
    """Parse an RFC-822 date, returning None if it can't be parsed."""
    if not text or not text.strip():
        return None
    try:
        parsed = parsedate_to_datetime(text.strip())
    except (TypeError, ValueError, IndexError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
