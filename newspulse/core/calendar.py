"""Calendar helpers shared by the sentiment and price series.

Weekly buckets are fixed seven-day windows counted from January 1st of each
year, not ISO weeks. ``W00`` is always Jan 1–7 and the last bucket of the
year (``W52``) is only one or two days long. Sentiment and price series must
both bucket through :func:`week_key` so their weekly points line up.
"""

from datetime import date, datetime, timezone
from typing import Any, Tuple

from newspulse.core.errors import InvalidInputError

_DAYS_PER_WEEK = 7


def parse_timestamp(value: str, record: Any = None) -> datetime:
    """Parse an ISO-8601 timestamp, keeping the offset it was written with.

    A trailing ``Z`` is read as UTC and naive values are assumed to be UTC.
    Fractions of any length up to microseconds and compact ``+HHMM`` offsets
    are accepted (Python 3.11 ``fromisoformat``).

    Args:
        value: Timestamp such as ``"2024-03-01T14:30:00Z"`` or a bare date.
        record: The record the value came from, named in the error on failure.

    Returns:
        A timezone-aware :class:`datetime`.

    Raises:
        InvalidInputError: If ``value`` is not a parseable ISO-8601 string.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"Missing or non-string timestamp: {value!r}", record=record)

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise InvalidInputError(f"Unparseable timestamp {value!r}: {exc}", record=record) from exc

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_date(value: str, record: Any = None) -> date:
    """Parse the calendar-date portion of an ISO date or datetime string.

    Raises:
        InvalidInputError: If the date portion is not ``YYYY-MM-DD``.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"Missing or non-string date: {value!r}", record=record)

    day_part = value.strip().split("T")[0]
    try:
        return date.fromisoformat(day_part)
    except ValueError as exc:
        raise InvalidInputError(f"Unparseable date {value!r}: {exc}", record=record) from exc


def week_index(day: date) -> Tuple[int, int]:
    """Return ``(year, week)`` where week counts whole 7-day spans since Jan 1."""
    start_of_year = date(day.year, 1, 1)
    return day.year, (day - start_of_year).days // _DAYS_PER_WEEK


def week_key(day: date) -> str:
    """Return the bucket key for ``day``, e.g. ``"2024-W09"``.

    >>> week_key(date(2024, 1, 8))
    '2024-W01'
    """
    year, week = week_index(day)
    return f"{year}-W{week:02d}"
