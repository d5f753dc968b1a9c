"""Date and time display helpers.

Every value is shown in Pacific Time so that all users see the same event
times no matter where their browser is. Inputs may be ``datetime`` objects,
ISO-8601 strings (a trailing ``Z`` is accepted) or POSIX timestamps in
seconds; naive datetimes are taken to be UTC.
"""
from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

PACIFIC_TIMEZONE = ZoneInfo("America/Los_Angeles")

Timestamp = datetime | str | int | float

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY


def _parse(value: Timestamp) -> datetime:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, UTC)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"Invalid timestamp: {value!r}") from exc
    else:
        raise TypeError(f"Unsupported timestamp type: {type(value).__name__}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def to_utc(value: Timestamp) -> datetime:
    """Aware UTC datetime; naive input is taken to be UTC already."""
    return _parse(value).astimezone(UTC)


def to_pacific_time(value: Timestamp) -> datetime:
    return _parse(value).astimezone(PACIFIC_TIMEZONE)


def _clock(dt: datetime) -> str:
    hour = dt.hour % 12 or 12
    suffix = "AM" if dt.hour < 12 else "PM"
    return f"{hour}:{dt.minute:02d} {suffix}"


def format_date(value: Timestamp) -> str:
    """``May 4, 2025``"""
    dt = to_pacific_time(value)
    return f"{dt:%b} {dt.day}, {dt.year}"


def format_time(value: Timestamp) -> str:
    """``7:30 PM``"""
    return _clock(to_pacific_time(value))


def format_date_time(value: Timestamp) -> str:
    """``May 4, 2025, 7:30 PM``"""
    dt = to_pacific_time(value)
    return f"{dt:%b} {dt.day}, {dt.year}, {_clock(dt)}"


def format_time_range(start: Timestamp, end: Timestamp) -> str:
    return f"{format_time(start)} - {format_time(end)}"


def format_event_card_date(value: Timestamp) -> str:
    """``Sun, May 4``"""
    dt = to_pacific_time(value)
    return f"{dt:%a}, {dt:%b} {dt.day}"


def format_time_ago(value: Timestamp, now: Timestamp | None = None) -> str:
    then = _parse(value)
    current = _parse(now) if now is not None else datetime.now(UTC)
    seconds = (current - then).total_seconds()
    minutes = int(seconds // _MINUTE)
    if minutes < 1:
        return "Just now"
    if seconds < _HOUR:
        return f"{minutes}m ago"
    if seconds < _DAY:
        return f"{int(seconds // _HOUR)}h ago"
    if seconds < _WEEK:
        return f"{int(seconds // _DAY)}d ago"
    return format_date(then)


def is_same_day(a: Timestamp, b: Timestamp) -> bool:
    """Calendar-day equality in Pacific Time."""
    return to_pacific_time(a).date() == to_pacific_time(b).date()


def is_today(value: Timestamp, now: Timestamp | None = None) -> bool:
    return is_same_day(value, now if now is not None else datetime.now(UTC))


def is_past_date(value: Timestamp) -> bool:
    return _parse(value) < datetime.now(UTC)


def current_iso_timestamp() -> str:
    return datetime.now(UTC).isoformat()
