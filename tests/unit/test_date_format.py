from datetime import UTC, datetime, timedelta

import pytest

from src.domain.services.date_format import (
    current_iso_timestamp,
    format_date,
    format_date_time,
    format_event_card_date,
    format_time,
    format_time_ago,
    format_time_range,
    is_past_date,
    is_same_day,
    is_today,
    to_pacific_time,
)

# 12:30 PM on Sunday May 4 2025 in Pacific (daylight) time
SHOW = "2025-05-04T19:30:00Z"


def test_formats_in_pacific_time():
    assert format_time(SHOW) == "12:30 PM"
    assert format_date(SHOW) == "May 4, 2025"
    assert format_date_time(SHOW) == "May 4, 2025, 12:30 PM"
    assert format_event_card_date(SHOW) == "Sun, May 4"


def test_accepts_datetimes_strings_and_epoch():
    aware = datetime(2025, 5, 4, 19, 30, tzinfo=UTC)
    naive = datetime(2025, 5, 4, 19, 30)
    assert format_time(aware) == format_time(naive) == format_time(SHOW)
    assert format_time("2025-05-04T12:30:00-07:00") == "12:30 PM"
    assert format_date(0) == "Dec 31, 1969"


def test_midnight_and_noon():
    assert format_time("2025-01-15T08:00:00Z") == "12:00 AM"
    assert format_time("2025-01-15T20:00:00Z") == "12:00 PM"
    assert format_time("2025-01-15T20:05:00Z") == "12:05 PM"


def test_invalid_timestamp_raises():
    with pytest.raises(ValueError):
        format_time("not a date")


@pytest.mark.parametrize(
    "start,end",
    [
        (SHOW, "2025-05-04T22:00:00Z"),
        ("2025-01-15T08:00:00Z", "2025-01-15T20:00:00Z"),
        (datetime(2024, 12, 31, 23, 59, tzinfo=UTC), datetime(2025, 1, 1, 3, 0, tzinfo=UTC)),
    ],
)
def test_time_range_is_two_times_joined_by_a_dash(start, end):
    assert format_time_range(start, end) == f"{format_time(start)} - {format_time(end)}"


def test_is_today_uses_the_pacific_calendar_day():
    # 03:00 UTC on May 5 is still the evening of May 4 in California
    late_show = "2025-05-05T03:00:00Z"
    assert is_today(late_show, now="2025-05-04T20:00:00Z")
    # same UTC day, different Pacific day
    assert not is_today(late_show, now="2025-05-05T12:00:00Z")
    assert is_same_day(late_show, "2025-05-04T08:00:00Z")


def test_to_pacific_time_handles_dst():
    assert to_pacific_time("2025-01-15T20:00:00Z").utcoffset() == timedelta(hours=-8)
    assert to_pacific_time(SHOW).utcoffset() == timedelta(hours=-7)


@pytest.mark.parametrize(
    "elapsed,expected",
    [
        (timedelta(seconds=0), "Just now"),
        (timedelta(seconds=59), "Just now"),
        (timedelta(seconds=60), "1m ago"),
        (timedelta(minutes=59, seconds=59), "59m ago"),
        (timedelta(minutes=60), "1h ago"),
        (timedelta(hours=23, minutes=59), "23h ago"),
        (timedelta(hours=24), "1d ago"),
        (timedelta(days=6, hours=23), "6d ago"),
    ],
)
def test_time_ago_thresholds(elapsed, expected):
    now = datetime(2025, 5, 4, 12, 0, tzinfo=UTC)
    assert format_time_ago(now - elapsed, now=now) == expected


def test_time_ago_falls_back_to_date_after_a_week():
    now = datetime(2025, 5, 4, 12, 0, tzinfo=UTC)
    assert format_time_ago(now - timedelta(days=7), now=now) == "Apr 27, 2025"


def test_current_iso_timestamp_is_aware_utc():
    parsed = datetime.fromisoformat(current_iso_timestamp())
    assert parsed.utcoffset() == timedelta(0)


def test_is_past_date():
    assert is_past_date(SHOW)
    assert not is_past_date(datetime.now(UTC) + timedelta(days=1))
