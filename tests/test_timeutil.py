from datetime import datetime, timedelta

import pytest

from rhclock.timeutil import format_duration, format_time


def test_format_time_worked_example():
    text, moment = format_time("2025-01-15T00:00:00Z", 3661000)
    assert text == "15/01/2025 01:01:01"
    assert moment == datetime(2025, 1, 15, 1, 1, 1)


@pytest.mark.parametrize("millis", [0, 1000, 45_296_000, 86_399_000])
def test_format_time_adds_offset_to_midnight(millis):
    text, moment = format_time("2025-01-15T00:00:00Z", millis)
    assert moment == datetime(2025, 1, 15) + timedelta(milliseconds=millis)
    assert text == moment.strftime("%d/%m/%Y %H:%M:%S")


def test_format_time_uses_calendar_day_of_timestamp_with_offset():
    _, moment = format_time("2025-01-10T23:30:00-03:00", 0)
    assert moment == datetime(2025, 1, 10)


def test_format_time_accepts_fractional_seconds():
    _, moment = format_time("2025-01-20T12:34:56.789Z", 0)
    assert moment.date() == datetime(2025, 1, 20).date()


@pytest.mark.parametrize(
    "value",
    ["", "2025-01-15", "2025-01-15 00:00:00Z", "2025-13-01T00:00:00Z", "garbage", "2025-01-15T00:00:00"],
)
def test_format_time_rejects_invalid_timestamps(value):
    with pytest.raises(ValueError):
        format_time(value, 0)


def test_format_duration_zero():
    assert format_duration(0) == "0s"


def test_format_duration_fraction():
    assert format_duration(1500) == "1.5s"


@pytest.mark.parametrize("millis", [1, 250, 999])
def test_format_duration_sub_second(millis):
    assert format_duration(millis) == f"{millis}ms"


@pytest.mark.parametrize("seconds", [1, 7, 59])
def test_format_duration_whole_seconds(seconds):
    assert format_duration(seconds * 1000) == f"{seconds}s"


@pytest.mark.parametrize("hours", [1, 3, 40])
def test_format_duration_whole_hours(hours):
    assert format_duration(hours * 3_600_000) == f"{hours}h0m0s"


@pytest.mark.parametrize("minutes", [1, 5, 59])
def test_format_duration_whole_minutes(minutes):
    assert format_duration(minutes * 60_000) == f"{minutes}m0s"


@pytest.mark.parametrize("millis", [1, 999, 1500, 90_000, 3_600_000, 5_025_125])
def test_format_duration_negative_is_prefixed(millis):
    assert format_duration(-millis) == "-" + format_duration(millis)