from datetime import datetime, time

import pytest

from openhems.errors import OpenHemsError
from openhems.timeranges import (
    HoursRange,
    HoursRanges,
    parse_time,
    time_to_datetime,
    time_to_wait,
)


def test_time_hoursranges():
    ranges = HoursRanges.from_config(["22h-6h"], None, None, None, 0.0, 1.0)
    now = datetime(2025, 4, 28, 9, 10, 11, 12000)
    current = ranges.check_range(now)
    assert ranges.is_offpeak(current) is False


def test_offpeak_at_night():
    ranges = HoursRanges.from_config(["22h-6h"], None, None, None, 0.0, 1.0)
    current = ranges.check_range(datetime(2025, 4, 28, 23, 0))
    assert current == HoursRange(time(22), time(6), 0.0)
    assert ranges.is_offpeak(current) is True


def test_gap_is_filled_with_outrange_cost():
    ranges = HoursRanges.from_config(["22h-6h"], None, None, None, 0.0, 1.0)
    assert ranges.ranges == [
        HoursRange(time(6), time(22), 1.0),
        HoursRange(time(22), time(6), 0.0),
    ]
    assert ranges.min_cost == 0.0


def test_single_string_config():
    ranges = HoursRanges.from_config("22h-6h", default_cost=0.1, outrange_cost=1.0)
    assert len(ranges.ranges) == 2
    assert ranges.min_cost == pytest.approx(0.1)


def test_non_list_config_gives_no_ranges():
    ranges = HoursRanges.from_config(None)
    assert ranges.ranges == []
    with pytest.raises(OpenHemsError):
        ranges.check_range(datetime(2025, 1, 1, 12, 0))


def test_crossing_ranges_raise():
    with pytest.raises(OpenHemsError):
        HoursRanges.from_config(["1h-5h", "3h-7h"])


def test_check_range_before_start_raises():
    ranges = HoursRanges.from_config(
        ["22h-6h"], time_start=datetime(2025, 5, 1, 0, 0)
    )
    with pytest.raises(OpenHemsError):
        ranges.check_range(datetime(2025, 4, 30, 12, 0))


def test_timeout_calls_callback():
    calls = []
    ranges = HoursRanges.from_config(
        ["22h-6h"], timeout=datetime(2025, 4, 1), timeout_callback=lambda: calls.append(1)
    )
    ranges.check_range(datetime(2025, 4, 2, 12, 0))
    assert calls == [1]
    ranges.check_range(datetime(2025, 3, 2, 12, 0))
    assert calls == [1]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("22h", time(22)),
        ("6h", time(6)),
        ("6", time(6)),
        ("22:30", time(22, 30)),
        ("0630", time(6, 30)),
        ("22:30:15", time(22, 30)),
        ("22h30", time(22, 30)),
        ("6:05", time(6, 5)),
        ("1h2m3", time(1, 2, 3)),
    ],
)
def test_parse_time(text, expected):
    assert parse_time(text) == expected


@pytest.mark.parametrize("text", ["abc", "", "25h", "2599", "h6"])
def test_parse_time_invalid(text):
    with pytest.raises(OpenHemsError):
        parse_time(text)


def test_parse_time_rejects_non_string():
    with pytest.raises(OpenHemsError):
        parse_time(22)


def test_time_to_wait():
    assert time_to_wait(time(22), time(6)) == 8 * 3600
    assert time_to_wait(time(6), time(6)) == 0


@pytest.mark.parametrize("a, b", [(time(10), time(2)), (time(1, 30), time(23, 59, 59))])
def test_time_to_wait_sums_to_a_day(a, b):
    assert time_to_wait(a, b) + time_to_wait(b, a) == 24 * 3600


def test_time_to_datetime_next_day():
    assert time_to_datetime(time(6), datetime(2025, 4, 28, 22, 0)) == datetime(2025, 4, 29, 6, 0)


def test_time_to_datetime_same_day():
    assert time_to_datetime(time(22), datetime(2025, 4, 28, 9, 0)) == datetime(2025, 4, 28, 22, 0)


def test_hoursrange_from_string():
    assert HoursRange.from_config("22h-6h", 0.5) == HoursRange(time(22), time(6), 0.5)


def test_hoursrange_from_list_with_cost():
    assert HoursRange.from_config(["22h-6h", 0.2], 0.5) == HoursRange(time(22), time(6), 0.2)


def test_hoursrange_from_start_end_cost():
    assert HoursRange.from_config(["22h", "6h", 3], 0.5) == HoursRange(time(22), time(6), 3.0)
    assert HoursRange.from_config(["22h", "6h"], 0.5) == HoursRange(time(22), time(6), 0.5)


def test_hoursrange_non_numeric_cost_uses_default():
    assert HoursRange.from_config(["22h-6h", "cheap"], 0.5).cost == 0.5


@pytest.mark.parametrize("config", ["22h", [], ["22h"], 42, {"a": 1}])
def test_hoursrange_invalid(config):
    with pytest.raises(OpenHemsError):
        HoursRange.from_config(config, 0.5)


def test_hoursrange_get_end_and_start():
    hours_range = HoursRange(time(22), time(6), 0.0)
    now = datetime(2025, 4, 28, 23, 0)
    assert hours_range.get_end(now) == datetime(2025, 4, 29, 6, 0)
    assert hours_range.get_start(now) == datetime(2025, 4, 28, 22, 0)