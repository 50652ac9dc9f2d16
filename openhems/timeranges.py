"""Daily hour ranges with a cost, used to tell off-peak from peak hours.

Datetimes are naive local datetimes.
"""

import math
import re
from dataclasses import dataclass
from datetime import datetime, time, timedelta

from .errors import OpenHemsError

SECONDS_PER_DAY = 24 * 3600
MIN_DATETIME = datetime(1970, 1, 1)

_ISO_TIME = re.compile(r"(\d{2}):?(\d{2})")
_HOUR_MIN_SEC = re.compile(r"^(\d+)[:h](\d+)[:m](\d+)s?$")
_HOUR_MIN = re.compile(r"^(\d+)[:h](\d+)m?$")
_HOUR = re.compile(r"^(\d+)h?$")


def _seconds(value):
    return value.hour * 3600 + value.minute * 60 + value.second


def _make_time(values, text):
    hour, minute, second = (list(values) + [0, 0])[:3]
    try:
        return time(int(hour), int(minute), int(second))
    except ValueError as err:
        raise OpenHemsError(f"Invalid time '{text}'") from err


def parse_time(text):
    """Parse times such as '22h', '6', '22h30', '1h2m3', '22:30' or '0630'."""
    if not isinstance(text, str):
        raise OpenHemsError(f"Fail parse {text!r}")
    match = _ISO_TIME.match(text)
    if match:
        # ISO form: seconds are ignored.
        return _make_time(match.groups(), text)
    for pattern in (_HOUR_MIN_SEC, _HOUR_MIN, _HOUR):
        match = pattern.match(text)
        if match:
            return _make_time(match.groups(), text)
    raise OpenHemsError(f"Fail parse {text}")


def time_to_wait(start, end):
    """Seconds from clock time start to the next occurrence of end."""
    return (_seconds(end) - _seconds(start)) % SECONDS_PER_DAY


def time_to_datetime(time_, now):
    """Return the next datetime at or after now whose clock time is time_."""
    return now + timedelta(seconds=time_to_wait(now.time(), time_))


def _split_range(text):
    if "-" not in text:
        return None
    first, *rest = text.split("-")
    start = parse_time(first)
    end = None
    for part in rest:
        end = parse_time(part)
    return start, end


def _cost(value, default_cost):
    if isinstance(value, bool):
        return default_cost
    if isinstance(value, (int, float)):
        return float(value)
    return default_cost


@dataclass(frozen=True)
class HoursRange:
    """A daily range of hours with a cost; end may be before start (overnight)."""

    start: time
    end: time
    cost: float

    @staticmethod
    def from_config(config, default_cost):
        """Build a range from 'start-end', [\"start-end\", cost] or [start, end, cost]."""
        missing = OpenHemsError("HoursRange : Missing something.")
        if isinstance(config, str):
            bounds = _split_range(config)
            if bounds is None:
                raise missing
            return HoursRange(bounds[0], bounds[1], default_cost)
        if isinstance(config, (list, tuple)):
            if not config:
                raise missing
            first = config[0]
            bounds = _split_range(first) if isinstance(first, str) else None
            if bounds is not None:
                cost = _cost(config[1], default_cost) if len(config) == 2 else default_cost
                return HoursRange(bounds[0], bounds[1], cost)
            if len(config) >= 2 and isinstance(config[1], str):
                start = parse_time(first) if isinstance(first, str) else time(0)
                end = parse_time(config[1])
                cost = _cost(config[2], default_cost) if len(config) == 3 else default_cost
                return HoursRange(start, end, cost)
            raise missing
        raise OpenHemsError("HoursRange : Invalid configuration")

    def get_end(self, now):
        """Next datetime at which this range ends."""
        return time_to_datetime(self.end, now)

    def get_start(self, now):
        """Last datetime at or before now at which this range started."""
        return now - timedelta(seconds=time_to_wait(self.start, now.time()))


def _format_time(value):
    return f"{value.hour}h{value.minute}"


class HoursRanges:
    """A full day split into cost ranges, gaps filled with the out-of-range cost."""

    def __init__(self, ranges, time_start=None, timeout=None,
                 timeout_callback=None, outrange_cost=1.0):
        self.time_start = time_start
        self.timeout = timeout
        self.timeout_callback = timeout_callback
        self.min_cost = math.inf
        self.ranges = self._fill_ranges(list(ranges), outrange_cost)

    @staticmethod
    def from_config(hoursranges_list, time_start=None, timeout=None,
                    timeout_callback=None, default_cost=0.0, outrange_cost=1.0):
        """Build ranges from a single range string or a list of range configs."""
        if isinstance(hoursranges_list, str):
            ranges = [HoursRange.from_config(hoursranges_list, default_cost)]
        elif isinstance(hoursranges_list, (list, tuple)):
            ranges = [HoursRange.from_config(item, default_cost) for item in hoursranges_list]
        else:
            ranges = []
        return HoursRanges(ranges, time_start, timeout, timeout_callback, outrange_cost)

    def _fill_ranges(self, ranges, outrange_cost):
        if not ranges:
            return []
        ranges.sort(key=lambda r: _seconds(r.start))
        first_begin = ranges[0].end
        last_end = ranges[-1].end
        added = []
        for hours_range in ranges:
            if _seconds(last_end) < _seconds(hours_range.start):
                added.append(HoursRange(last_end, hours_range.start, outrange_cost))
            elif _seconds(hours_range.start) < _seconds(last_end):
                raise OpenHemsError(
                    f"HoursRanges : ranges are crossing : {hours_range.start} < {last_end}"
                )
            self.min_cost = min(self.min_cost, hours_range.cost)
            last_end = hours_range.end
        if _seconds(last_end) != _seconds(first_begin):
            ranges.append(HoursRange(last_end, first_begin, outrange_cost))
        ranges.extend(added)
        ranges.sort(key=lambda r: _seconds(r.start))
        return ranges

    def is_offpeak(self, range_):
        """True when the range has the lowest configured cost."""
        return self.min_cost == range_.cost

    def check_range(self, now):
        """Return the range containing now: the one whose end comes soonest."""
        if not self.ranges:
            raise OpenHemsError("HoursRanges : no range defined.")
        if self.time_start is not None and now < self.time_start:
            raise OpenHemsError("HoursRanges : not started yet.")
        if self.timeout is not None and now > self.timeout and self.timeout_callback is not None:
            self.timeout_callback()
        now_time = now.time()
        return min(self.ranges, key=lambda r: time_to_wait(now_time, r.end))

    def __str__(self):
        if not self.ranges:
            return "HoursRanges()"
        parts = "".join(f", {_format_time(r.start)} ${r.cost:g}" for r in self.ranges)
        return f"HoursRanges({parts}{_format_time(self.ranges[-1].end)})"

    def __repr__(self):
        return f"HoursRanges({self.ranges!r})"