"""Per-device schedule: how long a device must still run, and its deadline."""

import logging
from datetime import datetime

from .errors import OpenHemsError
from .timeranges import MIN_DATETIME, time_to_datetime

log = logging.getLogger(__name__)

DATE_FORMAT = "%d/%m/%Y"
MAX_NAME_LENGTH = 16


def _json_duration(value):
    """Return a 32-bit integer duration from a JSON number, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if not isinstance(value, int) or not -(2**31) <= value < 2**31:
        return None
    # Negative values wrap around like an unsigned 32-bit integer.
    return value % 2**32


class Schedule:
    """Remaining run duration (seconds) of a device and the time it must end by."""

    def __init__(self, nameid):
        if len(nameid.encode("utf-8")) > MAX_NAME_LENGTH:
            raise OpenHemsError(f"Schedule name '{nameid}' is too long (Limit is 16).")
        self.nameid = nameid
        self.duration = 0
        self.timeout = datetime.now()

    def decrement_time(self, duration):
        """Consume duration seconds; return True if some time is still left."""
        log.debug("Schedule::decrement_time(%s)", duration)
        if self.duration <= 0:
            return False
        if duration >= self.duration:
            self.duration = 0
            return False
        self.duration -= duration
        log.debug("Schedule::decrement_time() last %s seconds", self.duration)
        return True

    def to_json(self):
        """Serialise as the JSON object used by the web panel."""
        return (
            f'{{"name":"{self.nameid}", "duration":{self.duration}, '
            f'"date":"{self.timeout.strftime(DATE_FORMAT)}", '
            f'"timeout":"{self.timeout.strftime("%H:%M")}"}}'
        )

    def update_from_json(self, schedule_json):
        """Update from a decoded JSON object with 'duration' and/or 'timeout' (HH:MM)."""
        if not isinstance(schedule_json, dict):
            return
        updated = False
        duration = 0
        timeout = MIN_DATETIME
        if "duration" in schedule_json:
            value = _json_duration(schedule_json["duration"])
            if value is not None:
                duration = value
                updated = True
        deadline = schedule_json.get("timeout")
        if isinstance(deadline, str):
            try:
                clock = datetime.strptime(deadline, "%H:%M").time()
            except ValueError:
                clock = None
            if clock is not None:
                timeout = time_to_datetime(clock, datetime.now())
                updated = True
        if not updated:
            raise OpenHemsError(f"Error parsing Schedule json : {schedule_json}")
        self.duration = duration
        self.timeout = timeout

    def is_scheduled(self):
        """True while the device still has run time left."""
        if self.duration > 0:
            log.debug("Schedule::is_scheduled() for %s seconds", self.duration)
            return True
        return False

    def __repr__(self):
        return f"Schedule({self.nameid!r}, duration={self.duration}, timeout={self.timeout})"