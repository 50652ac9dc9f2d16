"""State shared with the web panel: the schedules of every switch."""

import json
import logging
import threading

from .errors import OpenHemsError

log = logging.getLogger(__name__)

MAX_SIZE = 262_144


class AppState:
    """Schedules by node id, guarded for use from the web thread."""

    def __init__(self):
        self.schedules = {}
        self._lock = threading.RLock()

    def decrement_time(self, duration):
        """Consume duration seconds on every schedule."""
        log.debug("AppState::decrement_time() for %s seconds", duration)
        with self._lock:
            for schedule in self.schedules.values():
                schedule.decrement_time(duration)
        return True

    def nodes_json(self):
        """JSON object mapping node ids to their schedule."""
        with self._lock:
            items = ",".join(
                f'"{key}":{schedule.to_json()}' for key, schedule in self.schedules.items()
            )
        return "{" + items + "}"

    def apply_states(self, body):
        """Apply a JSON request body of schedules; return the resulting nodes JSON."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        if len(body) > MAX_SIZE:
            raise OpenHemsError("overflow")
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as err:
            raise OpenHemsError("Invalid UTF-8.") from err
        log.debug("Received body: %s", text)
        try:
            values = json.loads(text)
        except ValueError as err:
            raise OpenHemsError("Invalid JSON.") from err
        with self._lock:
            if isinstance(values, dict):
                for key, schedule_json in values.items():
                    schedule = self.schedules.get(key)
                    if schedule is None:
                        continue
                    try:
                        schedule.update_from_json(schedule_json)
                    except OpenHemsError as err:
                        raise OpenHemsError("Invalid schedule object.") from err
            return self.nodes_json()