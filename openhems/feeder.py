"""Value feeders: constants, or entity states read from a home-state source.

A source provides register_entity(entity_id), get_cycle_id(),
get_entity_value_int/float/str/bool(entity_id) and switch(entity_id, on).
"""

from .errors import OpenHemsError

MAX_ENTITY_ID_LENGTH = 64

_READERS = {
    int: "get_entity_value_int",
    float: "get_entity_value_float",
    str: "get_entity_value_str",
    bool: "get_entity_value_bool",
}

_DEFAULTS = {int: 0, float: 0.0, str: "", bool: True}


class ConstFeeder:
    """Feeder that always gives the same value."""

    def __init__(self, value):
        self.value = value

    def get_value(self):
        return self.value

    def __repr__(self):
        return f"ConstFeeder({self.value!r})"


class SourceFeeder:
    """Feeder reading an entity's state, refreshed on each source cycle."""

    def __init__(self, source, entity_id, kind):
        if kind not in _READERS:
            raise OpenHemsError(f"Unsupported feeder type {kind!r}")
        if len(entity_id.encode("utf-8")) > MAX_ENTITY_ID_LENGTH:
            raise OpenHemsError(
                f"Entity id '{entity_id}' is too long : limit is {MAX_ENTITY_ID_LENGTH}"
            )
        source.register_entity(entity_id)
        self.nameid = entity_id
        self.source = source
        self.kind = kind
        self.cycle_id = 0
        self.value = _DEFAULTS[kind]

    def get_value(self):
        """Return the entity value, reading it again when the source cycle advanced."""
        current = self.source.get_cycle_id()
        if self.cycle_id <= current:
            reader = getattr(self.source, _READERS[self.kind])
            self.value = reader(self.nameid)
            self.cycle_id = current
        return self.value

    def switch(self, on):
        """Ask the source to switch the entity on or off."""
        return self.source.switch(self.nameid, on)

    def __repr__(self):
        return f"SourceFeeder({self.nameid!r}, {self.kind.__name__})"