"""Electrical nodes of the home network: switches, grid and solar panels."""

import logging
from enum import Enum

from .errors import OpenHemsError
from .feeder import SourceFeeder
from .schedule import Schedule
from .timeranges import MIN_DATETIME

log = logging.getLogger(__name__)

MAX_ID_LENGTH = 16


class NodeType(Enum):
    NODE_BASE = "NodeBase"
    SWITCH = "Switch"
    PUBLIC_POWER_GRID = "PublicPowerGrid"
    SOLAR_PANEL = "SolarPanel"

    def __str__(self):
        return self.value


def _too_long(text):
    return len(text.encode("utf-8")) > MAX_ID_LENGTH


class NodeBase:
    """Common node data: id, power limits and feeders for power and on-state."""

    node_type = NodeType.NODE_BASE

    def __init__(self, nameid, max_power, min_power, current_power, is_on):
        if _too_long(nameid):
            raise OpenHemsError(f"'id' is to long (Limit is 16) for node {nameid}.")
        self.id = nameid
        self.max_power = max_power
        self.min_power = min_power
        self.current_power = current_power
        self.is_on_feeder = is_on
        self.is_activate = True

    def get_current_power(self):
        return self.current_power.get_value()

    def is_on(self):
        return self.is_on_feeder.get_value()

    def __str__(self):
        return f"{self.node_type}({self.id})"

    def __repr__(self):
        return (
            f"id:{self.id}, maxPower:{self.max_power}, minPower:{self.min_power}, "
            f"activ:{self.is_activate}"
        )


class _OutNode:
    """A specialised node built around a NodeBase."""

    node_type = NodeType.NODE_BASE

    def __init__(self, node):
        self.node = node

    @property
    def id(self):
        return self.node.id

    @property
    def max_power(self):
        return self.node.max_power

    @property
    def min_power(self):
        return self.node.min_power

    @property
    def is_activate(self):
        return self.node.is_activate

    def get_current_power(self):
        return self.node.get_current_power()

    def is_on(self):
        return self.node.is_on()

    def __str__(self):
        return f"{self.node_type}({self.id})"

    def __repr__(self):
        return f"{self.node_type}({self.node!r})"


class Switch(_OutNode):
    """A switchable device with a priority, a strategy and a schedule."""

    node_type = NodeType.SWITCH

    def __init__(self, node, priority, strategy_nameid, appstate):
        if _too_long(strategy_nameid):
            raise OpenHemsError("Strategy is to long (Limit is 16)")
        super().__init__(node)
        self.priority = priority
        self.strategy_nameid = strategy_nameid
        self.schedule = Schedule(node.id)
        appstate.schedules[node.id] = self.schedule

    def switch(self, on):
        """Switch the device; it is only switched on while it is scheduled."""
        log.debug("%s.switch(on=%s)", self.id, on)
        feeder = self.node.is_on_feeder
        if not isinstance(feeder, SourceFeeder):
            return True
        wanted = on if self.schedule.is_scheduled() else False
        current = feeder.get_value()
        log.debug("Switch %s: is_on=%s -> is_scheduled=%s", self.id, current, wanted)
        if current != wanted:
            return feeder.switch(wanted)
        return True

    def set_schedule(self, duration, timeout=None):
        """Set the run duration and deadline; no deadline means MIN_DATETIME."""
        self.schedule.duration = duration
        self.schedule.timeout = timeout if timeout is not None else MIN_DATETIME


class PublicPowerGrid(_OutNode):
    """The grid connection, with its electricity contract."""

    node_type = NodeType.PUBLIC_POWER_GRID

    def __init__(self, node, contract):
        super().__init__(node)
        self.contract = contract


class SolarPanel(_OutNode):
    """A solar installation."""

    node_type = NodeType.SOLAR_PANEL

    def __init__(self, node, module_model, inverter_model, tilt, azimuth,
                 module_per_string, strings_per_inverter):
        super().__init__(node)
        self.module_model = module_model
        self.inverter_model = inverter_model
        self.tilt = tilt
        self.azimuth = azimuth
        self.module_per_string = module_per_string
        self.strings_per_inverter = strings_per_inverter