"""The set of nodes making up the home electrical network."""

import logging

from .errors import OpenHemsError

log = logging.getLogger(__name__)

_GRID_FILTERS = ("", "all", "publicpowergrid")
_SOLAR_FILTERS = ("", "all", "solarpanel")


class NodesHeap:
    """Nodes of the network, grouped by kind.

    ``notifier`` may be set to a callable taking a message; strategies use it
    to report failures to the user.
    """

    def __init__(self):
        self.publicpowergrid = None
        self.switches = []
        self.solarpanels = []
        self.notifier = None

    def add_switch(self, switch):
        self.switches.append(switch)
        log.debug("add_switch(%s) : Ok", switch.id)

    def add_solarpanel(self, panel):
        self.solarpanels.append(panel)
        log.debug("add_solarpanel(%s) : Ok", panel.id)

    def set_publicpowergrid(self, grid):
        self.publicpowergrid = grid
        log.debug("set_publicpowergrid(%s) : Ok", grid.id)

    def get_all(self):
        """Yield the public power grid, if any, then every switch."""
        if self.publicpowergrid is not None:
            yield self.publicpowergrid
        yield from self.switches

    def get_all_switch(self, pattern="all"):
        """Return the switches of the network."""
        return list(self.switches)

    def get_current_power(self, filter_="all"):
        """Sum the current power of the nodes selected by filter_.

        '' and 'all' select the grid and the solar panels; 'publicpowergrid'
        and 'solarpanel' select only those; anything else gives 0.
        """
        power = 0.0
        if filter_ in _GRID_FILTERS and self.publicpowergrid is not None:
            power += self.publicpowergrid.get_current_power()
        if filter_ in _SOLAR_FILTERS:
            power += sum(panel.get_current_power() for panel in self.solarpanels)
        return power

    def get_hours_ranges(self):
        """Return the hour ranges of the public power grid contract."""
        if self.publicpowergrid is None:
            raise OpenHemsError(
                "Need a public power grid for hours ranges but there is not."
            )
        return self.publicpowergrid.contract.hoursranges

    def __repr__(self):
        nodes = ", ".join(str(node) for node in self.get_all())
        return f"NodesHeap({nodes})"