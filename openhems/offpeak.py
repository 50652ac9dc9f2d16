"""Strategy that runs scheduled devices during off-peak hours only."""

import logging

from .errors import OpenHemsError
from .timeranges import MIN_DATETIME

log = logging.getLogger(__name__)

SLEEP_SECONDS = 100000


class OffPeakStrategy:
    """Switch scheduled devices on in off-peak hours and off when peak hours start."""

    def __init__(self, network, id_, config=None):
        self.network = network
        self.id = id_
        self.inoffpeakrange = False
        self.rangechangedone = False
        self.rangeend = MIN_DATETIME

    def update_network(self, now):
        """Apply the strategy at now; return the seconds it may sleep."""
        if now > self.rangeend:
            hoursranges = self.network.get_hours_ranges()
            current = hoursranges.check_range(now)
            self.rangeend = current.get_end(now)
            self.inoffpeakrange = hoursranges.is_offpeak(current)
            log.debug("OffPeakStrategy : refresh range end=%s", self.rangeend)
        log.debug("OffPeakStrategy : inoffpeak=%s", self.inoffpeakrange)
        if self.inoffpeakrange:
            self._switch_all(True)
            self.rangechangedone = False
        elif not self.rangechangedone and self._switch_all(False):
            self.rangechangedone = True
        return SLEEP_SECONDS

    def _switch_all(self, on):
        ok = True
        for switch in self.network.get_all_switch("all"):
            try:
                switch.switch(on)
            except OpenHemsError as err:
                log.warning(
                    "Fail switch %s '%s' : %s", "on" if on else "off", switch.id, err
                )
                ok = False
        return ok