"""Strategy that consumes solar production locally instead of selling it."""

import logging
from datetime import timedelta

from .errors import OpenHemsError
from .timeranges import MIN_DATETIME

log = logging.getLogger(__name__)

SLEEP_SECONDS = 100000
CYCLE_DURATION = 30


class SolarNoSellStrategy:
    """Switch devices on when production exceeds consumption, off when it falls short.

    A device is switched on if production > consumption + X * device power and
    off if production < consumption - (1 - X) * device power, which avoids
    ping-pong since the real power of a running device is usually below its
    maximum.
    """

    def __init__(self, network, id_, config=None):
        self.network = network
        self.id = id_
        self.ratio = 1.0
        self.margin = 100000.0
        self.cycle_duration = 0
        self.cycle_nb = 0
        self.ref_coefficient = 0.0
        self.coefs = []
        self.next_eval_date = MIN_DATETIME
        self.eval_frequency = timedelta(seconds=60)
        self.deferables = {}

    def update_network(self, now):
        """Apply the strategy at now; return the seconds it may sleep."""
        self._check(now)
        return self._apply(CYCLE_DURATION)

    def _check(self, now):
        if now > self.next_eval_date:
            self.next_eval_date = now + self.eval_frequency

    def _apply(self, cycle_duration):
        consumption = self.network.get_current_power("all")
        consumption_battery = self.network.get_current_power("battery")
        production = self.network.get_current_power("solarpanel")
        power_margin = production - consumption + consumption_battery
        short_delay = int(max(cycle_duration / 5.0, 3.0))
        if power_margin > self.margin:
            if self._switch_on_devices(power_margin):
                return short_delay
        elif power_margin < self.margin:
            if self._switch_off_devices(power_margin):
                return short_delay
        return SLEEP_SECONDS

    def _threshold_reached(self, count):
        return count >= self.cycle_duration or sum(self.coefs) > self.ref_coefficient

    def _switch_on_devices(self, power_margin):
        for node in self.network.get_all_switch(""):
            if node.is_on():
                continue
            node_power = node.max_power
            coef = (
                power_margin
                + (((self.ratio - 1.0) ** 2 - 4.0) / 4.0) * node_power
                - self.ratio * self.margin
            )
            if coef <= 0.0:
                continue
            self.cycle_nb = self.cycle_nb + 1 if self.cycle_nb >= 0 else 1
            self.coefs.append(coef)
            log.info("SolarNoSellStrategy: coef+=%s", coef)
            if not self._threshold_reached(self.cycle_nb):
                continue
            try:
                node.switch(True)
            except OpenHemsError as err:
                message = (
                    f"SolarNoSellStrategy : Fail to switch on device '{node.id}' : {err}"
                )
                log.error(message)
                if self.network.notifier is not None:
                    self.network.notifier(message)
            else:
                power_margin -= node_power
                if power_margin <= 0.0:
                    return True
        return False

    def _switch_off_devices(self, power_margin):
        for node in self.network.get_all_switch("all"):
            if not node.is_on():
                continue
            node_power = node.get_current_power()
            coef = (
                power_margin
                + (1.0 + ((self.ratio - 1.0) ** 2 - 4.0) / 4.0) * node_power
                - self.ratio * self.margin
            )
            if coef >= 0.0:
                continue
            self.cycle_nb = self.cycle_nb - 1 if self.cycle_nb <= 0 else -1
            self.coefs.append(coef)
            log.info("SolarNoSellStrategy: coef+=%s", coef)
            if not self._threshold_reached(-self.cycle_nb):
                continue
            try:
                node.switch(False)
            except OpenHemsError as err:
                log.error(
                    "SolarNoSellStrategy : Fail to switch off device '%s' : %s",
                    node.id,
                    err,
                )
            else:
                power_margin += node_power
                if power_margin >= 0.0:
                    return True
        return False

    def update_deferables(self):
        """Refresh the scheduled devices; return True if the list changed."""
        updated = False
        deferables = {}
        for node in self.network.get_all_switch("all"):
            schedule = node.schedule
            scheduled = schedule.is_scheduled()
            if node.id in self.deferables:
                if not scheduled:
                    updated = True
                else:
                    deferables[node.id] = schedule.duration
                    if self.deferables[node.id] != schedule.duration:
                        updated = True
            elif scheduled:
                deferables[node.id] = schedule.duration
                updated = True
        if updated:
            self.deferables = deferables
        return updated