"""Electricity contract: the daily price ranges of the public power grid."""

import logging
from dataclasses import dataclass

from .cast import to_float
from .timeranges import HoursRanges

log = logging.getLogger(__name__)

DEFAULT_OFFPEAK_RANGES = ["22h-6h"]
DEFAULT_PRICE = 0.1
OUTRANGE_PRICE = 1.0


@dataclass
class Contract:
    """A contract described by its hour ranges and their costs."""

    hoursranges: HoursRanges

    @staticmethod
    def from_config(contract_conf):
        """Build a contract from its configuration mapping.

        Missing keys fall back to off-peak hours 22h-6h, a default price of 0.1
        and an out-of-range price of 1.0.
        """
        config = DEFAULT_OFFPEAK_RANGES
        costs = {"outRangePrice": OUTRANGE_PRICE, "defaultPrice": DEFAULT_PRICE}
        if isinstance(contract_conf, dict):
            classname = contract_conf.get("class")
            if isinstance(classname, str):
                log.info("Contract : %s", classname)
            else:
                log.error(
                    "No key 'classname' in contract, use default : '%s'.",
                    DEFAULT_OFFPEAK_RANGES,
                )
            if "offpeakhoursranges" in contract_conf:
                config = contract_conf["offpeakhoursranges"]
            for key, default in costs.items():
                if key in contract_conf:
                    costs[key] = to_float(contract_conf[key])
                else:
                    log.info("No key '%s' in contract, use default : '%s'.", key, default)
        ranges = HoursRanges.from_config(
            config,
            None,
            None,
            None,
            costs["defaultPrice"],
            costs["outRangePrice"],
        )
        return Contract(ranges)