from datetime import datetime

import pytest

from openhems.contract import Contract
from openhems.errors import OpenHemsError


def test_default_contract_when_not_a_mapping():
    contract = Contract.from_config(None)
    ranges = contract.hoursranges
    night = ranges.check_range(datetime(2025, 4, 28, 23, 0))
    day = ranges.check_range(datetime(2025, 4, 28, 9, 10, 11))
    assert ranges.is_offpeak(night)
    assert ranges.is_offpeak(day) is False


def test_configured_ranges_and_prices():
    conf = {
        "class": "generic",
        "offpeakhoursranges": ["1h-5h"],
        "defaultPrice": 0.25,
        "outRangePrice": 2,
    }
    ranges = Contract.from_config(conf).hoursranges
    night = ranges.check_range(datetime(2025, 1, 1, 3, 0))
    day = ranges.check_range(datetime(2025, 1, 1, 12, 0))
    assert night.cost == pytest.approx(0.25)
    assert day.cost == pytest.approx(2.0)
    assert ranges.is_offpeak(night)
    assert not ranges.is_offpeak(day)


def test_missing_keys_use_defaults():
    ranges = Contract.from_config({"class": "generic"}).hoursranges
    night = ranges.check_range(datetime(2025, 1, 1, 23, 30))
    assert night.cost == pytest.approx(0.1)
    assert ranges.is_offpeak(night)


def test_invalid_range_raises():
    with pytest.raises(OpenHemsError):
        Contract.from_config({"offpeakhoursranges": ["nonsense"]})