import pytest

from openhems.appstate import AppState
from openhems.contract import Contract
from openhems.errors import OpenHemsError
from openhems.feeder import ConstFeeder
from openhems.network import NodesHeap
from openhems.node import NodeBase, PublicPowerGrid, SolarPanel, Switch


def _base(nameid, power, on=False):
    return NodeBase(nameid, 2000.0, 0.0, ConstFeeder(power), ConstFeeder(on))


def _grid(power, ranges=None):
    conf = {"offpeakhoursranges": ranges or ["22h-6h"]}
    return PublicPowerGrid(_base("grid", power), Contract.from_config(conf))


def _panel(nameid, power):
    return SolarPanel(_base(nameid, power), "model", "inverter", 30.0, 180.0, 10, 1)


@pytest.fixture
def heap():
    nodes = NodesHeap()
    appstate = AppState()
    nodes.set_publicpowergrid(_grid(1500.0))
    nodes.add_switch(Switch(_base("boiler", 10.0), 50, "default", appstate))
    nodes.add_switch(Switch(_base("pump", 20.0), 50, "default", appstate))
    nodes.add_solarpanel(_panel("roof", 300.0))
    nodes.add_solarpanel(_panel("garage", 200.0))
    return nodes


def test_get_all_yields_grid_then_switches(heap):
    assert [node.id for node in heap.get_all()] == ["grid", "boiler", "pump"]


def test_get_all_without_grid():
    nodes = NodesHeap()
    nodes.add_switch(Switch(_base("boiler", 0.0), 50, "default", AppState()))
    assert [node.id for node in nodes.get_all()] == ["boiler"]


def test_get_all_switch(heap):
    assert [s.id for s in heap.get_all_switch("all")] == ["boiler", "pump"]


def test_current_power_filters(heap):
    assert heap.get_current_power("publicpowergrid") == 1500.0
    assert heap.get_current_power("solarpanel") == 300.0 + 200.0
    assert heap.get_current_power("all") == 1500.0 + 300.0 + 200.0
    assert heap.get_current_power("") == heap.get_current_power("all")
    assert heap.get_current_power("battery") == 0.0


def test_hours_ranges_need_grid():
    with pytest.raises(OpenHemsError):
        NodesHeap().get_hours_ranges()


def test_hours_ranges_from_contract(heap):
    assert heap.get_hours_ranges() is heap.publicpowergrid.contract.hoursranges


def test_set_publicpowergrid_replaces(heap):
    other = _grid(-40.0)
    heap.set_publicpowergrid(other)
    assert heap.publicpowergrid is other
    assert heap.get_current_power("publicpowergrid") == -40.0