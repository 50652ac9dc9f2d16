# openhems

A small home energy management library. It models a home's power network: a public power grid with an electricity contract, solar panels, and switchable devices. Energy strategies decide when to turn the switches on or off. The library also reads layered YAML configuration files.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Configuration

`openhems.config.load_configuration(default_path=None)` creates a `ConfigurationManager` and loads a defaults file into it. If no path is given, it reads `./data/openhems_default.yaml`. A failure to load this file is logged, not raised.

You can layer more files on top with `ConfigurationManager.add_yaml_config(file_path, init)`:

- Nested keys are flattened with dots, so `server: {loopDelay: 30}` becomes `server.loopDelay`.
- When `init` is false, a file may only override keys that already exist. An unknown key is logged as an error and ignored.
- A missing file raises `OSError`.
- Invalid YAML raises `openhems.errors.OpenHemsError`.
- Clock-like values such as `22:00` are kept as strings.

```python
from openhems.config import load_configuration

conf = load_configuration("data/openhems_default.yaml")
conf.add_yaml_config("config/openhems.yaml", False)
delay = conf.get_as_int("server.loopDelay")
nodes = conf.get_as_list("network.nodes")
```

Four typed accessors read values: `get_as_str`, `get_as_int`, `get_as_float` and `get_as_list`. For a missing key they return `""`, `0`, `0.0` or `[]`. `get` returns the raw value, or `None` if the key is missing.

The same conversions are available on their own in `openhems.cast`: `to_str`, `to_int`, `to_float`, `to_bool`, `to_list` and `to_dict`.

## Hours ranges and contracts

`openhems.timeranges.HoursRanges` describes a day cut into priced ranges.

- `parse_time` reads hours written as `22h`, `6`, `6h30`, `1h2m3`, `22:00` or `0630`.
- Each range is given in one of three forms: `"start-end"`, `["start-end", cost]` or `[start, end, cost]`.
- The ranges close themselves into a full 24-hour cycle. Any gaps get the out-of-range cost.
- Ranges that overlap raise `OpenHemsError`.

```python
from datetime import datetime
from openhems.timeranges import HoursRanges

ranges = HoursRanges.from_config(["22h-6h"], None, None, None, 0.0, 1.0)
current = ranges.check_range(datetime(2025, 4, 28, 9, 10, 11))
ranges.is_offpeak(current)   # False: 9:10 is outside 22h-6h
current.get_end(datetime(2025, 4, 28, 9, 10, 11))  # 2025-04-28 22:00:11 (next 22:00 clock time, seconds kept)
```

Datetimes are naive local datetimes.

`openhems.contract.Contract.from_config` builds the ranges from a contract mapping with the keys `offpeakhoursranges`, `defaultPrice` and `outRangePrice`. Missing keys use these defaults:

| Key | Default |
| --- | --- |
| `offpeakhoursranges` | `["22h-6h"]` |
| `defaultPrice` | `0.1` |
| `outRangePrice` | `1.0` |

## Schedules

Each switch owns an `openhems.schedule.Schedule`. It holds the number of seconds the device should still run and a timeout. A schedule name may be at most 16 bytes.

`openhems.appstate.AppState` collects all schedules by node id:

- `nodes_json()` serialises them as a JSON object.
- `apply_states(body)` applies a JSON body such as `{"boiler": {"duration": 3600, "timeout": "06:00"}}` and returns the new JSON. Unknown ids are ignored. It raises `OpenHemsError` in these cases:
  - the body is larger than 256 KiB;
  - the body is not valid UTF-8 or not valid JSON;
  - a schedule object has neither a usable `duration` nor a `timeout`.
- `decrement_time(seconds)` counts time down on every schedule.

## Feeders

Node values come from feeders in `openhems.feeder`:

- `ConstFeeder(value)` always returns the same value.
- `SourceFeeder(source, entity_id, kind)` reads an entity's state from a source object that you supply. `kind` is one of `int`, `float`, `str` or `bool`. The source must provide these methods:
  - `register_entity(entity_id)`
  - `get_cycle_id()`
  - `get_entity_value_int`, `get_entity_value_float`, `get_entity_value_str` and `get_entity_value_bool`
  - `switch(entity_id, on)`

## Nodes and network

`openhems.node` provides `NodeBase`, `Switch`, `PublicPowerGrid` and `SolarPanel`, along with the `NodeType` enum. Node ids are limited to 16 bytes.

Creating a `Switch` registers its schedule in the given `AppState`. `Switch.switch(on)` turns the device on only while its schedule has time left. It switches only when the current state differs from the wanted one.

`openhems.network.NodesHeap` gathers the nodes. Add them with:

- `set_publicpowergrid`
- `add_switch`
- `add_solarpanel`

It offers four ways to read them back:

- `get_all()` yields the grid, then every switch.
- `get_all_switch()` returns the switches.
- `get_current_power(filter_)` sums the current power of the nodes the filter selects:
  - `""` or `"all"` selects the grid and the solar panels;
  - `"publicpowergrid"` selects only the grid;
  - `"solarpanel"` selects only the solar panels;
  - any other filter gives `0.0`.
- `get_hours_ranges()` returns the grid contract's ranges.

You can set an optional `notifier` callable to receive failure messages.

## Strategies

- `openhems.offpeak.OffPeakStrategy(network, id_, config)` switches scheduled devices on during the cheapest hours. When those hours end, it switches them off once.
- `openhems.solarnosell.SolarNoSellStrategy(network, id_, config)` switches devices on when the solar surplus is large enough, and off when it falls short. `update_deferables()` refreshes its list of scheduled devices and returns `True` if the list changed.

Call `update_network(now)` on each loop. The return value is the number of seconds the strategy suggests waiting before the next call.

## What it does not do

The package is a library only:

- It provides no command, no main loop and no HTTP server or web panel. `AppState` only produces and consumes the JSON such a panel would exchange.
- It does not connect to any home automation system. A `SourceFeeder` needs a source object supplied by the caller.
- Nothing builds a network from the `network.nodes` configuration. You create and add the nodes yourself.