"""Home energy management: configuration, priced hour ranges, schedules, power nodes and switching strategies."""

__version__ = "0.1.0"