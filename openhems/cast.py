"""Conversions of loosely typed YAML values to Python types."""

from .errors import OpenHemsError


def to_str(value):
    """Return the textual form of a scalar, or an empty string."""
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, (int, float, str)):
        return str(value)
    return ""


def to_int(value):
    """Return an integer for a scalar; non-scalars give 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        try:
            return int(value)
        except (OverflowError, ValueError) as err:
            raise OpenHemsError(f"Invalid integer '{value}'") from err
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError as err:
            raise OpenHemsError(f"Invalid integer '{value}'") from err
    return 0


def to_float(value):
    """Return a float for a scalar; non-scalars give 0.0."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError as err:
            raise OpenHemsError(f"Invalid float '{value}'") from err
    return 0.0


def to_bool(value):
    """Return True for True, 'true' (any case) or '1'; False otherwise."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() == "true" or value == "1"
    return False


def to_list(value):
    """Return the items of a list, the values of a mapping, or [value]."""
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        return list(value.values())
    return [value]


def to_dict(value):
    """Return a mapping with string keys, or an empty dict for non-mappings."""
    if isinstance(value, dict):
        return {to_str(key): item for key, item in value.items()}
    return {}


def get_key(key, config):
    """Return the value stored under key in a mapping, or None."""
    return config.get(key)