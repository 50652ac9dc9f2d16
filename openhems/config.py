"""Flat key/value view of layered YAML configuration files."""

import logging
import re

import yaml

from .cast import to_float, to_int, to_list, to_str
from .errors import OpenHemsError

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "./data/openhems_default.yaml"

_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"


class _Loader(yaml.SafeLoader):
    """Safe loader that keeps clock-like scalars such as 22:00 as strings."""


_Loader.yaml_implicit_resolvers = {
    first: [(tag, rx) for tag, rx in resolvers if tag not in (_INT_TAG, _FLOAT_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_Loader.add_implicit_resolver(
    _INT_TAG,
    re.compile(
        r"""^(?:[-+]?0b[0-1_]+
        |[-+]?0[0-7_]+
        |[-+]?(?:0|[1-9][0-9_]*)
        |[-+]?0x[0-9a-fA-F_]+)$""",
        re.X,
    ),
    list("-+0123456789"),
)
_Loader.add_implicit_resolver(
    _FLOAT_TAG,
    re.compile(
        r"""^(?:[-+]?(?:[0-9][0-9_]*)\.[0-9_]*(?:[eE][-+][0-9]+)?
        |\.[0-9][0-9_]*(?:[eE][-+][0-9]+)?
        |[-+]?\.(?:inf|Inf|INF)
        |\.(?:nan|NaN|NAN))$""",
        re.X,
    ),
    list("-+0123456789."),
)


class ConfigurationManager:
    """Holds configuration values under dotted keys such as 'server.loopDelay'."""

    def __init__(self):
        self.conf = {}
        self.default_path = ""

    def add(self, key, value, init):
        """Store value under key, flattening nested mappings.

        Unless init is true, only keys that already exist are accepted.
        """
        if isinstance(value, dict):
            for sub_key, sub_value in value.items():
                name = to_str(sub_key)
                self.add(f"{key}.{name}" if key else name, sub_value, init)
        elif not init and key not in self.conf:
            log.error("key='%s' is not valid in configuration.", key)
        else:
            self.conf[key] = value

    def add_yaml_config(self, file_path, init):
        """Load the first document of a YAML file into the configuration."""
        self.default_path = str(file_path)
        with open(file_path, encoding="utf-8") as stream:
            text = stream.read()
        log.info("Load YAML configuration from : %s", file_path)
        try:
            docs = list(yaml.load_all(text, Loader=_Loader))
        except yaml.YAMLError as err:
            raise OpenHemsError(f"Invalid YAML in {file_path} : {err}") from err
        if not docs:
            raise OpenHemsError(f"No YAML document in {file_path}")
        self.add("", docs[0], init)

    def get(self, key):
        return self.conf.get(key)

    def get_as_str(self, key):
        if key in self.conf:
            return to_str(self.conf[key])
        return ""

    def get_as_int(self, key):
        if key in self.conf:
            return to_int(self.conf[key])
        log.error("No key:'%s'", key)
        return 0

    def get_as_float(self, key):
        if key in self.conf:
            return to_float(self.conf[key])
        return 0.0

    def get_as_list(self, key):
        if key in self.conf:
            return to_list(self.conf[key])
        return []


def load_configuration(default_path=None):
    """Create a manager seeded from the defaults file; load failures are logged."""
    manager = ConfigurationManager()
    path = default_path if default_path is not None else DEFAULT_CONFIG_PATH
    try:
        manager.add_yaml_config(path, True)
    except (OSError, OpenHemsError) as err:
        log.error("Fail load default configuration %s : %s", path, err)
    return manager