"""
Configuration management.

Document parsing, environment placeholder resolution, typed loading.
"""

from envoverlay.config.environment import MappingEnvironment, OsEnvironment
from envoverlay.config.loader import DEFAULT_CONFIG_FILENAME, Config, load_config, load_config_from_str
from envoverlay.config.placeholders import Placeholder, classify
from envoverlay.config.resolver import find_placeholders, overlay, resolve_config

__all__ = [
    "load_config",
    "load_config_from_str",
    "Config",
    "DEFAULT_CONFIG_FILENAME",
    "resolve_config",
    "overlay",
    "find_placeholders",
    "classify",
    "Placeholder",
    "OsEnvironment",
    "MappingEnvironment",
]
