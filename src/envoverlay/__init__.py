"""
envoverlay - configuration files with environment variable placeholders.

One document serves every deployment: values written as <<ENV:NAME>> or
<<ENV?:NAME>> are taken from the environment at load time.
"""

__version__ = "0.1.0"

from envoverlay.config import (
    DEFAULT_CONFIG_FILENAME,
    Config,
    MappingEnvironment,
    OsEnvironment,
    Placeholder,
    classify,
    find_placeholders,
    load_config,
    load_config_from_str,
    overlay,
    resolve_config,
)

# Exceptions
from envoverlay.exceptions import (
    ConfigFileNotFoundError,
    ConfigIOError,
    ConfigParseError,
    ConfigSerializeError,
    ConfigurationError,
    EnvironmentLookupError,
    EnvOverlayError,
    MissingVariableError,
    MultipleErrors,
    PlaceholderPositionError,
    ResolutionError,
    combine_all,
    combine_errors,
)

# Logging utilities
from envoverlay.utils.logging import get_logger, setup_logging

__all__ = [
    # Loading
    "load_config",
    "load_config_from_str",
    "Config",
    "DEFAULT_CONFIG_FILENAME",
    # Resolution
    "resolve_config",
    "overlay",
    "find_placeholders",
    "classify",
    "Placeholder",
    "OsEnvironment",
    "MappingEnvironment",
    # Exceptions
    "EnvOverlayError",
    "ConfigurationError",
    "ConfigIOError",
    "ConfigFileNotFoundError",
    "ConfigParseError",
    "ConfigSerializeError",
    "ResolutionError",
    "MissingVariableError",
    "EnvironmentLookupError",
    "PlaceholderPositionError",
    "MultipleErrors",
    "combine_errors",
    "combine_all",
    # Logging
    "get_logger",
    "setup_logging",
]
