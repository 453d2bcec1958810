"""
Environment lookup and per-placeholder resolution.

The environment is a collaborator passed into the resolver rather than a
hidden global, so tests can supply a plain mapping instead of mutating the
process environment.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from envoverlay.config.placeholders import Placeholder
from envoverlay.exceptions import EnvironmentLookupError, EnvOverlayError, MissingVariableError
from envoverlay.utils.logging import get_logger

logger = get_logger("envoverlay.environment")


class Environment(Protocol):
    """Source of environment variable values."""

    def lookup(self, name: str) -> str | None:
        """Return the value of ``name``, None when unset.

        Raises:
            EnvironmentLookupError: The variable is set but cannot be read
        """
        ...


def _check_value(name: str, value: str) -> str:
    # Undecodable bytes in the real environment surface as lone surrogates
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EnvironmentLookupError(name, "value is not valid unicode") from e
    return value


class OsEnvironment:
    """Reads the process environment on every lookup."""

    def lookup(self, name: str) -> str | None:
        value = os.environ.get(name)
        if value is None:
            return None
        return _check_value(name, value)

    def __repr__(self) -> str:
        return "OsEnvironment()"


class MappingEnvironment:
    """Environment backed by an in-memory mapping."""

    def __init__(self, values: Mapping[str, str] | None = None):
        self.values = dict(values or {})

    def lookup(self, name: str) -> str | None:
        value = self.values.get(name)
        if value is None:
            return None
        return _check_value(name, value)

    def __repr__(self) -> str:
        return f"MappingEnvironment({sorted(self.values)!r})"


def as_environment(environ: "Environment | Mapping[str, str] | None") -> Environment:
    """Normalize None / a mapping / an Environment into an Environment."""
    if environ is None:
        return OsEnvironment()
    if isinstance(environ, Mapping):
        return MappingEnvironment(environ)
    return environ


# --- Resolution outcomes -----------------------------------------------------


@dataclass(frozen=True)
class Resolved:
    """The leaf has a value (literal or taken from the environment)."""

    value: Any


class _Omitted:
    """The leaf is an optional placeholder whose variable is unset."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "OMITTED"


OMITTED = _Omitted()


@dataclass(frozen=True)
class Failed:
    """The leaf could not be resolved."""

    error: EnvOverlayError


Outcome = Resolved | _Omitted | Failed


def resolve_placeholder(placeholder: Placeholder, environ: Environment, path: str | None = None) -> Outcome:
    """
    Resolve one placeholder against the environment.

    Args:
        placeholder: Classified placeholder
        environ: Environment to read from (read fresh, never cached)
        path: Dotted path of the leaf, used in error messages

    Returns:
        Resolved(str) when the variable is set (empty string included),
        OMITTED for an unset optional variable, Failed otherwise
    """
    try:
        value = environ.lookup(placeholder.name)
    except EnvironmentLookupError as e:
        if path and e.path is None:
            e = EnvironmentLookupError(e.variable, e.reason, path=path)
        return Failed(e)

    if value is not None:
        logger.debug(f"Resolved {placeholder.mode} variable {placeholder.name} at {path or '<root>'}")
        return Resolved(value)

    if placeholder.required:
        return Failed(MissingVariableError(placeholder.name, path=path))

    logger.debug(f"Optional variable {placeholder.name} is not set, dropping {path or '<root>'}")
    return OMITTED
