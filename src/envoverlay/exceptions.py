"""
envoverlay exception hierarchy.

All domain-specific exceptions inherit from EnvOverlayError, making it easy
to catch any library error with a single base class while still allowing
fine-grained handling when needed.

Hierarchy::

    EnvOverlayError
    └── ConfigurationError            - anything that stops a config from loading
        ├── ConfigIOError             - file open/read failures
        │   └── ConfigFileNotFoundError - explicit or default file missing
        ├── ConfigParseError          - malformed document syntax
        ├── ConfigSerializeError      - rendering or typed deserialization
        ├── ResolutionError           - a single placeholder could not be resolved
        │   ├── MissingVariableError  - required variable unset
        │   ├── EnvironmentLookupError - variable set but unreadable
        │   └── PlaceholderPositionError - optional placeholder that cannot be dropped
        └── MultipleErrors            - two or more resolution failures
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class EnvOverlayError(Exception):
    """Base exception for all envoverlay errors."""

    def __init__(self, message: str, *, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- Configuration -----------------------------------------------------------


class ConfigurationError(EnvOverlayError):
    """Raised when configuration loading, parsing, or resolution fails."""


class ConfigIOError(ConfigurationError):
    """Raised when a configuration file cannot be opened or read."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message, details={"path": path})
        self.path = path


class ConfigFileNotFoundError(ConfigIOError):
    """Raised when the configuration file (explicit or default) does not exist."""


class ConfigParseError(ConfigurationError):
    """Raised when a document cannot be parsed into a value tree."""

    def __init__(self, message: str, *, fmt: str | None = None, path: str | None = None) -> None:
        super().__init__(message, details={"format": fmt, "path": path})
        self.fmt = fmt
        self.path = path


class ConfigSerializeError(ConfigurationError):
    """Raised when a resolved tree cannot be rendered or converted to the target type."""


# --- Resolution --------------------------------------------------------------


class ResolutionError(ConfigurationError):
    """Raised when a single placeholder cannot be resolved from the environment."""

    def __init__(self, message: str, *, variable: str, path: str | None = None) -> None:
        super().__init__(message, details={"variable": variable, "path": path})
        self.variable = variable
        self.path = path


class MissingVariableError(ResolutionError):
    """Raised when a required placeholder's variable is not set."""

    def __init__(self, variable: str, *, path: str | None = None) -> None:
        message = f"Missing required environment variable '{variable}'"
        if path:
            message += f" (at '{path}')"
        super().__init__(message, variable=variable, path=path)


class EnvironmentLookupError(ResolutionError):
    """Raised when a variable is set but its value cannot be read."""

    def __init__(self, variable: str, reason: str, *, path: str | None = None) -> None:
        message = f"Cannot read environment variable '{variable}': {reason}"
        if path:
            message += f" (at '{path}')"
        super().__init__(message, variable=variable, path=path)
        self.reason = reason


class PlaceholderPositionError(ResolutionError):
    """Raised when an optional placeholder resolves to nothing where a value is mandatory.

    Only table fields can be dropped; array elements cannot.
    """

    def __init__(self, variable: str, *, path: str | None = None) -> None:
        message = f"Optional environment variable '{variable}' is not set and array elements cannot be omitted"
        if path:
            message += f" (at '{path}')"
        super().__init__(message, variable=variable, path=path)


class MultipleErrors(ConfigurationError):
    """Aggregate of two or more independent failures.

    Always flat: constructing it from other MultipleErrors splices their
    causes in, so a MultipleErrors never contains another one.
    """

    def __init__(self, errors: Iterable[EnvOverlayError]) -> None:
        flat: list[EnvOverlayError] = []
        for error in errors:
            if isinstance(error, MultipleErrors):
                flat.extend(error.errors)
            else:
                flat.append(error)
        super().__init__(", ".join(e.message for e in flat), details={"count": len(flat)})
        self.errors: tuple[EnvOverlayError, ...] = tuple(flat)

    def __iter__(self) -> Iterator[EnvOverlayError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    @property
    def variables(self) -> list[str]:
        """Names of the environment variables behind the resolution failures."""
        return [e.variable for e in self.errors if isinstance(e, ResolutionError)]


def combine_errors(first: EnvOverlayError, second: EnvOverlayError) -> MultipleErrors:
    """
    Combine two errors into one flat aggregate, preserving order.

    Args:
        first: Error encountered first
        second: Error encountered second

    Returns:
        MultipleErrors holding the causes of both, first's before second's
    """
    return MultipleErrors([first, second])


def combine_all(errors: Iterable[EnvOverlayError]) -> EnvOverlayError | None:
    """Fold errors with combine_errors; None for no errors, the error itself for one."""
    result: EnvOverlayError | None = None
    for error in errors:
        result = error if result is None else combine_errors(result, error)
    return result
