"""
Configuration resolution against the environment.

Walks a parsed configuration tree and replaces every placeholder leaf with
the value of its environment variable. Failures do not stop the walk: every
field of every table is visited and all failures are reported together.
"""

from collections.abc import Mapping
from typing import Any

from envoverlay.config.environment import OMITTED, Environment, Failed, Outcome, Resolved, as_environment, resolve_placeholder
from envoverlay.config.placeholders import Placeholder, classify
from envoverlay.exceptions import ConfigurationError, EnvOverlayError, PlaceholderPositionError, combine_errors

MAX_DEPTH = 256

# Accumulator of a table fold: the table built so far, or the failures so far
_Acc = dict[str, Any] | EnvOverlayError


def resolve_config(config_data: dict[str, Any], environ: "Environment | Mapping[str, str] | None" = None) -> dict[str, Any]:
    """
    Resolve configuration with environment variable substitution.

    Args:
        config_data: Parsed configuration table
        environ: Environment or mapping to read variables from (default: process environment)

    Returns:
        New configuration table with placeholders replaced and unset optional fields dropped

    Raises:
        ConfigurationError: The root is not a table, or nesting is too deep
        ResolutionError: Exactly one placeholder failed
        MultipleErrors: More than one placeholder failed
    """
    if not isinstance(config_data, dict):
        raise ConfigurationError(
            f"Configuration root must be a table, got {type(config_data).__name__}"
        )

    outcome = _resolve_table(config_data, as_environment(environ), "", 0)
    if isinstance(outcome, Failed):
        raise outcome.error
    return outcome.value


# Short alias
overlay = resolve_config


def _resolve_value(value: Any, environ: Environment, path: str, depth: int) -> Outcome:
    """Recursively resolve one value of the tree."""
    if isinstance(value, dict):
        return _resolve_table(value, environ, path, depth + 1)
    elif isinstance(value, list):
        return _resolve_array(value, environ, path, depth + 1)
    elif isinstance(value, str):
        placeholder = classify(value)
        if placeholder is None:
            return Resolved(value)
        return resolve_placeholder(placeholder, environ, path or None)
    else:
        return Resolved(value)


def _check_depth(depth: int, path: str) -> None:
    if depth > MAX_DEPTH:
        raise ConfigurationError(
            f"Configuration nesting exceeds {MAX_DEPTH} levels at '{path}'",
            details={"path": path, "max_depth": MAX_DEPTH},
        )


def _resolve_table(table: dict[str, Any], environ: Environment, path: str, depth: int) -> Outcome:
    _check_depth(depth, path)
    acc: _Acc = {}
    for key, value in table.items():
        child_path = f"{path}.{key}" if path else str(key)
        acc = _fold_field(acc, key, _resolve_value(value, environ, child_path, depth))
    if isinstance(acc, EnvOverlayError):
        return Failed(acc)
    return Resolved(acc)


def _fold_field(acc: _Acc, key: str, outcome: Outcome) -> _Acc:
    """Combine the accumulator with one field's outcome, never dropping a failure."""
    if isinstance(outcome, Failed):
        if isinstance(acc, EnvOverlayError):
            return combine_errors(acc, outcome.error)
        return outcome.error
    if isinstance(acc, EnvOverlayError):
        return acc
    if outcome is OMITTED:
        return acc
    acc[key] = outcome.value
    return acc


def _resolve_array(items: list[Any], environ: Environment, path: str, depth: int) -> Outcome:
    _check_depth(depth, path)
    resolved: list[Any] = []
    error: EnvOverlayError | None = None
    for index, item in enumerate(items):
        item_path = f"{path}[{index}]"
        outcome = _resolve_value(item, environ, item_path, depth)
        if outcome is OMITTED:
            # Array elements cannot be dropped
            outcome = Failed(PlaceholderPositionError(classify(item).name, path=item_path))
        if isinstance(outcome, Failed):
            error = outcome.error if error is None else combine_errors(error, outcome.error)
        elif error is None:
            resolved.append(outcome.value)
    if error is not None:
        return Failed(error)
    return Resolved(resolved)


def find_placeholders(config_data: Any, path: str = "", depth: int = 0) -> list[tuple[str, Placeholder]]:
    """
    List every placeholder in a tree, in document order.

    Args:
        config_data: Parsed configuration tree
        path: Path prefix for the returned entries
        depth: Nesting level of config_data

    Returns:
        List of (dotted path, Placeholder) pairs

    Raises:
        ConfigurationError: Nesting is too deep (or the tree refers to itself)
    """
    found: list[tuple[str, Placeholder]] = []
    if isinstance(config_data, dict):
        _check_depth(depth, path)
        for key, value in config_data.items():
            found.extend(find_placeholders(value, f"{path}.{key}" if path else str(key), depth + 1))
    elif isinstance(config_data, list):
        _check_depth(depth, path)
        for index, item in enumerate(config_data):
            found.extend(find_placeholders(item, f"{path}[{index}]", depth + 1))
    else:
        placeholder = classify(config_data)
        if placeholder is not None:
            found.append((path, placeholder))
    return found
