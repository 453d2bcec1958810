"""
Document parsing and rendering.

Turns TOML, YAML or JSON text into a plain value tree and renders a tree
back to YAML or JSON.
"""

import datetime
import json
import tomllib
from pathlib import Path
from typing import Any

import yaml

from envoverlay.exceptions import ConfigParseError, ConfigSerializeError, ConfigurationError

FORMATS = ("toml", "yaml", "json")
RENDER_FORMATS = ("yaml", "json")

SUFFIX_MAP = {
    ".toml": "toml",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
}


def detect_format(path: str | Path) -> str:
    """Infer the document format from a file suffix, defaulting to TOML."""
    return SUFFIX_MAP.get(Path(path).suffix.lower(), "toml")


def _normalize_format(fmt: str) -> str:
    fmt = fmt.lower()
    if fmt == "yml":
        return "yaml"
    if fmt not in FORMATS:
        raise ConfigurationError(
            f"Unsupported format '{fmt}', expected one of: {', '.join(FORMATS)}", details={"format": fmt}
        )
    return fmt


def _too_deep(fmt: str, where: str, source: str | None) -> ConfigParseError:
    return ConfigParseError(f"Error parsing {fmt.upper()}: document nesting is too deep{where}", fmt=fmt, path=source)


def parse(text: str, fmt: str = "toml", *, source: str | None = None) -> dict[str, Any]:
    """
    Parse document text into a value tree.

    Args:
        text: Document text
        fmt: One of toml, yaml, json
        source: File name used in error messages

    Returns:
        Top-level table of the document

    Raises:
        ConfigurationError: The format is unknown
        ConfigParseError: The text is malformed, too deeply nested, or its root is not a table
    """
    fmt = _normalize_format(fmt)
    where = f"\n  File: {source}" if source else ""

    if fmt == "toml":
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ConfigParseError(f"Error parsing TOML: {e}{where}", fmt=fmt, path=source) from e
        except RecursionError as e:
            raise _too_deep(fmt, where, source) from e

    if fmt == "yaml":
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            if hasattr(e, "problem_mark") and e.problem_mark is not None:
                mark = e.problem_mark
                raise ConfigParseError(
                    f"Error parsing YAML at line {mark.line + 1}, column {mark.column + 1}: {e}{where}",
                    fmt=fmt,
                    path=source,
                ) from e
            raise ConfigParseError(f"Error parsing YAML: {e}{where}", fmt=fmt, path=source) from e
        except RecursionError as e:
            raise _too_deep(fmt, where, source) from e
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigParseError(
                f"Error parsing JSON at line {e.lineno}, column {e.colno}: {e.msg}{where}", fmt=fmt, path=source
            ) from e
        except RecursionError as e:
            raise _too_deep(fmt, where, source) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(
            f"Document root must be a mapping, got {type(data).__name__}{where}", fmt=fmt, path=source
        )
    return data


def _json_default(value: Any) -> str:
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize(tree: dict[str, Any], fmt: str = "yaml") -> str:
    """
    Render a value tree as text.

    Raises:
        ConfigSerializeError: The format cannot be rendered or a value is not representable
    """
    fmt = _normalize_format(fmt)
    if fmt not in RENDER_FORMATS:
        raise ConfigSerializeError(
            f"Rendering to {fmt} is not supported, use one of: {', '.join(RENDER_FORMATS)}"
        )
    try:
        if fmt == "json":
            return json.dumps(tree, indent=2, default=_json_default) + "\n"
        return yaml.safe_dump(tree, sort_keys=False, allow_unicode=True)
    except (TypeError, ValueError, yaml.YAMLError) as e:
        raise ConfigSerializeError(f"Error rendering configuration as {fmt}: {e}") from e
