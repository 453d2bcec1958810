"""
Configuration file loading.

Read a document, parse it, overlay environment placeholders, and hand the
resolved tree back either as a Config container or as an instance of a
caller-supplied type.
"""

from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any, TypeVar, overload

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from envoverlay.config.environment import Environment
from envoverlay.config.formats import detect_format, parse, serialize
from envoverlay.config.resolver import resolve_config
from envoverlay.exceptions import ConfigFileNotFoundError, ConfigIOError, ConfigSerializeError
from envoverlay.utils.logging import get_logger

logger = get_logger("envoverlay.loader")

DEFAULT_CONFIG_FILENAME = "Config.toml"

T = TypeVar("T")

EnvironLike = Environment | Mapping[str, str] | None


class Config:
    """Resolved configuration container with dict-like access."""

    def __init__(self, data: dict[str, Any], source: Path | None = None):
        self.data = data
        self.source = source

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        value: Any = self.data
        for k in key.split("."):
            if not isinstance(value, dict) or k not in value:
                return default
            value = value[k]
        return value

    def __getitem__(self, key: str) -> Any:
        """Dict-like access: config['key'], config['nested']['key'] or config['nested.key']."""
        if "." in key:
            if key not in self:
                raise KeyError(f"Config key '{key}' not found")
            value = self.get(key)
        elif key in self.data:
            value = self.data[key]
        else:
            raise KeyError(f"Config key '{key}' not found")
        if isinstance(value, dict):
            return Config(value, self.source)
        return value

    def __contains__(self, key: str) -> bool:
        value: Any = self.data
        for k in key.split("."):
            if not isinstance(value, dict) or k not in value:
                return False
            value = value[k]
        return True

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Config):
            return self.data == other.data
        if isinstance(other, dict):
            return self.data == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"Config(keys={list(self.data)!r}, source={self.source!r})"

    def keys(self):
        return self.data.keys()

    def values(self):
        return self.data.values()

    def items(self):
        return self.data.items()

    def to_model(self, target: type[T]) -> T:
        """Convert the resolved tree into an instance of ``target``."""
        return deserialize(self.data, target)

    def render(self, fmt: str = "yaml") -> str:
        """Render the resolved tree as YAML or JSON text."""
        return serialize(self.data, fmt)


def deserialize(data: dict[str, Any], target: type[T]) -> T:
    """
    Validate a resolved tree into ``target``.

    Args:
        data: Resolved configuration table
        target: Any type pydantic can validate (BaseModel, dataclass, TypedDict, ...)

    Returns:
        Instance of target

    Raises:
        ConfigSerializeError: The tree does not fit the target type
    """
    try:
        return TypeAdapter(target).validate_python(data)
    except PydanticValidationError as e:
        errors = e.errors(include_url=False, include_input=False, include_context=False)
        problems = "; ".join(f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}" for err in errors)
        # Not chained: the pydantic error text carries the offending values
        raise ConfigSerializeError(
            f"Configuration does not match {getattr(target, '__name__', target)}: {problems}",
            details={"errors": errors},
        ) from None


def default_config_path(directory: Path | None = None) -> Path:
    """
    Locate the default configuration file.

    Args:
        directory: Directory to look in (default: current directory)

    Returns:
        Path to Config.toml

    Raises:
        ConfigFileNotFoundError: No default configuration file exists
    """
    if directory is None:
        directory = Path.cwd()
    path = directory / DEFAULT_CONFIG_FILENAME
    if not path.is_file():
        raise ConfigFileNotFoundError(
            f"Default config file not found: {path}\n"
            f"  Suggestion: Create a {DEFAULT_CONFIG_FILENAME} file in the current directory or pass a path",
            path=str(path),
        )
    return path


def read_config_text(path: Path) -> str:
    """Read a configuration file, mapping OS failures onto ConfigIOError."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigFileNotFoundError(f"Configuration file not found: {path}", path=str(path)) from e
    except IsADirectoryError as e:
        raise ConfigIOError(f"Configuration path is not a file: {path}", path=str(path)) from e
    except PermissionError as e:
        raise ConfigIOError(
            f"Permission denied reading configuration: {path}\n"
            f"  Error: {e}\n"
            f"  Suggestion: Check file permissions",
            path=str(path),
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigIOError(f"Error reading configuration {path}: {e}", path=str(path)) from e


@overload
def load_config(
    config_path: str | Path | None = None, target: None = None, *, environ: EnvironLike = None, fmt: str | None = None
) -> Config: ...


@overload
def load_config(
    config_path: str | Path | None, target: type[T], *, environ: EnvironLike = None, fmt: str | None = None
) -> T: ...


def load_config(config_path=None, target=None, *, environ=None, fmt=None):
    """
    Load a configuration file and overlay environment placeholders.

    Args:
        config_path: File to load (default: Config.toml in the current directory)
        target: Optional type to deserialize into (default: return a Config)
        environ: Environment or mapping to resolve from (default: process environment)
        fmt: Document format (default: inferred from the file suffix)

    Returns:
        Config, or an instance of target

    Raises:
        ConfigIOError: The file is missing or unreadable
        ConfigParseError: The document is malformed
        ResolutionError / MultipleErrors: One or more placeholders could not be resolved
        ConfigSerializeError: The resolved tree does not fit target
    """
    path = default_config_path() if config_path is None else Path(config_path)
    fmt = fmt or detect_format(path)
    logger.info(f"Loading {fmt} configuration from {path}")

    text = read_config_text(path)
    data = parse(text, fmt, source=str(path))
    return _finish(data, target, environ, source=path)


@overload
def load_config_from_str(
    config_str: str, target: None = None, *, environ: EnvironLike = None, fmt: str = "toml"
) -> Config: ...


@overload
def load_config_from_str(config_str: str, target: type[T], *, environ: EnvironLike = None, fmt: str = "toml") -> T: ...


def load_config_from_str(config_str, target=None, *, environ=None, fmt="toml"):
    """
    Load configuration from an in-memory document.

    Same behavior as load_config without the file access.
    """
    data = parse(config_str, fmt)
    return _finish(data, target, environ, source=None)


def _finish(data: dict[str, Any], target: Any, environ: EnvironLike, source: Path | None) -> Any:
    resolved = resolve_config(data, environ)
    if target is None:
        return Config(resolved, source)
    return deserialize(resolved, target)
