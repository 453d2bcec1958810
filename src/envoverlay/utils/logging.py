"""
Logging configuration for envoverlay.

Console output through Rich, with optional plain-text file output.
"""

import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "envoverlay"


class FileFormatter(logging.Formatter):
    """Formatter for file logs - clean and parseable."""

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")


# Map string level names to logging constants
LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _parse_level(level: str | int) -> int:
    """
    Parse logging level from string or int.

    Args:
        level: Logging level as string (DEBUG, INFO, etc.) or int

    Returns:
        Logging level constant, INFO when the name is unknown
    """
    if isinstance(level, int):
        return level
    return LEVEL_MAP.get(level.upper(), logging.INFO)


def setup_logging(
    level: str | int = logging.WARNING,
    log_file: str | Path | None = None,
    console: Console | None = None,
    use_rich: bool = True,
) -> logging.Logger:
    """
    Setup logging configuration for envoverlay.

    Args:
        level: Logging level as string (DEBUG, INFO, etc.) or int (default: WARNING)
        log_file: Optional file path to write logs to (default: None, console only)
        console: Optional Rich Console instance to log through (default: stderr)
        use_rich: Whether to use RichHandler for the console (default: True)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Remove existing handlers to avoid duplicates on repeated setup
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level_int = _parse_level(level)
    logger.setLevel(level_int)

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=console or Console(stderr=True),
            level=level_int,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
            log_time_format="[%X]",
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level_int)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s - %(message)s"))
    logger.addHandler(handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        # File captures everything the logger lets through
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(FileFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance.

    Library code never configures handlers itself; call setup_logging() (the
    CLI does) to see output.

    Args:
        name: Logger name (default: "envoverlay")

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
