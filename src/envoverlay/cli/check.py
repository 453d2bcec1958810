"""
envoverlay check - Verify a configuration resolves.

Loads the document against the current environment and reports every
missing or unreadable variable at once.
"""

from pathlib import Path

import typer
from rich.console import Console

from envoverlay.cli.options import InputFormat, config_path_argument, input_format_option
from envoverlay.config.loader import load_config
from envoverlay.exceptions import EnvOverlayError
from envoverlay.utils.display import print_error

console = Console()


def check(
    config_path: Path | None = config_path_argument(),
    input_format: InputFormat | None = input_format_option(),
) -> None:
    """
    Load the configuration and report every unresolved placeholder.
    """
    try:
        config = load_config(config_path, fmt=input_format.value if input_format else None)
    except EnvOverlayError as e:
        print_error(console, e)
        raise typer.Exit(1)

    console.print(f"[green]OK[/green] {config.source} ({len(config)} top-level keys)", highlight=False)
