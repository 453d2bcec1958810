"""
envoverlay placeholders - List the environment variables a configuration uses.

Shows each placeholder's path, mode and whether its variable is set. Values
are never printed.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from envoverlay.cli.options import InputFormat, config_path_argument, input_format_option
from envoverlay.config.environment import OsEnvironment
from envoverlay.config.formats import detect_format, parse
from envoverlay.config.loader import default_config_path, read_config_text
from envoverlay.config.resolver import find_placeholders
from envoverlay.exceptions import EnvironmentLookupError, EnvOverlayError
from envoverlay.utils.display import print_error

console = Console()


def placeholders(
    config_path: Path | None = config_path_argument(),
    input_format: InputFormat | None = input_format_option(),
) -> None:
    """
    List every placeholder in the configuration.
    """
    try:
        path = default_config_path() if config_path is None else config_path
        fmt = input_format.value if input_format else detect_format(path)
        data = parse(read_config_text(path), fmt, source=str(path))
        found = find_placeholders(data)
    except EnvOverlayError as e:
        print_error(console, e)
        raise typer.Exit(1)

    if not found:
        console.print("[yellow]No placeholders found[/yellow]")
        return

    environ = OsEnvironment()
    table = Table(title=f"Placeholders in {escape(str(path))}", show_header=True, title_justify="left")
    table.add_column("Path", style="cyan")
    table.add_column("Variable", style="green")
    table.add_column("Mode")
    table.add_column("Status")

    for field_path, placeholder in found:
        try:
            is_set = environ.lookup(placeholder.name) is not None
            status = "[green]set[/green]" if is_set else "[red]missing[/red]" if placeholder.required else "[yellow]unset[/yellow]"
        except EnvironmentLookupError:
            status = "[red]unreadable[/red]"
        table.add_row(escape(field_path), placeholder.name, placeholder.mode, status)

    console.print(table)
