"""
envoverlay show - Print the resolved configuration.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.syntax import Syntax

from envoverlay.cli.options import InputFormat, OutputFormat, config_path_argument, input_format_option
from envoverlay.config.loader import load_config
from envoverlay.exceptions import EnvOverlayError
from envoverlay.utils.display import print_error

console = Console()


def show(
    config_path: Path | None = config_path_argument(),
    output_format: OutputFormat = typer.Option(OutputFormat.yaml, "--format", "-f", help="Output format"),
    input_format: InputFormat | None = input_format_option(),
    raw: bool = typer.Option(False, "--raw", help="Print plain text without highlighting"),
) -> None:
    """
    Print the configuration with every placeholder resolved.

    Examples:
        # Resolved Config.toml as YAML
        envoverlay show

        # A specific file as JSON, for piping
        envoverlay show deploy/prod.toml --format json --raw
    """
    try:
        config = load_config(config_path, fmt=input_format.value if input_format else None)
        text = config.render(output_format.value)
    except EnvOverlayError as e:
        print_error(console, e)
        raise typer.Exit(1)

    if raw:
        typer.echo(text, nl=False)
    else:
        console.print(Syntax(text, output_format.value, theme="monokai", line_numbers=False))
