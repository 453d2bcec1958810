"""
Rich rendering helpers shared by the CLI commands.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from envoverlay.exceptions import EnvOverlayError, MultipleErrors, ResolutionError


def error_table(error: EnvOverlayError) -> Table:
    """Build a table with one row per underlying cause of ``error``."""
    causes = list(error) if isinstance(error, MultipleErrors) else [error]

    table = Table(title=f"{len(causes)} configuration error(s)", show_header=True, title_justify="left")
    table.add_column("Kind", style="red")
    table.add_column("Variable", style="cyan")
    table.add_column("Path", style="dim")
    table.add_column("Message")

    for cause in causes:
        if isinstance(cause, ResolutionError):
            table.add_row(type(cause).__name__, cause.variable, escape(cause.path or "-"), escape(cause.message))
        else:
            table.add_row(type(cause).__name__, "-", "-", escape(cause.message))
    return table


def print_error(console: Console, error: EnvOverlayError) -> None:
    """Print a load failure, listing every cause."""
    if isinstance(error, (MultipleErrors, ResolutionError)):
        console.print(error_table(error))
    else:
        console.print(f"[red]Error:[/red] {escape(error.message)}", highlight=False)
