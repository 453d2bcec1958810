"""
Main CLI entry point.
"""

import typer

from envoverlay import __version__
from envoverlay.cli import check, placeholders, show
from envoverlay.utils.logging import setup_logging


def version_callback(value: bool):
    """Callback to display version and exit."""
    if value:
        typer.echo(f"envoverlay version {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="envoverlay",
    help="envoverlay - configuration files with environment variable placeholders",
    add_completion=False,
)

# Register subcommands
app.command("check")(check.check)
app.command("show")(show.show)
app.command("placeholders")(placeholders.placeholders)


@app.callback(invoke_without_command=True)
def entrypoint(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)"),
):
    """
    envoverlay - configuration files with environment variable placeholders.

    Run 'envoverlay <command> --help' for help on a specific command.
    """
    setup_logging(log_level)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
