"""
Main CLI application using Typer.
"""

import logging
from typing import Optional

import typer
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console

from exitnode import __version__
from exitnode.cli.exit_codes import handle_cli_errors, success
from exitnode.cli.formatters import get_formatter
from exitnode.core.config import runtime_config, settings
from exitnode.core.exceptions import ConfigurationError
from exitnode.core.filters import filter_exit_nodes
from exitnode.core.models import DisplayShape, ExitNodeSummary
from exitnode.services.exit_node_setter import ExitNodeSetter
from exitnode.services.exit_node_source import ExitNodeSource
from exitnode.services.terminal_launcher import TerminalLauncher
from exitnode.utils.logger import get_logger, setup_logging

app = typer.Typer(
    name="exitnode",
    help="Exit Node Picker - choose a Tailscale exit node from the terminal",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
)

console = Console()
logger = get_logger(__name__)

NEW_WINDOW_OPTION = typer.Option(
    False,
    "--new-window",
    "-w",
    help="Open a new terminal window before starting the picker",
)


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        rprint(f"[bold]Exit Node Picker[/bold] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging",
        envvar="EXITNODE_DEBUG",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress output except errors",
    ),
    output_format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table, json, yaml, plain",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
):
    """
    Exit Node Picker

    Pick a Tailscale exit node by country, city or server.
    """
    with handle_cli_errors("Startup"):
        try:
            runtime_config.quiet = quiet
            runtime_config.output_format = output_format
            runtime_config.no_color = no_color
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid option: {e.errors()[0]['msg']}",
                details={"format": output_format},
            ) from e

    if debug:
        settings.debug = True
        settings.log_level = "DEBUG"

    log_level = None
    if quiet:
        log_level = "ERROR"
    elif debug:
        log_level = "DEBUG"

    setup_logging(log_level=log_level, rich_output=not no_color)


def _pick(shape: DisplayShape, new_window: bool) -> None:
    """Load exit nodes and run the picker in ``shape``."""
    from exitnode.tui.app import run_tui

    if new_window:
        TerminalLauncher(settings=settings).open()

    source = ExitNodeSource(settings=settings)
    rows = source.load()
    current = source.current_selection() if shape is DisplayShape.TABLE else ""

    # The TUI owns the terminal from here on; keep logs out of it.
    log_level = logging.getLevelName(logging.getLogger().level)
    setup_logging(log_level=log_level, console_output=False)
    try:
        choice = run_tui(
            rows,
            shape=shape,
            current=current,
            source=source,
            setter=ExitNodeSetter(settings=settings),
            settings=settings,
        )
    finally:
        setup_logging(log_level=log_level, rich_output=not runtime_config.no_color)

    if choice is not None:
        logger.info(f"Exit node applied: {choice.label}")


@app.command()
def servers(new_window: bool = NEW_WINDOW_OPTION):
    """Pick from a filterable table of every exit node."""
    with handle_cli_errors("Exit node picker"):
        _pick(DisplayShape.TABLE, new_window)


@app.command()
def countries(new_window: bool = NEW_WINDOW_OPTION):
    """Pick a country, then a city."""
    with handle_cli_errors("Exit node picker"):
        _pick(DisplayShape.DRILL_DOWN, new_window)


@app.command()
def hosts(new_window: bool = NEW_WINDOW_OPTION):
    """Pick from a flat list of exit node hosts."""
    with handle_cli_errors("Exit node picker"):
        _pick(DisplayShape.FLAT, new_window)


@app.command("list")
def list_nodes(
    query: Optional[str] = typer.Argument(
        None,
        help="Only show exit nodes whose country or city contains this text",
    ),
):
    """List available exit nodes."""
    with handle_cli_errors("Listing exit nodes"):
        rows = ExitNodeSource(settings=settings).load()
        rows = filter_exit_nodes(rows, query or "")
        data = [ExitNodeSummary.from_node(node).model_dump() for node in rows]
        typer.echo(get_formatter().format_list(data, title="Exit Nodes"))


@app.command()
def current():
    """Show the exit node currently in use."""
    with handle_cli_errors("Reading current exit node"):
        label = ExitNodeSource(settings=settings).current_selection()
        formatter = get_formatter()
        if runtime_config.output_format in ("json", "yaml"):
            typer.echo(formatter.format_single({"current": label or None}))
        elif label:
            typer.echo(label)
        elif not runtime_config.quiet:
            console.print("No exit node selected", style="dim")


@app.command()
def clear():
    """Stop using an exit node."""
    with handle_cli_errors("Clearing exit node"):
        result = ExitNodeSetter(settings=settings).clear()
        success("" if runtime_config.quiet else result.message)


def run() -> None:
    """Entry point for the console script."""
    app()


if __name__ == "__main__":
    run()
