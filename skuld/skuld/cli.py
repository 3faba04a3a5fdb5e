"""
skuld command-line interface.

Skuld, one of the Norns, is said to stand for debt. This tool puts you in
resource debt on purpose: every subcommand computes the same byte histogram
of a file, each with a different memory and I/O profile, so the cost of a
job can be measured before it is submitted anywhere that charges for it.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console

from skuld import __version__
from skuld.config import settings
from skuld.dispatch import AcquisitionRequest, dispatch, terminal_width
from skuld.errors import AcquisitionError
from skuld.strategies import AcquisitionStats, StrategyName

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)

app = typer.Typer(
    name="skuld",
    help="Count the bytes of a file with a chosen memory/I-O trade-off and print a histogram.",
    no_args_is_help=True,
)

PATH_HELP = "The file to process. This must be a regular file, not a pipe."


@dataclass
class RunOptions:
    repeat_count: int
    show_stats: bool


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"skuld {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    repeat: int = typer.Option(
        settings.repeat_count, "-n", "--repeat", min=0,
        help="The number of times to process the input file",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every pass to stderr"),
    stats: bool = typer.Option(False, "--stats", help="Print a resource report after the histogram"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    ctx.obj = RunOptions(repeat_count=repeat, show_stats=stats)


def _print_stats(strategy: StrategyName, stats: AcquisitionStats) -> None:
    err_console.print(f"[bold]{strategy.value}[/bold]: {stats.summary()}", soft_wrap=True)


def _run(ctx: typer.Context, strategy: StrategyName, path: Path,
         chunk_size: int = settings.chunk_size) -> None:
    options: RunOptions = ctx.obj
    request = AcquisitionRequest(strategy=strategy, path=path, repeat_count=options.repeat_count)
    try:
        result = dispatch(
            request,
            columns=terminal_width(settings.default_columns),
            marker=settings.marker,
            chunk_size=chunk_size,
            label_margin=settings.label_margin,
        )
    except AcquisitionError as e:
        logger.debug("%s failed during %s", strategy.value, e.operation)
        err_console.print(f"Error: {e}", style="bold red", markup=False, soft_wrap=True)
        raise typer.Exit(1)

    if options.show_stats:
        _print_stats(strategy, result.stats)


@app.command("scan")
def scan(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help=PATH_HELP),
    chunk_size: int = typer.Option(settings.chunk_size, "--chunk-size", min=1, help="Bytes per read"),
) -> None:
    """Scan the file in small chunks without loading all of it at once."""
    _run(ctx, StrategyName.SCAN, path, chunk_size=chunk_size)


@app.command("load")
def load(ctx: typer.Context, path: Path = typer.Argument(..., help=PATH_HELP)) -> None:
    """Load the whole file into memory on every pass and count it there."""
    _run(ctx, StrategyName.LOAD, path)


@app.command("load-once")
def load_once(ctx: typer.Context, path: Path = typer.Argument(..., help=PATH_HELP)) -> None:
    """Load the file into memory once and count that copy on every pass."""
    _run(ctx, StrategyName.LOAD_ONCE, path)


@app.command("waste")
def waste(ctx: typer.Context, path: Path = typer.Argument(..., help=PATH_HELP)) -> None:
    """Load the file on every pass and keep every copy until the end."""
    _run(ctx, StrategyName.WASTE, path)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(130)
