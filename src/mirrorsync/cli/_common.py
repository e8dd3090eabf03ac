"""Shared utilities for all CLI command modules.

Provides the Rich console instance, logging setup, the status-line
reporter and the option set shared by the default run and `run`.
"""

from __future__ import annotations

import hashlib
import logging

import click
from rich.console import Console
from rich.markup import escape

from .. import DEFAULT_CONFIG_PATH
from ..fingerprint import DEFAULT_ALGORITHM
from ..models import PairStatus

console = Console()
logger = logging.getLogger("mirrorsync.cli")

ALGORITHMS = sorted(
    name for name in hashlib.algorithms_guaranteed if not name.startswith("shake_")
)


def setup_logging(verbose: bool) -> None:
    """Configure stderr logging for the CLI process."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def print_status(message: str) -> None:
    """Reporter sink: print one status line, coloring errors."""
    line = escape(message)
    if message.startswith("[ERROR]"):
        console.print(f"[red]{line}[/]", highlight=False, soft_wrap=True)
    else:
        console.print(line, highlight=False, soft_wrap=True)


def quiet_status(message: str) -> None:
    """Reporter sink used when stdout is reserved for JSON."""
    logger.debug(message)


def status_label(status: PairStatus) -> str:
    """Map a pair outcome to a Rich-formatted label.

    Args:
        status: Pair outcome.

    Returns:
        str: Rich markup string for the status.
    """
    return {
        PairStatus.SUCCESS: "[bold green]SUCCESS[/]",
        PairStatus.PARTIAL: "[bold yellow]PARTIAL[/]",
        PairStatus.ABORTED: "[bold red]ABORTED[/]",
    }.get(status, "[dim]UNKNOWN[/]")


def run_options(func):
    """Attach the options shared by the default run and `run`."""
    options = [
        click.option(
            "--config", "config_path", default=DEFAULT_CONFIG_PATH,
            type=click.Path(dir_okay=False), show_default=True,
            help="JSON (or YAML) list of sync pairs.",
        ),
        click.option(
            "--algorithm", default=DEFAULT_ALGORITHM, show_default=True,
            type=click.Choice(ALGORITHMS, case_sensitive=False),
            help="Content hash used to compare files.",
        ),
        click.option(
            "--workers", default=1, show_default=True, type=click.IntRange(min=1),
            help="Threads used to hash each tree.",
        ),
        click.option("--dry-run", is_flag=True, help="Report what would be copied, change nothing."),
        click.option(
            "--halt-on-directory-error", is_flag=True,
            help="Stop the run when a pair's target root cannot be created.",
        ),
        click.option("--strict", is_flag=True, help="Exit 1 unless every pair fully succeeds."),
        click.option("--json-out", is_flag=True, help="Print the run report as JSON."),
    ]
    for option in reversed(options):
        func = option(func)
    return func
