"""Run commands: the default sync run, `run`, and `plan`."""

from __future__ import annotations

import json
import sys

import click
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ._common import (
    ALGORITHMS,
    console,
    print_status,
    quiet_status,
    run_options,
    status_label,
)
from .. import DEFAULT_CONFIG_PATH
from ..config import load_pairs
from ..errors import ConfigError
from ..fingerprint import DEFAULT_ALGORITHM
from ..models import HaltPolicy, RunReport
from ..runner import run_pairs
from ..synchronizer import TreeSynchronizer


def _load_or_exit(config_path: str):
    try:
        return load_pairs(config_path)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/] {escape(str(exc))}", soft_wrap=True)
        sys.exit(1)


def _print_summary(report: RunReport) -> None:
    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Pair", style="cyan")
    table.add_column("Status")
    table.add_column("Copied", justify="right")
    table.add_column("Unchanged", justify="right")
    table.add_column("Failed", justify="right")

    for r in report.results:
        table.add_row(
            escape(r.name),
            status_label(r.status),
            str(len(r.copied)),
            str(r.unchanged),
            str(len(r.failed)),
        )
    for name in report.skipped:
        table.add_row(escape(name), "[dim]SKIPPED[/]", "-", "-", "-")

    console.print()
    console.print(table)
    if report.halted:
        console.print(
            f"\n[bold red]Run halted:[/] {len(report.skipped)} pair(s) not processed."
        )
    console.print()


def execute_run(
    config_path: str = DEFAULT_CONFIG_PATH,
    algorithm: str = DEFAULT_ALGORITHM,
    workers: int = 1,
    dry_run: bool = False,
    halt_on_directory_error: bool = False,
    strict: bool = False,
    json_out: bool = False,
) -> None:
    """Load the pair list, synchronize every pair, and report.

    Exits 1 when the config cannot be loaded, when the run halted, or
    (with strict) when any pair did not fully succeed.
    """
    pairs = _load_or_exit(config_path)
    reporter = quiet_status if json_out else print_status

    synchronizer = TreeSynchronizer(
        reporter=reporter,
        algorithm=algorithm,
        workers=workers,
        dry_run=dry_run,
    )
    policy = (
        HaltPolicy.HALT_ON_DIRECTORY_ERROR
        if halt_on_directory_error
        else HaltPolicy.CONTINUE
    )
    report = run_pairs(pairs, synchronizer, policy=policy, reporter=reporter)

    if json_out:
        click.echo(json.dumps(report.model_dump(mode="json"), indent=2))
    elif report.results or report.skipped:
        _print_summary(report)
    else:
        console.print("[dim]No sync pairs configured.[/]")

    if report.halted or (strict and not report.ok):
        sys.exit(1)


def register_run_commands(main: click.Group) -> None:
    """Register the run and plan commands."""

    @main.command("run")
    @run_options
    def run(config_path, algorithm, workers, dry_run,
            halt_on_directory_error, strict, json_out):
        """Synchronize every configured pair.

        Same as invoking mirrorsync with no subcommand.

        Examples:

            mirrorsync run --config pairs.json

            mirrorsync run --dry-run --algorithm sha256
        """
        execute_run(
            config_path=config_path,
            algorithm=algorithm,
            workers=workers,
            dry_run=dry_run,
            halt_on_directory_error=halt_on_directory_error,
            strict=strict,
            json_out=json_out,
        )

    @main.command("plan")
    @click.option("--config", "config_path", default=DEFAULT_CONFIG_PATH,
                  type=click.Path(dir_okay=False), show_default=True,
                  help="JSON (or YAML) list of sync pairs.")
    @click.option("--algorithm", default=DEFAULT_ALGORITHM, show_default=True,
                  type=click.Choice(ALGORITHMS, case_sensitive=False))
    @click.option("--workers", default=1, show_default=True, type=click.IntRange(min=1))
    def plan(config_path, algorithm, workers):
        """Show which files each pair would copy, without copying."""
        pairs = _load_or_exit(config_path)
        synchronizer = TreeSynchronizer(
            reporter=quiet_status,
            algorithm=algorithm,
            workers=workers,
            dry_run=True,
        )
        report = run_pairs(pairs, synchronizer)

        if not report.results:
            console.print("[dim]No sync pairs configured.[/]")
            return

        for r in report.results:
            if r.error:
                body = f"[red]{escape(r.error)}[/]"
            elif r.copied:
                body = "\n".join(f"[green]+[/] {escape(rel)}" for rel in r.copied)
            else:
                body = "[dim]Up to date.[/]"
            console.print(Panel(
                f"{body}\n\n[dim]{len(r.copied)} to copy, {r.unchanged} unchanged[/]",
                title=f"{escape(r.name)} {status_label(r.status)}",
                border_style="cyan",
            ))
