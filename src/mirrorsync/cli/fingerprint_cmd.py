"""Fingerprint command: print the hash map of one directory tree."""

from __future__ import annotations

import json
import sys

import click
from rich.markup import escape
from rich.table import Table

from ._common import ALGORITHMS, console
from ..errors import FingerprintError
from ..fingerprint import DEFAULT_ALGORITHM, fingerprint_tree


def register_fingerprint_commands(main: click.Group) -> None:
    """Register the fingerprint command."""

    @main.command("fingerprint")
    @click.argument("directory", type=click.Path())
    @click.option("--algorithm", default=DEFAULT_ALGORITHM, show_default=True,
                  type=click.Choice(ALGORITHMS, case_sensitive=False))
    @click.option("--workers", default=1, show_default=True, type=click.IntRange(min=1))
    @click.option("--json-out", is_flag=True, help="Print the map as JSON.")
    def fingerprint(directory, algorithm, workers, json_out):
        """Hash every regular file under DIRECTORY."""
        try:
            fingerprints = fingerprint_tree(directory, algorithm, workers)
        except FingerprintError as exc:
            console.print(f"[bold red]Fingerprint failed:[/] {escape(str(exc))}", soft_wrap=True)
            sys.exit(1)

        if json_out:
            click.echo(json.dumps(fingerprints, indent=2, sort_keys=True))
            return

        table = Table(title=f"{len(fingerprints)} file(s)", box=None)
        table.add_column("Digest", style="dim", no_wrap=True)
        table.add_column("Path", style="cyan")
        for rel in sorted(fingerprints):
            table.add_row(fingerprints[rel], escape(rel))
        console.print(table)
