"""
mirrorsync CLI.

The main Click group runs the configured sync when invoked without a
subcommand, so a bare `mirrorsync` behaves like the one-shot tool.
Subcommands are registered from their own modules.

Run options given before a subcommand become that subcommand's
defaults (`mirrorsync --dry-run run` is a dry run). Options the
subcommand has no use for are a usage error.

Entry point: mirrorsync.cli:main
"""

from __future__ import annotations

import click
from click.core import ParameterSource

from .. import __version__
from ._common import run_options, setup_logging
from .run_cmd import execute_run

# Root-level options each subcommand accepts. plan is always a dry run.
SUBCOMMAND_OPTIONS = {
    "run": {
        "config_path", "algorithm", "workers", "dry_run",
        "halt_on_directory_error", "strict", "json_out",
    },
    "plan": {"config_path", "algorithm", "workers", "dry_run"},
    "fingerprint": {"algorithm", "workers", "json_out"},
}


def _given_options(ctx: click.Context) -> dict:
    """Return the run options the user actually set on the root group."""
    return {
        name: value
        for name, value in ctx.params.items()
        if name != "verbose"
        and ctx.get_parameter_source(name) not in (None, ParameterSource.DEFAULT)
    }


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="mirrorsync")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@run_options
@click.pass_context
def main(ctx, verbose, config_path, algorithm, workers, dry_run,
         halt_on_directory_error, strict, json_out):
    """mirrorsync: copy only what changed.

    Mirrors each configured source tree into its target, comparing
    files by content hash.
    """
    setup_logging(verbose)
    if ctx.invoked_subcommand is None:
        execute_run(
            config_path=config_path,
            algorithm=algorithm,
            workers=workers,
            dry_run=dry_run,
            halt_on_directory_error=halt_on_directory_error,
            strict=strict,
            json_out=json_out,
        )
        return

    given = _given_options(ctx)
    accepted = SUBCOMMAND_OPTIONS.get(ctx.invoked_subcommand, set())
    rejected = sorted(set(given) - accepted)
    if rejected:
        flags = {p.name: p.opts[0] for p in ctx.command.params}
        raise click.UsageError(
            f"{', '.join(flags[name] for name in rejected)} cannot be used "
            f"with '{ctx.invoked_subcommand}'",
            ctx=ctx,
        )
    ctx.default_map = {ctx.invoked_subcommand: given}


# ---------------------------------------------------------------------------
# Register all command groups/commands from modular files
# ---------------------------------------------------------------------------

from .run_cmd import register_run_commands
from .fingerprint_cmd import register_fingerprint_commands

register_run_commands(main)
register_fingerprint_commands(main)
