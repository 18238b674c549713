"""Root CLI group for vmctl with global flags and command registration."""

from __future__ import annotations

import click

from vmctl import __version__
from vmctl.commands import register_commands
from vmctl.commands._context import AppContext
from vmctl.config.settings import CliSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="vmctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Log each bootstrap stage.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "-C",
    "--cwd",
    default=None,
    type=click.Path(file_okay=False),
    help="Start project discovery from this directory.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    cwd: str | None,
) -> None:
    """vmctl — project-scoped virtual machine environments."""
    settings = CliSettings.from_cli(
        cwd=cwd,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
