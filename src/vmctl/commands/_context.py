"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Environment construction and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vmctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from vmctl.config.settings import CliSettings
    from vmctl.environment import Environment
    from vmctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The environment is built lazily and not loaded here, so ``--help``
    and ``--version`` never touch the filesystem.
    """

    def __init__(self, settings: CliSettings) -> None:
        self.settings = settings
        self._environment: Environment | None = None

        from vmctl.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @property
    def environment(self) -> Environment:
        """The (unloaded) environment rooted at ``settings.cwd``."""
        if self._environment is None:
            from vmctl.environment import Environment

            self._environment = Environment(self.settings.cwd)
        return self._environment

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
