"""Subcommand modules for vmctl.

Provides register_commands() which uses deferred imports to keep
``vmctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from vmctl.commands.init_cmd import init_cmd
    from vmctl.commands.status import status

    cli.add_command(init_cmd)
    cli.add_command(status)
