"""Command: show the bootstrapped environment."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from vmctl.commands._context import AppContext


@click.command("status")
@click.pass_obj
def status(app: AppContext) -> None:
    """Locate the project, load its configuration and report the VM state."""
    from vmctl.services.status import StatusService

    app.emit(StatusService(app.environment).status())
