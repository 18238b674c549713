"""Command: project initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from vmctl.commands._context import AppContext


@click.command("init")
@click.argument("path", required=False, default=None)
@click.option("--box", default=None, help="Box name to record under [vm].")
@click.option("--force", is_flag=True, help="Overwrite an existing vmctl.toml.")
@click.pass_obj
def init_cmd(app: AppContext, path: str | None, box: str | None, force: bool) -> None:
    """Create a vmctl.toml marking PATH (default: cwd) as a project root."""
    from vmctl.services.init import InitService

    project_path = (Path(path) if path is not None else app.settings.cwd).resolve()
    app.emit(InitService.init_project(project_path, box=box, force=force))
