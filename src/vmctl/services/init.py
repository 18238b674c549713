"""InitService — write a starter ``vmctl.toml`` that marks a project root."""

from __future__ import annotations

import json
from pathlib import Path

from vmctl.config.discovery import ROOTFILE_NAME
from vmctl.errors import VmctlError
from vmctl.services.result import ServiceError, ServiceResult

_ROOTFILE_HEADER = """\
# vmctl project configuration.
#
# Only overrides belong here; see `vmctl status` for the merged sources.
"""


def render_rootfile(box: str | None) -> str:
    """Render the starter rootfile content."""
    lines = [_ROOTFILE_HEADER, "[vm]"]
    if box:
        # JSON string literals are valid TOML basic strings.
        lines.append(f"box = {json.dumps(box)}")
    else:
        lines.append('# box = "base"')
    return "\n".join(lines) + "\n"


class InitService:
    """Creates the project marker file."""

    @staticmethod
    def init_project(path: Path, *, box: str | None = None, force: bool = False) -> ServiceResult:
        rootfile = path / ROOTFILE_NAME
        if rootfile.exists() and not force:
            return ServiceResult(
                ok=False,
                op="init",
                error=ServiceError(
                    code="ROOTFILE_EXISTS",
                    message=f"{rootfile} already exists (use --force to overwrite)",
                    detail={"path": str(rootfile)},
                ),
            )
        if not path.is_dir():
            return ServiceResult.failure(
                "init", VmctlError(f"Not a directory: {path}", path=str(path))
            )
        rootfile.write_text(render_rootfile(box), encoding="utf-8")
        return ServiceResult(
            ok=True,
            op="init",
            data={"rootfile": str(rootfile), "box": box},
        )
