"""StatusService — bootstrap the environment and report what it found."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from vmctl.errors import VmctlError
from vmctl.services.result import ServiceResult

if TYPE_CHECKING:
    from vmctl.environment import Environment


def _path_or_none(value: Any) -> str | None:
    return str(value) if value is not None else None


class StatusService:
    """Runs :meth:`Environment.load` and summarises the session state."""

    def __init__(self, env: Environment) -> None:
        self._env = env

    def status(self) -> ServiceResult:
        env = self._env
        try:
            env.load()
        except VmctlError as exc:
            return ServiceResult.failure("status", exc)

        warnings: list[str] = []
        if env.root_path is None:
            warnings.append(f"No vmctl.toml found in {env.cwd} or any parent directory")
        elif env.vm is None and env.dotfile_path is not None and env.dotfile_path.is_file():
            warnings.append(f"VM recorded in {env.dotfile_path} is no longer registered")

        data: dict[str, Any] = {
            "cwd": str(env.cwd),
            "root_path": _path_or_none(env.root_path),
            "config_sources": [str(p) for p in env.config_sources],
            "home": str(env.home_path),
            "box": env.box.name if env.box is not None else None,
            "box_directory": _path_or_none(env.box.directory if env.box else None),
            "dotfile": _path_or_none(env.dotfile_path),
            "vm": env.vm.uuid if env.vm is not None else None,
            "vm_state": env.vm.state if env.vm is not None else None,
        }
        return ServiceResult(ok=True, op="status", data=data, warnings=warnings)
