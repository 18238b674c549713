"""Box and VM registries — the lookup services the environment depends on.

The environment only needs ``find(key) -> handle | None``. Registries are
injected at construction so tests can substitute in-memory fakes; the
implementations here are the defaults used by the CLI.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from vmctl.domain.types import Box, VirtualMachine

logger = logging.getLogger(__name__)


class BoxRegistry(Protocol):
    """Resolves a box name to a :class:`Box`."""

    def find(self, name: str) -> Box | None: ...


class VMRegistry(Protocol):
    """Resolves a persisted identity token to a live :class:`VirtualMachine`."""

    def find(self, uuid: str) -> VirtualMachine | None: ...


class LocalBoxRegistry:
    """Boxes unpacked as directories under ``<home>/boxes``."""

    def __init__(self, boxes_dir: Path, *, ovf_file: str = "box.ovf") -> None:
        self.boxes_dir = boxes_dir
        self.ovf_file = ovf_file

    def find(self, name: str) -> Box | None:
        # Names are single path components; anything else cannot be a box.
        if not name or name in (".", "..") or Path(name).name != name:
            return None
        directory = self.boxes_dir / name
        if not directory.is_dir():
            return None
        return Box(name=name, directory=directory, ovf_file=self.ovf_file)


class VBoxManageRegistry:
    """VirtualBox VMs looked up through ``VBoxManage showvminfo``."""

    def __init__(self, executable: str = "VBoxManage") -> None:
        self.executable = executable

    def _showvminfo(self, uuid: str) -> str | None:
        try:
            result = subprocess.run(
                [self.executable, "showvminfo", uuid, "--machinereadable"],
                capture_output=True,
                text=True,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            logger.debug("showvminfo %s failed: %s", uuid, exc)
            return None
        return result.stdout

    def find(self, uuid: str) -> VirtualMachine | None:
        output = self._showvminfo(uuid)
        if output is None:
            return None
        info = parse_machinereadable(output)
        return VirtualMachine(uuid=uuid, name=info.get("name"), state=info.get("VMState"))


def parse_machinereadable(output: str) -> dict[str, str]:
    """Parse ``key="value"`` lines as printed by ``--machinereadable``."""
    info: dict[str, str] = {}
    for line in output.splitlines():
        key, sep, value = line.partition("=")
        if not sep:
            continue
        info[key.strip().strip('"')] = value.strip().strip('"')
    return info
