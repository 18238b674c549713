"""Environment — per-invocation session state and its bootstrap sequence.

:meth:`Environment.load` runs the stages in a fixed order::

    resolve_root -> load_config -> ensure_home_directories
                 -> resolve_box -> load_config -> resolve_vm

Every stage is also callable on its own. A stage whose input is missing
(no project root, no box configured, no dotfile) leaves its attribute at
None and returns. Only a configured box that cannot be found, invalid
configuration, and OS errors other than "file not found" raise.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from vmctl.config.discovery import find_root
from vmctl.config.loader import DEFAULTS_PATH, load_config
from vmctl.config.models import VmctlConfig
from vmctl.errors import BoxNotFoundError, RootPathNotFoundError
from vmctl.infrastructure.filesystem import (
    ensure_home_directories,
    read_identity,
    remove_identity,
    write_identity,
)
from vmctl.infrastructure.registries import LocalBoxRegistry, VBoxManageRegistry

if TYPE_CHECKING:
    from vmctl.domain.types import Box, VirtualMachine
    from vmctl.infrastructure.registries import BoxRegistry, VMRegistry

logger = logging.getLogger(__name__)


class Environment:
    """Aggregate owning one CLI invocation's view of the project.

    Attributes:
        root_path: Directory holding ``vmctl.toml``, or None.
        config: Current configuration snapshot. Starts as the code defaults
            and is replaced wholesale by each :meth:`load_config`.
        config_sources: Files that contributed to :attr:`config`.
        box: Resolved box handle, or None.
        vm: VM handle restored from the dotfile, or None.
    """

    def __init__(
        self,
        cwd: Path | str | None = None,
        *,
        box_registry: BoxRegistry | None = None,
        vm_registry: VMRegistry | None = None,
        defaults_path: Path = DEFAULTS_PATH,
    ) -> None:
        self._cwd = Path(cwd) if cwd is not None else None
        self._box_registry = box_registry
        self._vm_registry = vm_registry
        self.defaults_path = defaults_path

        self.root_path: Path | None = None
        self.config = VmctlConfig()
        self.config_sources: tuple[Path, ...] = ()
        self.box: Box | None = None
        self.vm: VirtualMachine | None = None

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    @property
    def cwd(self) -> Path:
        """Working directory for root discovery (process cwd unless set)."""
        return self._cwd if self._cwd is not None else Path.cwd()

    @cwd.setter
    def cwd(self, value: Path | str) -> None:
        self._cwd = Path(value)

    @property
    def home_path(self) -> Path:
        return Path(self.config.vmctl.home).expanduser().resolve()

    @property
    def dotfile_path(self) -> Path | None:
        if self.root_path is None:
            return None
        return self.root_path / self.config.vmctl.dotfile_name

    # ------------------------------------------------------------------
    # Registries
    # ------------------------------------------------------------------

    @property
    def box_registry(self) -> BoxRegistry:
        if self._box_registry is not None:
            return self._box_registry
        # Follows the current config, so it is not cached.
        return LocalBoxRegistry(self.home_path / "boxes", ovf_file=self.config.vm.box_ovf)

    @property
    def vm_registry(self) -> VMRegistry:
        if self._vm_registry is None:
            self._vm_registry = VBoxManageRegistry()
        return self._vm_registry

    # ------------------------------------------------------------------
    # Bootstrap stages
    # ------------------------------------------------------------------

    def load(self) -> Environment:
        """Run the full bootstrap sequence. Errors from any stage propagate."""
        self.resolve_root()
        # The first pass sees defaults and the rootfile only.
        self.box = None
        self.load_config()
        self.ensure_home_directories()
        self.resolve_box()
        # Second pass picks up the box's own vmctl.toml, if it has one.
        self.load_config()
        self.resolve_vm()
        return self

    def resolve_root(self, start: Path | str | None = None) -> Path | None:
        """Find the nearest ancestor of *start* (default: :attr:`cwd`) with a rootfile.

        On success the result is stored in :attr:`root_path`; when nothing is
        found the environment is left untouched.
        """
        found = find_root(start if start is not None else self.cwd)
        if found is not None:
            self.root_path = found
        return found

    def load_config(self) -> VmctlConfig:
        """Recompute :attr:`config` from scratch."""
        loaded = load_config(
            self.root_path,
            box_directory=self.box.directory if self.box is not None else None,
            defaults_path=self.defaults_path,
        )
        self.config = loaded.config
        self.config_sources = loaded.sources
        return loaded.config

    def ensure_home_directories(self) -> list[Path]:
        return ensure_home_directories(self.home_path)

    def resolve_box(self) -> Box | None:
        """Look up ``config.vm.box``. Raises :class:`BoxNotFoundError` if unknown."""
        self.box = None
        name = self.config.vm.box
        if self.root_path is None or not name:
            return None
        box = self.box_registry.find(name)
        if box is None:
            raise BoxNotFoundError(name)
        logger.debug("Resolved box %s at %s", name, box.directory)
        self.box = box
        return box

    def resolve_vm(self) -> VirtualMachine | None:
        """Restore :attr:`vm` from the identity token in the dotfile."""
        self.vm = None
        dotfile = self.dotfile_path
        if dotfile is None:
            return None
        token = read_identity(dotfile)
        if token is None:
            logger.debug("No VM identity at %s", dotfile)
            return None
        self.vm = self.vm_registry.find(token)
        if self.vm is None:
            logger.debug("VM %s from %s is not registered", token, dotfile)
        return self.vm

    # ------------------------------------------------------------------
    # Persistence (used by provisioning commands)
    # ------------------------------------------------------------------

    def _require_dotfile(self) -> Path:
        dotfile = self.dotfile_path
        if dotfile is None:
            msg = "No project root found; cannot persist VM identity"
            raise RootPathNotFoundError(msg, cwd=str(self.cwd))
        return dotfile

    def persist_vm(self, vm: VirtualMachine) -> None:
        """Record *vm* as this project's VM and store its UUID in the dotfile."""
        write_identity(self._require_dotfile(), vm.uuid)
        self.vm = vm

    def depersist_vm(self) -> bool:
        """Forget this project's VM. Returns False if no dotfile existed."""
        removed = remove_identity(self._require_dotfile())
        self.vm = None
        return removed
