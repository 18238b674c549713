"""Shared pytest fixtures and test helpers for vmctl tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from vmctl.config.discovery import ROOTFILE_NAME
from vmctl.domain.types import Box, VirtualMachine
from vmctl.environment import Environment


class FakeBoxRegistry:
    """In-memory box registry recording every lookup."""

    def __init__(self, boxes: dict[str, Box] | None = None) -> None:
        self.boxes = boxes or {}
        self.calls: list[str] = []

    def find(self, name: str) -> Box | None:
        self.calls.append(name)
        return self.boxes.get(name)


class FakeVMRegistry:
    """In-memory VM registry recording every lookup."""

    def __init__(self, vms: dict[str, VirtualMachine] | None = None) -> None:
        self.vms = vms or {}
        self.calls: list[str] = []

    def find(self, uuid: str) -> VirtualMachine | None:
        self.calls.append(uuid)
        return self.vms.get(uuid)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Unused vmctl home directory inside the test's temp dir."""
    return tmp_path / "home"


@pytest.fixture
def project_root(tmp_path: Path, home_dir: Path) -> Path:
    """Project directory whose rootfile points vmctl's home at ``home_dir``."""
    root = tmp_path / "project"
    root.mkdir()
    write_rootfile(root, f'[vmctl]\nhome = "{home_dir.as_posix()}"\n')
    return root


@pytest.fixture
def box_registry() -> FakeBoxRegistry:
    return FakeBoxRegistry()


@pytest.fixture
def vm_registry() -> FakeVMRegistry:
    return FakeVMRegistry()


@pytest.fixture
def env(
    project_root: Path, box_registry: FakeBoxRegistry, vm_registry: FakeVMRegistry
) -> Environment:
    """Unloaded environment rooted inside ``project_root`` with fake registries."""
    return Environment(project_root, box_registry=box_registry, vm_registry=vm_registry)


@pytest.fixture
def _isolated_home(home_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point ``~`` at the temp home so default config never touches the real one."""
    monkeypatch.setenv("HOME", str(home_dir))


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_rootfile(directory: Path, content: str = "") -> Path:
    """Write a ``vmctl.toml`` into *directory* and return its path."""
    path = directory / ROOTFILE_NAME
    path.write_text(content, encoding="utf-8")
    return path


def append_rootfile(directory: Path, content: str) -> None:
    path = directory / ROOTFILE_NAME
    path.write_text(path.read_text(encoding="utf-8") + content, encoding="utf-8")


def track_reads(monkeypatch: pytest.MonkeyPatch) -> list[Path]:
    """Record every path opened or read through ``pathlib`` from now on."""
    reads: list[Path] = []
    for name in ("open", "read_bytes", "read_text"):
        original = getattr(Path, name)

        def tracking(self: Path, *args: object, _original=original, **kwargs: object) -> object:
            reads.append(self)
            return _original(self, *args, **kwargs)

        monkeypatch.setattr(Path, name, tracking)
    return reads
