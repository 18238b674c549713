"""Handles returned by the box and VM registries.

The bootstrap core treats these as opaque references; only the fields
needed for reporting and dotfile persistence are modelled.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


class Box(BaseModel):
    """A named base image unpacked under ``<home>/boxes/<name>``."""

    model_config = {"frozen": True}

    name: str
    directory: Path
    ovf_file: str = "box.ovf"

    @property
    def ovf_path(self) -> Path:
        return self.directory / self.ovf_file


class VirtualMachine(BaseModel):
    """A live VM known to the hypervisor, keyed by its UUID."""

    model_config = {"frozen": True}

    uuid: str
    name: str | None = None
    state: str | None = None
