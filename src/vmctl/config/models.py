"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: the shipped ``default.toml`` mirrors these defaults and
a project's ``vmctl.toml`` only contains overrides. A fresh project needs
nothing more than ``[vm] box``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- vmctl.toml sections ---


class VmctlSection(BaseModel):
    """[vmctl] section — where the tool keeps its own state."""

    model_config = {"frozen": True, "extra": "ignore"}

    home: str = "~/.vmctl"
    dotfile_name: str = ".vmctl"


class ForwardedPort(BaseModel):
    """[vm.forwarded_ports.<name>] entry."""

    model_config = {"frozen": True, "extra": "ignore"}

    guest: int
    host: int


def _default_forwarded_ports() -> dict[str, ForwardedPort]:
    return {"ssh": ForwardedPort(guest=22, host=2222)}


class VmSection(BaseModel):
    """[vm] section."""

    model_config = {"frozen": True, "extra": "ignore"}

    box: str | None = None
    box_ovf: str = "box.ovf"
    base_mac: str = "0800279C2E41"
    project_directory: str = "/vmctl"
    disk_image_format: str = "VMDK"
    forwarded_ports: dict[str, ForwardedPort] = Field(default_factory=_default_forwarded_ports)


class SshSection(BaseModel):
    """[ssh] section."""

    model_config = {"frozen": True, "extra": "ignore"}

    username: str = "vagrant"
    host: str = "localhost"
    forwarded_port_key: str = "ssh"
    max_tries: int = 10
    timeout: int = 10
    private_key_path: str | None = None


class PackageSection(BaseModel):
    """[package] section."""

    model_config = {"frozen": True, "extra": "ignore"}

    name: str = "vmctl"
    extension: str = ".box"


class VmctlConfig(BaseModel):
    """Root configuration snapshot composing all sections.

    One instance is produced per load pass and replaced wholesale on the
    next one.
    """

    model_config = {"frozen": True, "extra": "ignore"}

    vmctl: VmctlSection = Field(default_factory=VmctlSection)
    vm: VmSection = Field(default_factory=VmSection)
    ssh: SshSection = Field(default_factory=SshSection)
    package: PackageSection = Field(default_factory=PackageSection)
