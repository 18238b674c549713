"""Exception hierarchy for hard bootstrap failures.

Soft "not found" outcomes (no root path, no dotfile, no config source) are
``None`` return values and never raise. Everything here is a condition the
caller has to present to the user.
"""

from __future__ import annotations

from typing import Any


class VmctlError(Exception):
    """Base class for vmctl errors that carry a stable error code."""

    code = "VMCTL_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.detail = detail


class ConfigError(VmctlError):
    """A configuration source exists but cannot be parsed or validated."""

    code = "INVALID_CONFIG"


class BoxNotFoundError(VmctlError):
    """The configured box name is unknown to the box registry."""

    code = "BOX_NOT_FOUND"

    def __init__(self, name: str) -> None:
        super().__init__(f"Box not found: {name!r}", name=name)
        self.name = name


class RootPathNotFoundError(VmctlError):
    """An operation needs a project root but none was discovered."""

    code = "NO_ROOT_PATH"
