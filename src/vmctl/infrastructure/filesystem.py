"""Filesystem state owned by vmctl: the home directory and the dotfile.

Both are read optimistically. Absence is a normal outcome; any other OS
error propagates to the caller. There is no locking: the files belong to
the user and may change between calls.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Created under the configured home directory, in this order.
HOME_SUBDIRS: tuple[str, ...] = ("tmp", "boxes")


# ---------------------------------------------------------------------------
# Home directory
# ---------------------------------------------------------------------------


def ensure_home_directories(home: Path) -> list[Path]:
    """Create any missing :data:`HOME_SUBDIRS` under *home*.

    Returns the directories actually created, so a second call on an
    initialised home returns an empty list.
    """
    created: list[Path] = []
    for subdir in HOME_SUBDIRS:
        path = home / subdir
        if path.is_dir():
            continue
        path.mkdir(parents=True, exist_ok=True)
        logger.debug("Created home directory %s", path)
        created.append(path)
    return created


# ---------------------------------------------------------------------------
# Dotfile (persisted VM identity)
# ---------------------------------------------------------------------------


def read_identity(path: Path) -> str | None:
    """Return the VM identity token stored at *path*, or None.

    None covers both "never provisioned" (no regular file) and the file
    disappearing between the check and the open.
    """
    if not path.is_file():
        return None
    try:
        with path.open(encoding="utf-8") as fh:
            token = fh.read().strip()
    except FileNotFoundError:
        logger.debug("Dotfile vanished before it could be read: %s", path)
        return None
    return token or None


def write_identity(path: Path, token: str) -> None:
    """Persist *token* as the sole content of the dotfile at *path*."""
    path.write_text(token, encoding="utf-8")
    logger.debug("Persisted VM identity to %s", path)


def remove_identity(path: Path) -> bool:
    """Delete the dotfile. Returns False if there was nothing to delete."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    logger.debug("Removed dotfile %s", path)
    return True
