"""Project root discovery.

Walk-up finder locates the directory holding ``vmctl.toml``, similar to how
git finds ``.git/``. The nearest ancestor wins.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

ROOTFILE_NAME = "vmctl.toml"


def find_root(start: Path | str | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for ``vmctl.toml``.

    Returns the directory containing the rootfile, or None once the
    filesystem root has been checked without a match. A missing rootfile
    is a normal outcome and never raises.
    """
    # Symlinks are kept so the walk climbs the path as the user sees it.
    current = Path(os.path.abspath(start)) if start is not None else Path.cwd()
    while True:
        if (current / ROOTFILE_NAME).exists():
            logger.debug("Found %s in %s", ROOTFILE_NAME, current)
            return current
        parent = current.parent
        if parent == current:
            break
        current = parent
    logger.debug("No %s found above %s", ROOTFILE_NAME, start or "cwd")
    return None
