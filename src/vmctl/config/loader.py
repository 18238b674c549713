"""Layered configuration loading.

Each pass builds a fresh :class:`ConfigBuilder`, so no state leaks between
successive loads or between independent environments. Sources are merged in
load order:

  1. Built-in defaults — ``default.toml`` shipped inside this package
  2. Box layer         — ``vmctl.toml`` inside the resolved box directory
  3. Project rootfile  — ``<root_path>/vmctl.toml``

Later sources override earlier ones key by key; nested tables are merged,
not replaced. Any source may be absent.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from vmctl.config.discovery import ROOTFILE_NAME
from vmctl.config.models import VmctlConfig
from vmctl.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULTS_PATH = Path(__file__).resolve().parent / "default.toml"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict with *override* merged into *base* at the leaf level."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


@dataclass
class ConfigBuilder:
    """Ordered accumulator of parsed configuration layers for one pass."""

    layers: list[dict[str, Any]] = field(default_factory=list)
    sources: list[Path] = field(default_factory=list)

    def load(self, path: Path) -> bool:
        """Parse the TOML file at *path* and append it as the next layer.

        Returns False when the file does not exist.
        """
        try:
            raw = path.read_bytes()
        except (FileNotFoundError, IsADirectoryError):
            logger.debug("Config source absent: %s", path)
            return False
        try:
            data = tomllib.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
            msg = f"Invalid TOML in {path}: {exc}"
            raise ConfigError(msg, path=str(path)) from exc
        self.layers.append(data)
        self.sources.append(path)
        logger.debug("Loaded config source: %s", path)
        return True

    def execute(self) -> VmctlConfig:
        """Merge all layers in load order into one immutable snapshot."""
        merged: dict[str, Any] = {}
        for layer in self.layers:
            merged = deep_merge(merged, layer)
        try:
            return VmctlConfig.model_validate(merged)
        except ValidationError as exc:
            sources = ", ".join(str(p) for p in self.sources) or "<defaults>"
            msg = f"Invalid configuration in {sources}: {exc}"
            raise ConfigError(msg, sources=[str(p) for p in self.sources]) from exc


@dataclass(frozen=True)
class LoadedConfig:
    """Result of one load pass: the snapshot plus the sources actually read."""

    config: VmctlConfig
    sources: tuple[Path, ...]


def load_config(
    root_path: Path | None,
    *,
    box_directory: Path | None = None,
    defaults_path: Path = DEFAULTS_PATH,
) -> LoadedConfig:
    """Run one configuration pass and return the merged snapshot.

    The project rootfile is only consulted when *root_path* is known.
    """
    builder = ConfigBuilder()
    builder.load(defaults_path)
    if box_directory is not None:
        builder.load(box_directory / ROOTFILE_NAME)
    if root_path is not None:
        builder.load(root_path / ROOTFILE_NAME)
    return LoadedConfig(config=builder.execute(), sources=tuple(builder.sources))
