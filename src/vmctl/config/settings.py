"""Runtime settings for the CLI itself — flags and env vars in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``VMCTL_*`` prefix
  3. Code defaults

Project configuration (``vmctl.toml``) is deliberately not part of this
object; it is loaded per environment by :mod:`vmctl.config.loader`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings


class CliSettings(BaseSettings):
    """Settings governing one CLI invocation.

    Attributes:
        cwd: Directory the project root walk starts from.
        json_output: Emit results as JSON.
        quiet: Minimal output.
        verbose: Enable DEBUG logging for ``vmctl``.
        log_json: Structured JSON log lines on stderr.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "VMCTL_",
    }

    cwd: Path = Field(default_factory=Path.cwd)
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def from_cli(cls, *, cwd: str | Path | None = None, **cli_flags: Any) -> CliSettings:
        """Construct settings from a CLI invocation.

        Unset flags (``None`` or ``False``) are dropped so the matching
        ``VMCTL_*`` env var still applies when the flag is absent.
        """
        overrides: dict[str, Any] = {k: v for k, v in cli_flags.items() if v}
        if cwd is not None:
            overrides["cwd"] = Path(cwd)
        return cls(**overrides)
