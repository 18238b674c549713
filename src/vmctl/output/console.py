"""Rich Console factory and theme for vmctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

VMCTL_THEME = Theme(
    {
        "vmctl.ok": "bold green",
        "vmctl.error": "bold red",
        "vmctl.warning": "bold yellow",
        "vmctl.op": "bold cyan",
        "vmctl.key": "dim",
        "vmctl.unset": "dim italic",
    }
)


def create_console(*, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=VMCTL_THEME,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
