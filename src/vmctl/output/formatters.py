"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich key/value table) or machines
(--json). Quiet mode prints only failures and the operation name.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

from vmctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from vmctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False


def _format_value(value: Any) -> str:
    if value is None:
        return "[vmctl.unset]-[/vmctl.unset]"
    if isinstance(value, list):
        return escape("\n".join(str(v) for v in value)) if value else "[vmctl.unset]-[/]"
    if isinstance(value, dict):
        return escape(_json.dumps(value, separators=(",", ":")))
    return escape(str(value))


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if not result.ok:
        error_msg = result.error.message if result.error else "Unknown error"
        console.print(f"[vmctl.error]ERROR[/]: [vmctl.op]{result.op}[/] - {escape(error_msg)}")
        return get_output(console).rstrip("\n")

    console.print(f"[vmctl.ok]OK[/]: [vmctl.op]{result.op}[/]")
    if result.data and not settings.quiet:
        table = Table(show_header=False, box=None, padding=(0, 2, 0, 2))
        table.add_column(style="vmctl.key")
        table.add_column()
        for key, value in result.data.items():
            table.add_row(key, _format_value(value))
        console.print(table)
    return get_output(console).rstrip("\n")
