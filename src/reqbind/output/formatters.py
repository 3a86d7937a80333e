"""Output mode selection for ServiceResult.

The CLI renders ServiceResult for humans (Rich tables and colors) or
machines (--json). The formatter picks the mode; renderers do the work.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reqbind.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output flags taken from the CLI."""

    json_output: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    from reqbind.output.renderers import render_result

    return render_result(result, verbose=settings.verbose)
