"""Shared rich console for all user-facing output."""

from __future__ import annotations

from rich.console import Console

console = Console()


def print_tool_output(lines: list[str]) -> None:
    """Dump captured recognition output, dimmed and without markup parsing."""
    for line in lines:
        console.print(line, style="dim", markup=False, highlight=False)
