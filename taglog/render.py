"""
Rendering functions for taglog terminal output.

This module handles the pretty tag listing. Structured changelog output is
emitted as JSON by the commands themselves.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from typing import List

from .domain import Tag

console = Console()


def render_tags_table(tags: List[Tag]) -> None:
    """
    Render tags as a pretty table, newest first.

    Args:
        tags: Tags in version order
    """
    if not tags:
        console.print("[yellow]No tags found.[/yellow]")
        return

    table = Table(
        title="Tags",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )

    table.add_column("Tag", style="cyan")
    table.add_column("Date", style="green")
    table.add_column("Previous", style="dim")
    table.add_column("Subject")

    for tag in tags:
        table.add_row(
            tag.name,
            tag.date.strftime('%Y-%m-%d %H:%M'),
            tag.previous.name if tag.previous else "-",
            tag.subject,
        )

    console.print(table)
