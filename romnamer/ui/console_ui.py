"""
Rich console output for romnamer

Renders the rename plan preview and the end-of-run summary.
"""

import logging
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from romnamer.planning.planner import PlanAction, RenamePlan

logger = logging.getLogger(__name__)

ACTION_STYLES = {
    PlanAction.MATCH_HEADERED: 'bright_green',
    PlanAction.MATCH_DEHEADERED: 'cyan',
    PlanAction.PREFIX_STRIP: 'yellow',
}


class ConsoleUI:
    """Prints plan and summary tables to the terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show_plan(self, plan: RenamePlan, limit: Optional[int] = None) -> None:
        """
        Print planned renames as a table, in plan order.

        Args:
            plan: Rename plan
            limit: Maximum rows to show (None for all)
        """
        if not plan.items:
            self.console.print("[dim]No renames planned.[/dim]")
            return

        table = Table(title="Planned renames", box=box.SIMPLE_HEAVY)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Action")
        table.add_column("Current name", overflow="fold")
        table.add_column("New name", overflow="fold")
        table.add_column("CRC32", style="magenta")
        table.add_column("Source", style="dim")

        shown = plan.items if limit is None else plan.items[:limit]
        for index, item in enumerate(shown, start=1):
            table.add_row(
                str(index),
                Text(item.action.value, style=ACTION_STYLES.get(item.action, '')),
                item.old_name,
                item.new_name,
                item.matched_checksum or "-",
                item.source_name or "-",
            )

        self.console.print(table)
        if limit is not None and len(plan.items) > limit:
            self.console.print(f"[dim]... and {len(plan.items) - limit} more (see plan CSV)[/dim]")

    def show_summary(self, summary) -> None:
        """Print end-of-run counts from a RunSummary."""
        table = Table(title="Summary", box=box.SIMPLE, show_header=False)
        table.add_column("Metric")
        table.add_column("Count", justify="right")

        for label, value in summary.as_rows():
            table.add_row(label, str(value))

        self.console.print(table)
