"""
Table formatter for rich terminal tables.
"""

from io import StringIO
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table

from .base import OutputFormatter

# Columns shown right-aligned
NUMERIC_COLUMNS = {"ip"}


class TableFormatter(OutputFormatter):
    """Format output as rich terminal tables."""

    def _capture(self, renderable) -> str:
        buffer = StringIO()
        temp_console = Console(file=buffer, no_color=self.no_color, width=120)
        temp_console.print(renderable)
        return buffer.getvalue()

    def format_single(
        self,
        data: Dict[str, Any],
        title: Optional[str] = None,
        **kwargs
    ) -> str:
        """Format a single item as a key-value table."""
        table = Table(title=title, show_header=False)
        table.add_column("Field", style="cyan", no_wrap=True)
        table.add_column("Value")

        for key, value in data.items():
            display_key = key.replace("_", " ").title()
            if isinstance(value, bool):
                style = "green" if value else "red"
                table.add_row(display_key, f"[{style}]{'✓ Yes' if value else '✗ No'}[/{style}]")
            elif value is None or value == "":
                table.add_row(display_key, "[dim]Not set[/dim]")
            else:
                table.add_row(display_key, str(value))

        return self._capture(table)

    def format_list(
        self,
        data: List[Dict[str, Any]],
        columns: Optional[List[str]] = None,
        title: Optional[str] = None,
        **kwargs
    ) -> str:
        """Format a list of items as a table."""
        if not data:
            return "No data to display"

        if not columns:
            columns = list(data[0].keys())

        table = Table(title=title, show_header=True, header_style="bold magenta")

        for col in columns:
            if col in NUMERIC_COLUMNS:
                table.add_column(col.upper(), justify="right", no_wrap=True)
            else:
                table.add_column(col.replace("_", " ").title())

        for item in data:
            row = []
            for col in columns:
                value = item.get(col, "")
                if value is None or value == "":
                    row.append("[dim]-[/dim]")
                else:
                    row.append(str(value))
            table.add_row(*row)

        return self._capture(table)
