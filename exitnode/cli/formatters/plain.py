"""
Plain text formatter for simple output.
"""

from typing import Any, Dict, List, Optional

from .base import OutputFormatter


class PlainFormatter(OutputFormatter):
    """Format output as plain text, one record per line."""

    def format_single(self, data: Dict[str, Any], **kwargs) -> str:
        """Format a single item as ``Key: value`` lines."""
        lines = []
        for key, value in data.items():
            display_key = key.replace("_", " ").title()
            if isinstance(value, bool):
                display_value = "Yes" if value else "No"
            elif value is None or value == "":
                display_value = "Not set"
            else:
                display_value = str(value)
            lines.append(f"{display_key}: {display_value}")

        return "\n".join(lines)

    def format_list(
        self,
        data: List[Dict[str, Any]],
        columns: Optional[List[str]] = None,
        **kwargs
    ) -> str:
        """Format a list of items as tab separated lines."""
        if not data:
            return "No data to display"

        if not columns:
            columns = list(data[0].keys())

        return "\n".join(
            "\t".join(str(item.get(col, "")) for col in columns)
            for item in data
        )
