"""
JSON formatter for machine-readable output.
"""

import json
from typing import Any, Dict, List

from .base import OutputFormatter


class JsonFormatter(OutputFormatter):
    """Format output as JSON."""

    def __init__(self, no_color: bool = False):
        """Initialize JSON formatter."""
        super().__init__(no_color)
        self.indent = 2

    def format_single(self, data: Dict[str, Any], **kwargs) -> str:
        """Format a single item as JSON."""
        return json.dumps(self._serialize(data), indent=self.indent, ensure_ascii=False)

    def format_list(self, data: List[Dict[str, Any]], **kwargs) -> str:
        """Format a list of items as JSON."""
        return json.dumps(
            [self._serialize(item) for item in data],
            indent=self.indent,
            ensure_ascii=False
        )

    def _serialize(self, obj: Any) -> Any:
        """Serialize object for JSON output."""
        if isinstance(obj, dict):
            return {k: self._serialize(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._serialize(item) for item in obj]
        elif hasattr(obj, "model_dump"):  # Pydantic model
            return self._serialize(obj.model_dump())
        return obj
