"""YAML formatter for human-readable structured output.
"""

from typing import Any

import yaml

from .base import OutputFormatter


class YamlFormatter(OutputFormatter):
    """Format output as YAML."""

    def format_single(self, data: dict[str, Any], **kwargs) -> str:
        """Format a single item as YAML."""
        return yaml.safe_dump(
            self._serialize(data),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

    def format_list(self, data: list[dict[str, Any]], **kwargs) -> str:
        """Format a list of items as YAML."""
        return yaml.safe_dump(
            [self._serialize(item) for item in data],
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

    def _serialize(self, obj: Any) -> Any:
        """Serialize object for YAML output."""
        if isinstance(obj, dict):
            return {k: self._serialize(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._serialize(item) for item in obj]
        elif hasattr(obj, "model_dump"):  # Pydantic model
            return self._serialize(obj.model_dump())
        return obj
