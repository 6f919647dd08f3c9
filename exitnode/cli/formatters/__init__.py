"""Output formatters for CLI commands."""

from .base import OutputFormatter, get_formatter
from .json import JsonFormatter
from .plain import PlainFormatter
from .table import TableFormatter
from .yaml import YamlFormatter

__all__ = [
    "JsonFormatter",
    "OutputFormatter",
    "PlainFormatter",
    "TableFormatter",
    "YamlFormatter",
    "get_formatter",
]
