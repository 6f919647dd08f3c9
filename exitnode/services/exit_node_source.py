"""
Exit node listing service.
"""

import re
from typing import List, Optional, Tuple

from exitnode.core.config import LIST_COMMAND, Settings
from exitnode.core.exceptions import CommandError, SourceUnavailableError
from exitnode.core.models import ANY_CITY, ExitNode
from exitnode.services.base import BaseService
from exitnode.services.command_runner import CommandRunner
from exitnode.utils.logger import get_logger

logger = get_logger(__name__)

COLUMN_SEPARATOR = re.compile(r"\s{2,}")
COMMENT_MARKER = "#"
HEADER_LINES = 2
SELECTED_MARKER = "selected"


def parse_exit_node_list(output: str, min_fields: int = 4) -> Tuple[ExitNode, ...]:
    """
    Parse the tabular output of ``tailscale exit-node list``.

    The first two lines (header and separator) are dropped, as are comment
    lines, rows with fewer than ``min_fields`` columns and rows whose city
    is ``Any``. Columns are separated by runs of two or more whitespace
    characters so multi-word names like "Czech Republic" survive.

    Args:
        output: Raw stdout of the listing command
        min_fields: Minimum number of columns a row needs

    Returns:
        Parsed rows in source order
    """
    nodes: List[ExitNode] = []

    for line_no, line in enumerate(output.splitlines()[HEADER_LINES:], start=HEADER_LINES + 1):
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_MARKER):
            continue

        fields = COLUMN_SEPARATOR.split(stripped)
        if len(fields) < min_fields:
            logger.debug(f"Skipping line {line_no}: expected {min_fields} fields, got {len(fields)}")
            continue

        address, hostname, country, city = fields[:4]
        if city == ANY_CITY:
            continue

        nodes.append(
            ExitNode(
                address=address,
                hostname=hostname,
                country=country,
                city=city,
                status=" ".join(fields[4:]),
            )
        )

    return tuple(nodes)


def parse_selected_line(output: str) -> str:
    """
    Find the active exit node in listing output.

    Returns:
        "<country>, <city>" of the first line marked selected, or an empty
        string when there is none
    """
    for line in output.splitlines():
        if SELECTED_MARKER not in line:
            continue

        words = line.split()
        if len(words) < 4:
            continue

        country, city = words[2], words[3]
        if city == ANY_CITY:
            continue

        return f"{country}, {city}"

    return ""


class ExitNodeSource(BaseService):
    """Loads exit nodes from the tailscale CLI."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(runner=runner, settings=settings)

    def _list_output(self) -> str:
        try:
            result = self.runner.run(LIST_COMMAND)
        except CommandError as e:
            raise SourceUnavailableError(e.message, command=LIST_COMMAND) from e

        if not result.ok:
            raise SourceUnavailableError(
                f"{' '.join(LIST_COMMAND)} exited with status {result.return_code}",
                command=LIST_COMMAND,
                return_code=result.return_code,
                stderr=result.stderr,
            )

        return result.stdout

    def load(self) -> Tuple[ExitNode, ...]:
        """
        Run the listing command once and parse it.

        Returns:
            All selectable exit nodes

        Raises:
            SourceUnavailableError: If the command is missing, fails or
                its output cannot be read
        """
        output = self._list_output()
        nodes = parse_exit_node_list(output, min_fields=self.settings.min_fields)
        self.logger.info(f"Loaded {len(nodes)} exit nodes")
        return nodes

    def current_selection(self) -> str:
        """
        Re-run the listing command and report the active exit node.

        Never raises. The listing is queried fresh every time rather than
        cached.

        Returns:
            "<country>, <city>" or an empty string
        """
        try:
            output = self._list_output()
        except SourceUnavailableError as e:
            self.logger.warning(f"Could not determine current exit node: {e.message}")
            return ""

        return parse_selected_line(output)
