"""
Filtering and grouping of exit node rows.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from exitnode.core.models import ExitNode


def filter_exit_nodes(nodes: Sequence[ExitNode], text: str) -> Tuple[ExitNode, ...]:
    """
    Narrow ``nodes`` to those whose country or city contains ``text``.

    Matching is case-insensitive and always runs against the full
    sequence passed in, so clearing the text gives back every row in
    source order.
    """
    if not text:
        return tuple(nodes)

    query = text.lower()
    return tuple(node for node in nodes if node.matches(query))


def group_by_country(nodes: Sequence[ExitNode]) -> Dict[str, List[str]]:
    """Map each country to its distinct cities, both in source order."""
    groups: Dict[str, List[str]] = {}
    for node in nodes:
        cities = groups.setdefault(node.country, [])
        if node.city not in cities:
            cities.append(node.city)
    return groups


def find_by_location(nodes: Sequence[ExitNode], country: str, city: str) -> Optional[ExitNode]:
    """First node in ``country`` and ``city``, if any."""
    return next(
        (node for node in nodes if node.country == country and node.city == city),
        None,
    )
