"""
Group assignment resolution for brokerage analysis.

A group assignment labels every vertex with a group. Labels may be of any
type supporting ``==`` (ints, strings, enum members, tuples...). Two input
forms are accepted:
- Dense: a sequence whose position ``v-1`` holds vertex v's label
- Sparse: a mapping keyed by `GraphView.vertex_key` (the vertex id for
  native graphs and matrices, the node itself for networkx graphs)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Tuple

from .errors import ValidationError
from .graph import GraphView

logger = logging.getLogger(__name__)


def resolve_groups(graph: GraphView, groups: Any) -> Tuple[Any, ...]:
    """
    Validate a group assignment and return it in dense vertex order.

    Args:
        graph: Graph whose vertices must all be labeled
        groups: Dense sequence or sparse mapping of labels

    Returns:
        Tuple where position ``v-1`` is the label of vertex v

    Raises:
        ValidationError: If the sequence length differs from the vertex
            count, a mapping misses a vertex, or ``groups`` is not a
            sequence or mapping
    """
    n = graph.nv()

    if isinstance(groups, Mapping):
        resolved = []
        for v in graph.vertices():
            key = graph.vertex_key(v)
            if key not in groups:
                raise ValidationError(f"Group assignment is missing node {key!r}")
            resolved.append(groups[key])
        extra = len(groups) - n
        if extra > 0:
            logger.debug("Ignoring %d group keys that are not vertices", extra)
        return tuple(resolved)

    if isinstance(groups, (str, bytes)):
        raise ValidationError("Group assignment must be a sequence of labels, not a string")
    try:
        resolved = tuple(groups)
    except TypeError:
        raise ValidationError(
            f"Group assignment must be a sequence or mapping, got {type(groups).__name__}"
        ) from None
    if len(resolved) != n:
        raise ValidationError(
            f"Group assignment length {len(resolved)} does not match number of nodes {n}"
        )
    return resolved


def group_of(resolved: Tuple[Any, ...], v: int) -> Any:
    """Label of vertex ``v`` in a resolved assignment."""
    return resolved[v - 1]
