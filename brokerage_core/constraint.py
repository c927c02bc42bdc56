"""
Burt's structural-holes constraint.

Dyadic constraint measures how much a single contact j limits node i:

    c_ij = (p_ij + sum_q p_iq * p_qj) ** 2

Aggregate constraint sums the dyadic terms over i's neighborhood. Low values
mean i spans structural holes; high values mean i's contacts are tied to one
another.

References:
    Burt, R. S. (1992). Structural Holes: The Social Structure of
    Competition. Harvard University Press.
"""

from __future__ import annotations

import logging
from typing import Any, List, Tuple

from .config import AnalysisConfig, resolve_mode
from .enums import Mode
from .errors import ValidationError
from .graph import Edge, as_graph_view
from .investment import InvestmentCache

logger = logging.getLogger(__name__)


def _edge_endpoints(edge: Any) -> Tuple[int, int]:
    if isinstance(edge, Edge):
        return edge.src, edge.dst
    if isinstance(edge, (tuple, list)) and len(edge) == 2:
        return edge[0], edge[1]
    raise ValidationError(f"Expected an Edge or (src, dst) pair, got {edge!r}")


def _dyad(cache: InvestmentCache, i: int, j: int) -> float:
    if i == j:
        return 0.0
    return (cache.proportion(i, j) + cache.indirect(i, j)) ** 2


def dyadconstraint(
    graph: Any,
    i: Any,
    j: int | None = None,
    mode: Mode | str | None = None,
    config: AnalysisConfig | None = None,
) -> float:
    """
    Constraint on node i from its tie to node j.

    Args:
        graph: Any supported graph
        i: Ego vertex, or an `Edge` / ``(src, dst)`` pair when ``j`` is omitted
        j: Alter vertex
        mode: "both" (default), "out" or "in"
        config: Optional configuration

    Returns:
        float in [0, 1]

    Raises:
        ValidationError: For malformed edges, unknown modes or vertices
            outside ``1..n``
    """
    if j is None:
        i, j = _edge_endpoints(i)
    view = as_graph_view(graph, config)
    i = view.check_vertex(i)
    j = view.check_vertex(j)
    return _dyad(InvestmentCache(view, resolve_mode(mode, config)), i, j)


def constraint(
    graph: Any,
    i: int,
    mode: Mode | str | None = None,
    config: AnalysisConfig | None = None,
) -> float:
    """
    Aggregate constraint of node i: the sum of its dyadic constraints.

    One `InvestmentCache` serves every dyadic term of the call, so each
    contact's row of investments is computed once.

    Returns:
        float in [0, degree(i)]; 0.0 for an isolated node
    """
    view = as_graph_view(graph, config)
    i = view.check_vertex(i)
    cache = InvestmentCache(view, resolve_mode(mode, config))
    total = sum(_dyad(cache, i, j) for j in cache.neighbors(i))
    logger.debug(
        "constraint(%d, mode=%s) = %.6f over %d contacts (%d cached proportions)",
        i, cache.mode.value, total, len(cache.neighbors(i)), len(cache),
    )
    return total


def constraints(
    graph: Any,
    mode: Mode | str | None = None,
    config: AnalysisConfig | None = None,
) -> List[float]:
    """Aggregate constraint of every vertex; entry ``v-1`` belongs to vertex ``v``."""
    view = as_graph_view(graph, config)
    mode = resolve_mode(mode, config)
    return [constraint(view, v, mode) for v in view.vertices()]
