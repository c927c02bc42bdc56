"""
Investment (proportional tie strength) calculations for Burt's constraint.

The investment ``p_ij`` is the share of node i's relational effort directed
at node j:

    both: p_ij = (w(i,j) + w(j,i)) / sum_k (w(i,k) + w(k,i))
    out:  p_ij = w(i,j) / sum_k w(i,k)
    in:   p_ij = w(j,i) / sum_k w(k,i)

Sums run over i's neighborhood under the mode. A node whose denominator is
zero invests nothing, and ``p_ii`` is always 0.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from .config import AnalysisConfig, resolve_mode
from .enums import Mode
from .graph import GraphView, as_graph_view


class InvestmentCache:
    """
    Memo of neighbor sets, denominators and proportions for one computation.

    A cache is created by each top-level call and discarded when it returns;
    it is never shared between calls. Within a call,
    each node's row denominator is computed once, which keeps aggregate
    constraint at O(deg(i)^2) instead of O(deg(i)^3).

    Attributes:
        graph: Graph being read
        mode: Directionality policy fixed for the cache's lifetime
    """

    def __init__(self, graph: GraphView, mode: Mode):
        self.graph = graph
        self.mode = mode
        self._neighbors: Dict[int, List[int]] = {}
        self._denominators: Dict[int, float] = {}
        self._proportions: Dict[Tuple[int, int], float] = {}

    def __len__(self) -> int:
        return len(self._proportions)

    def neighbors(self, i: int) -> List[int]:
        """Neighborhood of ``i`` under the cache's mode."""
        if i not in self._neighbors:
            self._neighbors[i] = self.graph.neighbors(i, self.mode)
        return self._neighbors[i]

    def tie(self, i: int, j: int) -> float:
        """Raw tie strength from i to j under the mode (numerator of p_ij)."""
        if self.mode is Mode.OUT:
            return self.graph.weight(i, j)
        if self.mode is Mode.IN:
            return self.graph.weight(j, i)
        return self.graph.weight(i, j) + self.graph.weight(j, i)

    def denominator(self, i: int) -> float:
        if i not in self._denominators:
            self._denominators[i] = sum(self.tie(i, k) for k in self.neighbors(i))
        return self._denominators[i]

    def proportion(self, i: int, j: int) -> float:
        """Investment ``p_ij`` in [0, 1]."""
        if i == j:
            return 0.0
        key = (i, j)
        if key not in self._proportions:
            den = self.denominator(i)
            self._proportions[key] = self.tie(i, j) / den if den > 0 else 0.0
        return self._proportions[key]

    def indirect(self, i: int, j: int) -> float:
        """
        Indirect investment ``sum_q p_iq * p_qj`` over ``q != i, j``.

        Only i's neighborhood is visited since ``p_iq`` is zero elsewhere.
        """
        return sum(
            self.proportion(i, q) * self.proportion(q, j)
            for q in self.neighbors(i)
            if q != j
        )


def investment(
    graph: Any,
    i: int,
    j: int,
    mode: Mode | str | None = None,
    config: AnalysisConfig | None = None,
) -> float:
    """
    Proportional tie strength ``p_ij`` of node i toward node j.

    Args:
        graph: Any supported graph (`GraphView`, networkx graph, numpy matrix)
        i: Investing node (1-based)
        j: Target node (1-based)
        mode: "both" (default), "out" or "in"
        config: Optional configuration

    Returns:
        float in [0, 1]; 0.0 when i == j or i has no ties under the mode

    Raises:
        ValidationError: For unknown modes or vertices outside ``1..n``
    """
    view = as_graph_view(graph, config)
    i = view.check_vertex(i)
    j = view.check_vertex(j)
    return InvestmentCache(view, resolve_mode(mode, config)).proportion(i, j)


def investment_sum(
    graph: Any,
    i: int,
    j: int,
    mode: Mode | str | None = None,
    config: AnalysisConfig | None = None,
) -> float:
    """Indirect investment of i in j through i's other contacts (>= 0)."""
    view = as_graph_view(graph, config)
    i = view.check_vertex(i)
    j = view.check_vertex(j)
    if i == j:
        return 0.0
    return InvestmentCache(view, resolve_mode(mode, config)).indirect(i, j)
