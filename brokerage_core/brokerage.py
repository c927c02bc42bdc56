"""
Gould-Fernandez brokerage calculation for network analysis.

A brokerage triad is a path ``i -> ego -> j`` where i, ego and j are three
distinct nodes, edges ``i -> ego`` and ``ego -> j`` exist and the direct edge
``i -> j`` does not. Each triad is classified by group membership:

- Coordinator: g(ego) = g(i) = g(j)
- Gatekeeper: g(ego) = g(j) != g(i)
- Representative: g(ego) = g(i) != g(j)
- Liaison: g(i) = g(j) != g(ego)
- Cosmopolitan: all three groups distinct

Only the forward edge ``i -> j`` disqualifies a triad; a reverse edge
``j -> i`` does not. In undirected graphs every triad is enumerated in both
directions, so each role count is floor-divided by two.

References:
    Gould, R. V., & Fernandez, R. M. (1989). Structures of mediation:
    A formal approach to brokerage in transaction networks.
    Sociological Methodology, 19, 89-126.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Tuple

from .config import AnalysisConfig, resolve_config
from .enums import Role
from .errors import ValidationError
from .graph import GraphView, as_graph_view
from .groups import group_of, resolve_groups
from .results import ROLE_FIELDS, BrokerageCounts, BrokerageResult

logger = logging.getLogger(__name__)

# (g(ego) == g(i), g(ego) == g(j), g(i) == g(j)) -> role
_ROLE_TABLE: Dict[Tuple[bool, bool, bool], Role] = {
    (True, True, True): Role.COORDINATOR,
    (False, True, False): Role.GATEKEEPER,
    (True, False, False): Role.REPRESENTATIVE,
    (False, False, True): Role.LIAISON,
    (False, False, False): Role.COSMOPOLITAN,
}


def classify_role(g_ego: Any, g_i: Any, g_j: Any) -> Role:
    """
    Brokerage role of ego in a triad ``i -> ego -> j`` given the three labels.

    Raises:
        ValidationError: If the labels' equality is not transitive (for
            example, a label type whose ``==`` is inconsistent)
    """
    key = (bool(g_ego == g_i), bool(g_ego == g_j), bool(g_i == g_j))
    try:
        return _ROLE_TABLE[key]
    except KeyError:
        raise ValidationError(
            f"Group labels {g_ego!r}, {g_i!r}, {g_j!r} do not compare consistently"
        ) from None


def _mediated_triads(view: GraphView, labels: Tuple[Any, ...], ego: int) -> Iterator[Tuple[int, int, Role]]:
    if view.is_directed():
        preds = view.in_neighbors(ego)
        succs = view.out_neighbors(ego)
    else:
        preds = succs = view.all_neighbors(ego)

    g_ego = group_of(labels, ego)
    for i in preds:
        for j in succs:
            if i == j:
                continue
            # ego only mediates when i cannot reach j directly
            if view.has_edge(i, j):
                continue
            yield i, j, classify_role(g_ego, group_of(labels, i), group_of(labels, j))


def _ego_counts(view: GraphView, labels: Tuple[Any, ...], ego: int) -> List[int]:
    counts = dict.fromkeys(Role, 0)
    for _, _, role in _mediated_triads(view, labels, ego):
        counts[role] += 1
    if not view.is_directed():
        for role in counts:
            counts[role] //= 2
    return [counts[role] for role in Role]


def brokerage(
    graph: Any,
    groups: Any,
    ego: int | None = None,
    config: AnalysisConfig | None = None,
):
    """
    Calculate Gould-Fernandez brokerage roles.

    Args:
        graph: Any supported graph (directed or undirected)
        groups: Dense sequence of labels (length == vertex count) or a
            mapping keyed by vertex (see `resolve_groups`)
        ego: When given, compute only this node's counts
        config: Optional configuration

    Returns:
        `BrokerageResult` for the whole network, or `BrokerageCounts` when
        ``ego`` is given

    Raises:
        ValidationError: If the group assignment does not cover the graph
            or ``ego`` is not a vertex; raised before any counting starts
    """
    cfg = resolve_config(config)
    view = as_graph_view(graph, cfg)
    labels = resolve_groups(view, groups)

    if ego is not None:
        ego = view.check_vertex(ego)
        return BrokerageCounts.from_roles(*_ego_counts(view, labels, ego))

    result = BrokerageResult.zeros(view.nv(), labels)
    for v in view.vertices():
        counts = _ego_counts(view, labels, v)
        for name, value in zip(ROLE_FIELDS, counts):
            getattr(result, name)[v - 1] = value
        result.total[v - 1] = sum(counts)
        if cfg.progress_every > 0 and v % cfg.progress_every == 0:
            logger.debug("brokerage: processed %d/%d egos", v, view.nv())

    logger.debug("brokerage over %d nodes: %s", view.nv(), result.summary())
    return result.freeze()


def brokerage_roles(
    graph: Any,
    groups: Any,
    ego: int,
    config: AnalysisConfig | None = None,
) -> List[Tuple[int, int, Role]]:
    """
    Every mediated triad ``(i, j, role)`` around ``ego``.

    This is the raw enumeration behind `brokerage`: in undirected graphs each
    unordered triad appears twice, once per direction.
    """
    view = as_graph_view(graph, config)
    labels = resolve_groups(view, groups)
    ego = view.check_vertex(ego)
    return list(_mediated_triads(view, labels, ego))
