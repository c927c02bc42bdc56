"""
Graph access layer for structural-hole and brokerage analysis.

The engines never touch a host graph directly. They read it through the
`GraphView` capability interface, which exposes:
- Vertex count and directedness
- Neighbor sets by direction (self-loops never appear in them)
- Edge existence and edge weight (1.0 for unweighted graphs, 0.0 if absent)

One implementation exists per concrete representation:
- Graph: native adjacency structure built from `Edge` objects
- NetworkXGraph: read-only wrapper over a networkx Graph/DiGraph
- MatrixGraph: read-only wrapper over a square numpy adjacency matrix

Vertices are always addressed by integer ids ``1..n``.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

import networkx as nx
import numpy as np

from .config import AnalysisConfig, resolve_config
from .enums import Mode
from .errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass
class Edge:
    """
    A directed (or, in an undirected graph, symmetric) tie between vertices.

    Attributes:
        src: Source vertex id (1-based)
        dst: Destination vertex id (1-based)
        w: Tie strength; ignored by unweighted graphs
    """

    src: int
    """Vertex where the tie originates."""

    dst: int
    """Vertex where the tie terminates."""

    w: float = 1.0
    """Tie strength; must be positive and finite."""


def _check_weight(w: Any, u: Any, v: Any) -> float:
    try:
        value = float(w)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Edge ({u}, {v}) has non-numeric weight {w!r}") from exc
    if not math.isfinite(value) or value <= 0.0:
        raise ValidationError(
            f"Edge ({u}, {v}) has weight {value}; weights must be positive and finite"
        )
    return value


class GraphView(ABC):
    """
    Uniform read-only view over a host graph.

    Subclasses supply the raw primitives (``_out_raw``, ``_in_raw``,
    ``_has_edge_raw``, ``_weight_raw``) over 1-based vertex ids. The public
    methods validate vertex ids and strip the queried vertex from its own
    neighbor sets, so a self-loop can never make a vertex its own neighbor.
    """

    @abstractmethod
    def nv(self) -> int:
        """Number of vertices."""

    @abstractmethod
    def is_directed(self) -> bool:
        """True if ties are directed."""

    @abstractmethod
    def _out_raw(self, v: int) -> Iterable[int]:
        ...

    @abstractmethod
    def _in_raw(self, v: int) -> Iterable[int]:
        ...

    @abstractmethod
    def _has_edge_raw(self, u: int, v: int) -> bool:
        ...

    @abstractmethod
    def _weight_raw(self, u: int, v: int) -> float:
        ...

    def vertices(self) -> range:
        """Vertex ids ``1..n`` in order."""
        return range(1, self.nv() + 1)

    def check_vertex(self, v: Any) -> int:
        """
        Validate a vertex id and return it as a plain int.

        Raises:
            ValidationError: If ``v`` is not an integer in ``1..n``
        """
        if isinstance(v, bool) or not isinstance(v, (int, np.integer)):
            raise ValidationError(f"Vertex id must be an integer, got {v!r}")
        n = self.nv()
        if not 1 <= v <= n:
            raise ValidationError(f"Node {v} is not in the graph (valid range 1..{n})")
        return int(v)

    def vertex_key(self, v: int) -> Any:
        """Key identifying vertex ``v`` in sparse group mappings."""
        return v

    def out_neighbors(self, v: int) -> List[int]:
        """Sorted vertices ``u != v`` with an edge ``v -> u``."""
        v = self.check_vertex(v)
        return sorted(u for u in self._out_raw(v) if u != v)

    def in_neighbors(self, v: int) -> List[int]:
        """Sorted vertices ``u != v`` with an edge ``u -> v``."""
        v = self.check_vertex(v)
        if not self.is_directed():
            return self.out_neighbors(v)
        return sorted(u for u in self._in_raw(v) if u != v)

    def all_neighbors(self, v: int) -> List[int]:
        """Sorted union of in- and out-neighbors of ``v``."""
        v = self.check_vertex(v)
        if not self.is_directed():
            return self.out_neighbors(v)
        merged = set(self._out_raw(v))
        merged.update(self._in_raw(v))
        merged.discard(v)
        return sorted(merged)

    def neighbors(self, v: int, mode: Mode | str = Mode.BOTH) -> List[int]:
        """Neighbor set of ``v`` selected by ``mode`` (both/out/in)."""
        mode = Mode.parse(mode)
        if mode is Mode.OUT:
            return self.out_neighbors(v)
        if mode is Mode.IN:
            return self.in_neighbors(v)
        return self.all_neighbors(v)

    def degree(self, v: int, mode: Mode | str = Mode.BOTH) -> int:
        """Size of the ``mode`` neighbor set of ``v`` (self-loops excluded)."""
        return len(self.neighbors(v, mode))

    def has_edge(self, u: int, v: int) -> bool:
        """True if the ordered edge ``u -> v`` exists."""
        return self._has_edge_raw(self.check_vertex(u), self.check_vertex(v))

    def weight(self, u: int, v: int) -> float:
        """Weight of ``u -> v``: 0.0 if absent, 1.0 if present but unweighted."""
        u = self.check_vertex(u)
        v = self.check_vertex(v)
        if not self._has_edge_raw(u, v):
            return 0.0
        return float(self._weight_raw(u, v))


class Graph(GraphView):
    """
    Native adjacency-dict graph over vertices ``1..n``.

    The graph is simple: adding an existing edge replaces its weight. In an
    undirected graph every edge is stored in both directions. Self-loops are
    stored (and reported by `has_edge`) but never appear in neighbor sets.

    Attributes:
        directed: True for a digraph
        weighted: When False every present edge has weight 1.0
        out_edges: Mapping vertex -> {successor: weight}
        in_edges: Mapping vertex -> {predecessor: weight}
    """

    def __init__(
        self,
        n: int = 0,
        directed: bool = True,
        weighted: bool = False,
        config: AnalysisConfig | None = None,
    ):
        """
        Create a graph with ``n`` isolated vertices.

        Args:
            n: Initial vertex count
            directed: Whether ties are directed
            weighted: Whether `Edge.w` values are kept (otherwise weight 1.0)
            config: Optional configuration (weight validation)
        """
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise ValidationError(f"Vertex count must be a non-negative integer, got {n!r}")
        self.directed = directed
        self.weighted = weighted
        self.config = resolve_config(config)
        self.out_edges: Dict[int, Dict[int, float]] = {v: {} for v in range(1, n + 1)}
        self.in_edges: Dict[int, Dict[int, float]] = {v: {} for v in range(1, n + 1)}

    def nv(self) -> int:
        return len(self.out_edges)

    def is_directed(self) -> bool:
        return self.directed

    def add_vertex(self) -> int:
        """Append an isolated vertex and return its id."""
        v = self.nv() + 1
        self.out_edges[v] = {}
        self.in_edges[v] = {}
        return v

    def add_edge(self, e: Edge):
        """
        Add (or re-weight) an edge between existing vertices.

        Args:
            e: Edge object defining the tie

        Raises:
            ValidationError: If an endpoint is out of range or the weight is
                invalid for a weighted graph
        """
        src = self.check_vertex(e.src)
        dst = self.check_vertex(e.dst)
        w = 1.0
        if self.weighted:
            w = _check_weight(e.w, src, dst) if self.config.validate_weights else float(e.w)
        self.out_edges[src][dst] = w
        self.in_edges[dst][src] = w
        if not self.directed:
            self.out_edges[dst][src] = w
            self.in_edges[src][dst] = w

    def add_edges(self, edges: Iterable[Any]):
        """Add many edges given as `Edge` objects or ``(src, dst[, w])`` tuples."""
        for item in edges:
            self.add_edge(item if isinstance(item, Edge) else Edge(*item))

    def remove_edge(self, u: int, v: int) -> bool:
        """Remove ``u -> v`` (both directions if undirected); return True if it existed."""
        u = self.check_vertex(u)
        v = self.check_vertex(v)
        if v not in self.out_edges[u]:
            return False
        del self.out_edges[u][v]
        del self.in_edges[v][u]
        if not self.directed and u != v:
            del self.out_edges[v][u]
            del self.in_edges[u][v]
        return True

    def ne(self) -> int:
        """Number of edges (each undirected edge counted once)."""
        return len(self.edges())

    def edges(self) -> List[Edge]:
        """All edges in ``(src, dst)`` order; undirected edges reported with ``src <= dst``."""
        result = []
        for u in sorted(self.out_edges):
            for v in sorted(self.out_edges[u]):
                if self.directed or u <= v:
                    result.append(Edge(u, v, self.out_edges[u][v]))
        return result

    def _out_raw(self, v: int) -> Iterable[int]:
        return self.out_edges[v].keys()

    def _in_raw(self, v: int) -> Iterable[int]:
        return self.in_edges[v].keys()

    def _has_edge_raw(self, u: int, v: int) -> bool:
        return v in self.out_edges[u]

    def _weight_raw(self, u: int, v: int) -> float:
        return self.out_edges[u][v]

    def to_networkx(self) -> "nx.Graph":
        """
        Convert to a networkx DiGraph (or Graph when undirected).

        Nodes keep their 1-based ids; weighted graphs carry the weight under
        the configured ``weight_key`` edge attribute.
        """
        G = nx.DiGraph() if self.directed else nx.Graph()
        G.add_nodes_from(self.vertices())
        for e in self.edges():
            if self.weighted:
                G.add_edge(e.src, e.dst, **{self.config.weight_key: e.w})
            else:
                G.add_edge(e.src, e.dst)
        return G

    def export_graphml(self, filepath: str) -> None:
        """Export the graph to GraphML via networkx."""
        nx.write_graphml(self.to_networkx(), filepath)


class NetworkXGraph(GraphView):
    """
    Adapter over a networkx ``Graph`` or ``DiGraph``.

    Vertex ids ``1..n`` follow the node iteration order at wrap time, so the
    wrapped graph must not be mutated while the view is in use.
    `vertex_key` returns the original node, which is also the key expected
    in sparse group mappings.
    """

    def __init__(
        self,
        G: "nx.Graph",
        weight: str | None = None,
        config: AnalysisConfig | None = None,
    ):
        """
        Args:
            G: networkx graph (multigraphs are not supported)
            weight: Edge attribute holding tie strength, or None for unweighted
            config: Optional configuration (weight validation)
        """
        if G.is_multigraph():
            raise ValidationError("Multigraphs are not supported; collapse parallel edges first")
        self.G = G
        self.weight_key = weight
        self.config = resolve_config(config)
        self._nodes = list(G.nodes())
        self._index = {node: i for i, node in enumerate(self._nodes, start=1)}
        if weight is not None and self.config.validate_weights:
            for u, v, data in G.edges(data=True):
                _check_weight(data.get(weight, 1.0), u, v)

    def nv(self) -> int:
        return len(self._nodes)

    def is_directed(self) -> bool:
        return self.G.is_directed()

    def vertex_key(self, v: int) -> Any:
        return self._nodes[self.check_vertex(v) - 1]

    def vertex_of(self, node: Any) -> int:
        """Vertex id of a networkx node."""
        try:
            return self._index[node]
        except KeyError:
            raise ValidationError(f"Node {node!r} is not in the graph") from None

    def _out_raw(self, v: int) -> Iterable[int]:
        node = self._nodes[v - 1]
        succ = self.G.successors(node) if self.G.is_directed() else self.G.neighbors(node)
        return [self._index[x] for x in succ]

    def _in_raw(self, v: int) -> Iterable[int]:
        node = self._nodes[v - 1]
        pred = self.G.predecessors(node) if self.G.is_directed() else self.G.neighbors(node)
        return [self._index[x] for x in pred]

    def _has_edge_raw(self, u: int, v: int) -> bool:
        return self.G.has_edge(self._nodes[u - 1], self._nodes[v - 1])

    def _weight_raw(self, u: int, v: int) -> float:
        if self.weight_key is None:
            return 1.0
        data = self.G[self._nodes[u - 1]][self._nodes[v - 1]]
        return float(data.get(self.weight_key, 1.0))


class MatrixGraph(GraphView):
    """
    Adapter over a square numpy adjacency matrix.

    Entry ``[u-1, v-1]`` is the weight of ``u -> v``; zero means no edge.
    With ``directed=None`` directedness is inferred from asymmetry.
    """

    def __init__(self, matrix, directed: bool | None = None, config: AnalysisConfig | None = None):
        m = np.asarray(matrix, dtype=float)
        if m.ndim != 2 or m.shape[0] != m.shape[1]:
            raise ValidationError(f"Adjacency matrix must be square, got shape {m.shape}")
        self.config = resolve_config(config)
        if self.config.validate_weights and (not np.all(np.isfinite(m)) or np.any(m < 0)):
            raise ValidationError("Adjacency matrix entries must be finite and non-negative")
        symmetric = np.array_equal(m, m.T)
        if directed is None:
            directed = not symmetric
        elif not directed and not symmetric:
            raise ValidationError("An undirected adjacency matrix must be symmetric")
        self.matrix = m
        self.directed = bool(directed)
        self._out = [(np.flatnonzero(m[i]) + 1).tolist() for i in range(m.shape[0])]
        self._in = [(np.flatnonzero(m[:, i]) + 1).tolist() for i in range(m.shape[0])]

    def nv(self) -> int:
        return self.matrix.shape[0]

    def is_directed(self) -> bool:
        return self.directed

    def _out_raw(self, v: int) -> Iterable[int]:
        return self._out[v - 1]

    def _in_raw(self, v: int) -> Iterable[int]:
        return self._in[v - 1]

    def _has_edge_raw(self, u: int, v: int) -> bool:
        return self.matrix[u - 1, v - 1] != 0

    def _weight_raw(self, u: int, v: int) -> float:
        return float(self.matrix[u - 1, v - 1])


def as_graph_view(graph: Any, config: AnalysisConfig | None = None) -> GraphView:
    """
    Return a `GraphView` for any supported graph representation.

    networkx graphs are wrapped reading weights from ``config.weight_key``
    (edges without the attribute weigh 1.0); numpy arrays are read as
    adjacency matrices.

    A symmetric matrix is read as undirected unless
    ``config.matrix_directed`` says otherwise, so a directed network whose
    ties are all mutual needs ``matrix_directed=True`` to avoid having its
    brokerage counts halved.

    Raises:
        ValidationError: If the representation is not supported
    """
    if isinstance(graph, GraphView):
        return graph
    cfg = resolve_config(config)
    if isinstance(graph, nx.Graph):
        logger.debug("Wrapping networkx graph (weight=%r)", cfg.weight_key)
        return NetworkXGraph(graph, weight=cfg.weight_key, config=cfg)
    if isinstance(graph, np.ndarray):
        logger.debug("Wrapping %s adjacency matrix (directed=%r)", graph.shape, cfg.matrix_directed)
        return MatrixGraph(graph, directed=cfg.matrix_directed, config=cfg)
    raise ValidationError(f"Unsupported graph type {type(graph).__name__}")
