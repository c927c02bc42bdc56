"""
YAML network loader.

Builds a `Graph` plus a resolved group assignment from a small YAML (or
already-parsed dict) description.

YAML schema (minimal):

directed: true          # default true
weighted: false         # default false
nodes: [ann, bob, cy]   # vertex count, or node names in vertex order
edges:
  - [ann, bob]          # [src, dst] or [src, dst, weight]
  - {src: bob, dst: cy, weight: 2.5}
groups: [sales, sales, eng]   # or {ann: sales, bob: sales, cy: eng}

Notes:
- With an integer ``nodes``, endpoints and group keys are vertex ids 1..n.
- With a list of names, endpoints and group keys are names; names map to
  vertex ids in list order.
- Without ``nodes``, endpoints are names and vertices are created in order
  of first mention.
- Mapping edges read the weight from ``weight`` or the configured
  ``weight_key``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

import yaml

from .config import AnalysisConfig, resolve_config
from .errors import ValidationError
from .graph import Edge, Graph
from .groups import resolve_groups

logger = logging.getLogger(__name__)


class Network(NamedTuple):
    """A loaded network: graph, resolved groups (or None) and node names (or None)."""

    graph: Graph
    groups: Optional[Tuple[Any, ...]]
    names: Optional[Tuple[Any, ...]]


class _VertexIndex:
    """Maps edge endpoints and group keys to vertex ids while loading."""

    def __init__(self, graph: Graph, names: Optional[List[Any]], auto: bool):
        self.graph = graph
        self.auto = auto
        self.names: Optional[List[Any]] = names
        self.ids: Dict[Any, int] = {}
        if names is not None:
            for v, name in enumerate(names, start=1):
                if self._known(name):
                    raise ValidationError(f"Duplicate node name {name!r}")
                self.ids[name] = v

    def _known(self, name: Any) -> bool:
        try:
            return name in self.ids
        except TypeError:
            raise ValidationError(f"Node name {name!r} must be hashable") from None

    def vertex(self, ref: Any) -> int:
        if self.names is None:
            return self.graph.check_vertex(ref)
        if not self._known(ref):
            if not self.auto:
                raise ValidationError(f"Edge references unknown node {ref!r}")
            self.names.append(ref)
            self.ids[ref] = self.graph.add_vertex()
        return self.ids[ref]


def _parse_edge(item: Any, weight_key: str) -> Tuple[Any, Any, float]:
    if isinstance(item, Mapping):
        if "src" not in item or "dst" not in item:
            raise ValidationError(f"Edge mapping needs 'src' and 'dst': {item!r}")
        w = item.get("weight", item.get(weight_key, 1.0))
        return item["src"], item["dst"], w
    if isinstance(item, (list, tuple)) and len(item) in (2, 3):
        src, dst = item[0], item[1]
        return src, dst, item[2] if len(item) == 3 else 1.0
    raise ValidationError(f"Malformed edge entry {item!r}")


def _flag(spec: Mapping, key: str, default: bool) -> bool:
    value = spec.get(key, default)
    if not isinstance(value, bool):
        raise ValidationError(f"'{key}' must be true or false, got {value!r}")
    return value


def load_from_dict(spec: Dict[str, Any], config: AnalysisConfig | None = None) -> Network:
    """
    Load a network from a YAML-parsed dictionary.

    Args:
        spec: Parsed network description
        config: Optional configuration (weight key, weight validation)

    Returns:
        Network: Graph, resolved groups and node names

    Raises:
        ValidationError: If the description is malformed
    """
    if not isinstance(spec, Mapping):
        raise ValidationError(f"Network description must be a mapping, got {type(spec).__name__}")
    cfg = resolve_config(config)
    directed = _flag(spec, "directed", True)
    weighted = _flag(spec, "weighted", False)

    nodes = spec.get("nodes")
    if nodes is None:
        graph = Graph(0, directed, weighted, cfg)
        index = _VertexIndex(graph, [], auto=True)
    elif isinstance(nodes, int) and not isinstance(nodes, bool):
        graph = Graph(nodes, directed, weighted, cfg)
        index = _VertexIndex(graph, None, auto=False)
    elif isinstance(nodes, list):
        graph = Graph(len(nodes), directed, weighted, cfg)
        index = _VertexIndex(graph, list(nodes), auto=False)
    else:
        raise ValidationError(f"'nodes' must be a count or a list of names, got {nodes!r}")

    edges = spec.get("edges") or []
    if not isinstance(edges, (list, tuple)):
        raise ValidationError(f"'edges' must be a list, got {edges!r}")
    for item in edges:
        src, dst, w = _parse_edge(item, cfg.weight_key)
        graph.add_edge(Edge(index.vertex(src), index.vertex(dst), w))

    groups = spec.get("groups")
    resolved = None
    if groups is not None:
        if isinstance(groups, Mapping) and index.names is not None:
            for name in index.names:
                if name not in groups:
                    raise ValidationError(f"Group assignment is missing node {name!r}")
            groups = [groups[name] for name in index.names]
        resolved = resolve_groups(graph, groups)

    names = tuple(index.names) if index.names is not None else None
    logger.debug(
        "Loaded network: %d nodes, %d edges, directed=%s, groups=%s",
        graph.nv(), graph.ne(), graph.directed, resolved is not None,
    )
    return Network(graph, resolved, names)


def load_from_yaml(yaml_text: str, config: AnalysisConfig | None = None) -> Network:
    """Load from YAML text into a `Network`."""
    try:
        data = yaml.safe_load(yaml_text) or {}
    except yaml.YAMLError as exc:
        raise ValidationError(f"Invalid YAML network description: {exc}") from exc
    return load_from_dict(data, config)


def load_from_file(path: str, config: AnalysisConfig | None = None) -> Network:
    """Load from a YAML file path into a `Network`."""
    with open(path, "r", encoding="utf-8") as f:
        txt = f.read()
    return load_from_yaml(txt, config)
