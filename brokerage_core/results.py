"""
Result containers for Gould-Fernandez brokerage analysis.

`BrokerageResult` holds per-node role counts for a whole network;
`BrokerageCounts` is the lightweight aggregate returned for a single node.
All per-node accessors use 1-based vertex ids.
"""

from __future__ import annotations

from typing import Any, Dict, NamedTuple, Sequence

import numpy as np

from .enums import Role
from .errors import BoundsError, ValidationError

ROLE_FIELDS = tuple(role.value for role in Role)


class BrokerageCounts(NamedTuple):
    """Role counts for one node; ``total`` is the sum of the five roles."""

    coordinator: int
    gatekeeper: int
    representative: int
    liaison: int
    cosmopolitan: int
    total: int

    @classmethod
    def from_roles(cls, coordinator: int, gatekeeper: int, representative: int,
                   liaison: int, cosmopolitan: int) -> "BrokerageCounts":
        return cls(
            coordinator, gatekeeper, representative, liaison, cosmopolitan,
            coordinator + gatekeeper + representative + liaison + cosmopolitan,
        )


class BrokerageResult:
    """
    Per-node brokerage role counts for every vertex of a network.

    The engine builds a zero-filled result, fills the counters, then calls
    `freeze`, after which every array is read-only.

    Attributes:
        coordinator: Within-group brokerage, g(ego) = g(i) = g(j)
        gatekeeper: g(ego) = g(j) != g(i)
        representative: g(ego) = g(i) != g(j)
        liaison: g(i) = g(j) != g(ego)
        cosmopolitan: All three groups distinct
        total: Sum of the five roles per node
        groups: Resolved group labels, position ``v-1`` for vertex v

    Index ``v-1`` of each array belongs to vertex v; use the accessors for
    1-based, bounds-checked reads.
    """

    def __init__(self, coordinator, gatekeeper, representative, liaison,
                 cosmopolitan, total, groups: Sequence[Any]):
        self.coordinator = np.asarray(coordinator, dtype=np.int64)
        self.gatekeeper = np.asarray(gatekeeper, dtype=np.int64)
        self.representative = np.asarray(representative, dtype=np.int64)
        self.liaison = np.asarray(liaison, dtype=np.int64)
        self.cosmopolitan = np.asarray(cosmopolitan, dtype=np.int64)
        self.total = np.asarray(total, dtype=np.int64)
        self.groups = tuple(groups)

    @classmethod
    def zeros(cls, n: int, groups: Sequence[Any]) -> "BrokerageResult":
        """Zero-filled result for ``n`` nodes."""
        return cls(*(np.zeros(n, dtype=np.int64) for _ in range(6)), groups=groups)

    def freeze(self) -> "BrokerageResult":
        """Make every counter array read-only and return self."""
        for name in ROLE_FIELDS + ("total",):
            getattr(self, name).flags.writeable = False
        return self

    def __len__(self) -> int:
        return len(self.total)

    def __repr__(self) -> str:
        return f"BrokerageResult(n={len(self)}, total={int(self.total.sum())})"

    def _index(self, i: Any) -> int:
        n = len(self)
        if isinstance(i, bool) or not isinstance(i, (int, np.integer)):
            raise BoundsError(f"Node index must be an integer, got {i!r}")
        if not 1 <= i <= n:
            raise BoundsError(f"Node index {i} out of bounds for result with {n} nodes (1..{n})")
        return int(i) - 1

    def role_count(self, role: Role | str, i: int) -> int:
        """Count of ``role`` (a `Role` or ``"total"``) at node i."""
        name = role.value if isinstance(role, Role) else role
        if name not in ROLE_FIELDS and name != "total":
            raise ValidationError(f"Unknown brokerage role {role!r}")
        return int(getattr(self, name)[self._index(i)])

    def counts(self, i: int) -> BrokerageCounts:
        """All role counts of node i."""
        k = self._index(i)
        return BrokerageCounts(*(int(getattr(self, name)[k]) for name in ROLE_FIELDS + ("total",)))

    def summary(self) -> Dict[str, int]:
        """Network-wide sum of each role and of the totals."""
        return {name: int(getattr(self, name).sum()) for name in ROLE_FIELDS + ("total",)}


def coordinator(br: BrokerageResult, i: int) -> int:
    """
    Coordinator count for node i (within-group brokerage).

    Coordinator role: ego, i, and j all belong to the same group.
    """
    return br.role_count(Role.COORDINATOR, i)


def gatekeeper(br: BrokerageResult, i: int) -> int:
    """
    Gatekeeper count for node i.

    Gatekeeper role: ego and j share a group, i comes from another group.
    """
    return br.role_count(Role.GATEKEEPER, i)


def representative(br: BrokerageResult, i: int) -> int:
    """
    Representative count for node i.

    Representative role: ego and i share a group, j belongs to another group.
    """
    return br.role_count(Role.REPRESENTATIVE, i)


def liaison(br: BrokerageResult, i: int) -> int:
    """Liaison count for node i: i and j share a group that ego is not in."""
    return br.role_count(Role.LIAISON, i)


def cosmopolitan(br: BrokerageResult, i: int) -> int:
    """Cosmopolitan count for node i: ego, i and j all in different groups."""
    return br.role_count(Role.COSMOPOLITAN, i)


def total_brokerage(br: BrokerageResult, i: int) -> int:
    """Total brokerage count for node i (sum of all roles)."""
    return br.role_count("total", i)
