"""
Unit tests for Gould-Fernandez brokerage role counting.
"""

import pytest

from brokerage_core.brokerage import brokerage, brokerage_roles, classify_role
from brokerage_core.config import AnalysisConfig
from brokerage_core.enums import Role
from brokerage_core.errors import ValidationError
from brokerage_core.graph import Graph
from brokerage_core.results import (
    BrokerageCounts,
    BrokerageResult,
    coordinator,
    cosmopolitan,
    gatekeeper,
    liaison,
    representative,
    total_brokerage,
)


def digraph(n, edges):
    g = Graph(n)
    g.add_edges(edges)
    return g


def undirected(n, edges):
    g = Graph(n, directed=False)
    g.add_edges(edges)
    return g


def chain():
    """1 -> 2 -> 3"""
    return digraph(3, [(1, 2), (2, 3)])


def role_counts(br, i):
    return (
        coordinator(br, i),
        gatekeeper(br, i),
        representative(br, i),
        liaison(br, i),
        cosmopolitan(br, i),
    )


class TestClassifyRole:
    @pytest.mark.parametrize(
        "ego, i, j, role",
        [
            ("A", "A", "A", Role.COORDINATOR),
            ("A", "B", "A", Role.GATEKEEPER),
            ("A", "A", "B", Role.REPRESENTATIVE),
            ("B", "A", "A", Role.LIAISON),
            ("A", "B", "C", Role.COSMOPOLITAN),
        ],
    )
    def test_decision_table(self, ego, i, j, role):
        assert classify_role(ego, i, j) is role

    def test_inconsistent_equality_rejected(self):
        class Odd:
            def __eq__(self, other):
                return isinstance(other, int)

        with pytest.raises(ValidationError):
            classify_role(Odd(), 1, 2)


class TestRoles:
    """Each role on the chain 1 -> 2 -> 3 under different groupings."""

    @pytest.mark.parametrize(
        "groups, expected",
        [
            ([1, 1, 1], (1, 0, 0, 0, 0)),
            ([1, 2, 2], (0, 1, 0, 0, 0)),
            ([1, 1, 2], (0, 0, 1, 0, 0)),
            ([1, 2, 1], (0, 0, 0, 1, 0)),
            ([1, 2, 3], (0, 0, 0, 0, 1)),
        ],
    )
    def test_chain_roles(self, groups, expected):
        br = brokerage(chain(), groups)
        assert role_counts(br, 2) == expected
        assert total_brokerage(br, 2) == 1
        assert total_brokerage(br, 1) == 0
        assert total_brokerage(br, 3) == 0

    def test_coordinator_star(self):
        g = digraph(4, [(1, 2), (2, 3), (2, 4)])
        br = brokerage(g, [1, 1, 1, 1])
        assert coordinator(br, 2) == 2
        assert total_brokerage(br, 2) == 2
        assert role_counts(br, 2)[1:] == (0, 0, 0, 0)

    def test_liaison_two_sources(self):
        g = digraph(4, [(1, 3), (3, 2), (4, 3)])
        br = brokerage(g, [1, 1, 2, 1])
        assert liaison(br, 3) == 2
        assert total_brokerage(br, 3) == 2

    def test_mixed_roles_at_one_node(self):
        g = digraph(4, [(1, 2), (2, 3), (2, 4)])
        br = brokerage(g, [1, 1, 2, 3])
        assert representative(br, 2) == 2
        br = brokerage(g, [1, 1, 1, 2])
        assert coordinator(br, 2) == 1
        assert representative(br, 2) == 1


class TestDirectedEdgeInterpretation:
    def test_direct_edge_removes_brokerage(self):
        g = digraph(3, [(1, 2), (2, 3), (1, 3)])
        br = brokerage(g, [1, 1, 2])
        assert representative(br, 2) == 0
        assert total_brokerage(br, 2) == 0

    def test_reverse_edge_is_irrelevant(self):
        """Only i -> j disqualifies the triad i -> ego -> j."""
        g = digraph(3, [(1, 2), (2, 3), (3, 1)])
        br = brokerage(g, [1, 1, 2])
        assert representative(br, 2) == 1
        assert total_brokerage(br, 2) == 1

    def test_mutual_ties_count_both_directions(self):
        g = digraph(3, [(1, 2), (2, 1), (2, 3), (3, 2)])
        br = brokerage(g, ["a", "a", "a"])
        assert coordinator(br, 2) == 2


class TestUndirected:
    def test_coordinator_halved(self):
        br = brokerage(undirected(3, [(1, 2), (2, 3)]), [1, 1, 1])
        assert coordinator(br, 2) == 1
        assert total_brokerage(br, 2) == 1

    def test_asymmetric_roles_halve_to_zero(self):
        """1-2-3 with groups A,A,B: one representative and one gatekeeper pass, each halved."""
        g = undirected(3, [(1, 2), (2, 3)])
        roles = [role for _, _, role in brokerage_roles(g, [1, 1, 2], 2)]
        assert len(roles) == 2
        assert set(roles) == {Role.REPRESENTATIVE, Role.GATEKEEPER}
        br = brokerage(g, [1, 1, 2])
        assert total_brokerage(br, 2) == 0

    def test_star_liaison(self):
        g = undirected(6, [(1, j) for j in range(2, 7)])
        br = brokerage(g, [1, 2, 2, 2, 2, 2])
        assert liaison(br, 1) == 10
        assert total_brokerage(br, 1) == 10
        for leaf in range(2, 7):
            assert total_brokerage(br, leaf) == 0


class TestSingleNode:
    def test_matches_full_calculation(self):
        g = digraph(4, [(1, 2), (2, 3), (2, 4)])
        groups = [1, 1, 1, 2]
        full = brokerage(g, groups)
        single = brokerage(g, groups, 2)

        assert isinstance(single, BrokerageCounts)
        assert single == full.counts(2)
        assert single.total == total_brokerage(full, 2)

    def test_undirected_single_node_halved(self):
        g = undirected(3, [(1, 2), (2, 3)])
        assert brokerage(g, ["x", "x", "x"], ego=2).coordinator == 1

    def test_invalid_ego(self):
        with pytest.raises(ValidationError, match="Node 5 is not in the graph"):
            brokerage(chain(), [1, 1, 2], 5)

    def test_groups_validated_before_ego(self):
        with pytest.raises(ValidationError, match="length"):
            brokerage(chain(), [1, 1], 2)


class TestGroupValidation:
    @pytest.mark.parametrize("groups", [[1, 1], [1, 1, 2, 2]])
    def test_wrong_length(self, groups):
        with pytest.raises(ValidationError):
            brokerage(chain(), groups)

    def test_missing_node_in_mapping(self):
        with pytest.raises(ValidationError, match="missing node 3"):
            brokerage(chain(), {1: 1, 2: 1})

    def test_valid_mapping(self):
        br = brokerage(chain(), {1: 1, 2: 1, 3: 2})
        assert isinstance(br, BrokerageResult)
        assert representative(br, 2) == 1


class TestEdgeCases:
    def test_no_edges(self):
        br = brokerage(Graph(3), [1, 1, 2])
        assert br.total.sum() == 0
        for v in (1, 2, 3):
            assert total_brokerage(br, v) == 0

    def test_complete_digraph(self):
        g = digraph(3, [(i, j) for i in range(1, 4) for j in range(1, 4) if i != j])
        assert brokerage(g, [1, 1, 2]).total.sum() == 0

    def test_isolated_nodes(self):
        g = digraph(5, [(1, 2), (2, 3)])
        br = brokerage(g, [1, 1, 2, 3, 3])
        assert total_brokerage(br, 4) == 0
        assert total_brokerage(br, 5) == 0

    def test_self_loop_ignored(self):
        g = digraph(3, [(1, 2), (2, 3), (2, 2)])
        br = brokerage(g, [1, 1, 2])
        assert representative(br, 2) == 1
        assert total_brokerage(br, 2) == 1

    def test_undirected_self_loop_ignored(self):
        plain = brokerage(undirected(3, [(1, 2), (2, 3)]), [1, 1, 1])
        looped = brokerage(undirected(3, [(1, 2), (2, 3), (2, 2)]), [1, 1, 1])
        assert looped.counts(2) == plain.counts(2)

    def test_empty_graph(self):
        br = brokerage(Graph(0), [])
        assert len(br) == 0

    def test_total_is_sum_of_roles(self):
        g = digraph(6, [(1, 2), (2, 3), (3, 4), (4, 2), (2, 5), (5, 6), (6, 1), (3, 3)])
        br = brokerage(g, ["a", "b", "a", "c", "b", "a"])
        for v in g.vertices():
            assert total_brokerage(br, v) == sum(role_counts(br, v))

    def test_result_is_read_only(self):
        br = brokerage(chain(), [1, 1, 2])
        with pytest.raises(ValueError):
            br.representative[1] = 0


class TestNamedGroups:
    def test_string_groups(self):
        groups = ["Sales", "Sales", "Engineering"]
        br = brokerage(chain(), groups)
        assert representative(br, 2) == 1
        assert br.groups == tuple(groups)

    def test_enum_like_groups(self):
        br = brokerage(chain(), [Role.LIAISON, Role.LIAISON, Role.COORDINATOR])
        assert representative(br, 2) == 1

    def test_mixed_type_groups(self):
        br = brokerage(chain(), [1, 1, "B"])
        assert representative(br, 2) == 1


class TestBrokerageRoles:
    def test_lists_mediated_triads(self):
        g = digraph(4, [(1, 2), (2, 3), (2, 4), (1, 4)])
        triads = brokerage_roles(g, [1, 1, 2, 2], 2)
        assert triads == [(1, 3, Role.REPRESENTATIVE)]


class TestProgressLogging:
    def test_progress_logged(self, caplog):
        g = digraph(4, [(1, 2), (2, 3), (3, 4)])
        with caplog.at_level("DEBUG", logger="brokerage_core.brokerage"):
            brokerage(g, [1, 1, 1, 1], config=AnalysisConfig(progress_every=2))
        messages = [r.getMessage() for r in caplog.records]
        assert "brokerage: processed 2/4 egos" in messages
        assert "brokerage: processed 4/4 egos" in messages
