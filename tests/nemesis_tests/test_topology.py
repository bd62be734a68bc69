# tests/nemesis_tests/test_topology.py

import pytest

from nemesis.topology import (
    InvalidTopology,
    PartitionTopology,
    complete_grudge,
    isolate_first_node,
    split_one,
)


class TestPartitionTopology:
    """The isolate-first-node split and its grudge."""

    def test_01_four_node_cluster(self, sample_nodes):
        topology = isolate_first_node(sample_nodes)
        assert topology.isolated == {"n0"}
        assert topology.majority == {"n1", "n2", "n3"}
        assert topology.grudge["n0"] == {"n1", "n2", "n3"}
        for node in ("n1", "n2", "n3"):
            assert topology.grudge[node] == {"n0"}

    def test_02_grudge_is_symmetric(self, sample_nodes):
        topology = isolate_first_node(sample_nodes)
        for a in sample_nodes:
            for b in sample_nodes:
                assert topology.blocks(a, b) == topology.blocks(b, a)
        assert topology.blocks("n0", "n2")
        assert not topology.blocks("n1", "n2")
        assert not topology.blocks("n1", "n1")

    def test_03_groups_cover_all_nodes_disjointly(self, sample_nodes):
        isolated, rest = isolate_first_node(sample_nodes).groups
        assert isolated | rest == set(sample_nodes)
        assert not isolated & rest

    def test_04_idempotent(self, sample_nodes):
        assert isolate_first_node(sample_nodes) == isolate_first_node(list(sample_nodes))

    def test_05_two_nodes(self):
        topology = isolate_first_node(["a", "b"])
        assert topology.groups == (frozenset({"a"}), frozenset({"b"}))

    def test_06_duplicate_entries_of_first_node_are_dropped(self):
        topology = isolate_first_node(["n0", "n1", "n0"])
        assert topology.majority == {"n1"}

    @pytest.mark.parametrize("nodes", [[], ["n0"], ["n0", "n0"]])
    def test_07_too_few_nodes(self, nodes):
        with pytest.raises(InvalidTopology):
            isolate_first_node(nodes)

    def test_08_invalid_topology_is_a_value_error(self):
        with pytest.raises(ValueError):
            isolate_first_node(["solo"])

    def test_09_helpers(self):
        assert split_one(2, [1, 2, 3]) == (frozenset({2}), frozenset({1, 3}))
        grudge = complete_grudge([frozenset({1}), frozenset({2, 3})])
        assert grudge == {1: frozenset({2, 3}), 2: frozenset({1}), 3: frozenset({1})}
        assert complete_grudge([]) == {}

    def test_10_unknown_node_is_never_blocked(self, sample_nodes):
        topology = isolate_first_node(sample_nodes)
        assert isinstance(topology, PartitionTopology)
        assert not topology.blocks("n9", "n0")
