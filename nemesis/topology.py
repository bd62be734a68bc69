# nemesis/topology.py
# This file is part of Orcheck - OR-Set Partition History Verification
#
# Partition topology for the isolate-one-node nemesis

"""Network split computation for the fault-injection actor.

The nemesis that drives the OR-Set workload always isolates the same node,
the first of the cluster's node list, from everybody else. This module
computes that split and the matching *grudge*: for every node, the set of
nodes whose traffic it drops. Scheduling (when to apply and heal) belongs
to the external nemesis scheduler.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, FrozenSet, Hashable, Mapping, Sequence, Tuple

from utils.logger import get_logger

Node = Hashable
Grudge = Mapping[Node, FrozenSet[Node]]


class InvalidTopology(ValueError):
    """Raised when a node list cannot be split into two non-empty groups."""


@dataclass(frozen=True)
class PartitionTopology:
    """Two disjoint groups and the complete grudge separating them.

    Attributes:
        groups: (isolated group, remaining group)
        grudge: node -> nodes it refuses traffic from
    """

    groups: Tuple[FrozenSet[Node], FrozenSet[Node]]
    grudge: Grudge

    @property
    def isolated(self) -> FrozenSet[Node]:
        return self.groups[0]

    @property
    def majority(self) -> FrozenSet[Node]:
        return self.groups[1]

    def blocks(self, src: Node, dst: Node) -> bool:
        """True if traffic between `src` and `dst` is dropped (symmetric)."""
        return dst in self.grudge.get(src, frozenset())


def split_one(node: Node, nodes: Sequence[Node]) -> Tuple[FrozenSet[Node], FrozenSet[Node]]:
    """Split `nodes` into ({node}, everything else)."""
    return frozenset([node]), frozenset(n for n in nodes if n != node)


def complete_grudge(groups: Sequence[FrozenSet[Node]]) -> Dict[Node, FrozenSet[Node]]:
    """Every node drops traffic from every node outside its own group.

    Args:
        groups: Disjoint node groups

    Returns:
        Mapping from each node to the nodes it refuses; nodes of the same
        group never refuse each other.
    """
    everyone = frozenset().union(*groups) if groups else frozenset()
    grudge: Dict[Node, FrozenSet[Node]] = {}
    for group in groups:
        others = everyone - group
        for node in group:
            grudge[node] = others
    return grudge


def isolate_first_node(nodes: Sequence[Node]) -> PartitionTopology:
    """Isolate the first node of `nodes` from all the others.

    Pure and idempotent: the same node list always yields the same topology.

    Args:
        nodes: Ordered cluster node identifiers

    Returns:
        PartitionTopology with groups ({nodes[0]}, {nodes[1:]})

    Raises:
        InvalidTopology: If fewer than two distinct nodes are given
    """
    nodes = list(nodes)
    if len(set(nodes)) < 2:
        raise InvalidTopology(f"Need at least two distinct nodes to partition, got {nodes!r}")

    isolated, rest = split_one(nodes[0], nodes)
    topology = PartitionTopology(groups=(isolated, rest), grudge=complete_grudge([isolated, rest]))
    get_logger().debug(f"Isolating {sorted(map(str, isolated))} from {sorted(map(str, rest))}")
    return topology
