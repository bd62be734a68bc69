# nemesis/__init__.py
# This file is part of Orcheck - OR-Set Partition History Verification
#
# Fault-injection topology exports

from .topology import (
    InvalidTopology,
    PartitionTopology,
    complete_grudge,
    isolate_first_node,
    split_one,
)

__all__ = [
    "InvalidTopology",
    "PartitionTopology",
    "complete_grudge",
    "isolate_first_node",
    "split_one",
]
