# model/records.py

"""
Derived projections of a history used while correlating operations:
delete attempts, read snapshots, and the accumulator that the correlator
threads through its scan.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Hashable, List, Optional, Set, Tuple, Union

from .operation import ProcessId

Timestamp = Union[int, float]


@dataclass(frozen=True, slots=True)
class DeleteAttempt:
    value: Hashable
    event_id: Any
    time: Timestamp
    process: ProcessId
    during_partition: bool
    valid: bool


@dataclass(frozen=True, slots=True)
class ReadSnapshot:
    process: ProcessId
    time: Timestamp
    values: FrozenSet[Hashable]
    raw_values: Tuple[Hashable, ...]
    during_partition: bool

    @property
    def settled(self) -> bool:
        return not self.during_partition


@dataclass(slots=True)
class CorrelatedState:
    """
    Accumulator of one correlation scan. A fresh instance is created per
    scan and handed from step to step; nothing else holds a reference.

    Attributes:
      adds: value -> tag of the most recent completed add (None if the add
            carried no usable event id).
      deleted_event_ids: add tags removed by valid deletes.
      delete_attempts: every completed delete, valid or not, in scan order.
      reads: every completed read, in scan order.
    """
    adds: Dict[Hashable, Optional[str]] = field(default_factory=dict)
    deleted_event_ids: Set[str] = field(default_factory=set)
    delete_attempts: List[DeleteAttempt] = field(default_factory=list)
    reads: List[ReadSnapshot] = field(default_factory=list)

    def expected_values(self) -> FrozenSet[Hashable]:
        """Values whose live add tag has not been removed by a valid delete."""
        return frozenset(
            value for value, tag in self.adds.items() if tag is None or tag not in self.deleted_event_ids
        )
