# model/verdict.py
# This file is part of Orcheck - OR-Set Partition History Verification
#
# Verdict record produced by the consistency evaluator

"""Checker verdict with its diagnostic payload.

A verdict is binary (`valid`), but it is never reported alone: the record
keeps every fact needed to explain a failure without rerunning analysis,
namely the expected set, the final read chosen for each process, the
duplicated elements per process, and the raw add/delete tracking tables.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Hashable, List, Mapping, Optional, Tuple

from .operation import ProcessId
from .records import DeleteAttempt
from .timeline import PartitionInterval


@dataclass(frozen=True)
class Tracking:
    """Raw add/delete tables, as seen at the end of the scan."""

    adds: Mapping[Hashable, Optional[str]] = field(default_factory=dict)
    deleted_event_ids: FrozenSet[str] = frozenset()
    delete_attempts: Tuple[DeleteAttempt, ...] = ()

    @property
    def invalid_deletes(self) -> List[DeleteAttempt]:
        return [attempt for attempt in self.delete_attempts if not attempt.valid]


@dataclass(frozen=True)
class Verdict:
    """Outcome of checking one history.

    Attributes:
        valid: reads_consistent and correct_values and not has_duplicates
        reads_consistent: True if every process's final read saw the same set
        correct_values: True if the agreed set equals the expected set
            (vacuously True when reads disagree or no read was selected)
        has_duplicates: True if any final read reported an element twice
        expected_values: Elements whose add tag was never validly deleted
        final_reads: Process -> value set of the read selected for it
        duplicate_values: Process -> elements reported more than once
        tracking: Raw add/delete tables
        partition_intervals: Partition windows recovered from the history
        settled_read_count: Number of reads completed outside a partition
        partitioned_read_count: Number of reads completed during a partition
        variant: Name of the checker configuration that produced the verdict
    """

    valid: bool
    reads_consistent: bool
    correct_values: bool
    has_duplicates: bool
    expected_values: FrozenSet[Hashable] = frozenset()
    final_reads: Mapping[ProcessId, FrozenSet[Hashable]] = field(default_factory=dict)
    duplicate_values: Mapping[ProcessId, Tuple[Hashable, ...]] = field(default_factory=dict)
    tracking: Tracking = field(default_factory=Tracking)
    partition_intervals: Tuple[PartitionInterval, ...] = ()
    settled_read_count: int = 0
    partitioned_read_count: int = 0
    variant: str = ""

    def __bool__(self) -> bool:
        return self.valid

    @property
    def missing_values(self) -> Dict[ProcessId, FrozenSet[Hashable]]:
        """Per process, expected elements absent from its final read."""
        return {
            process: self.expected_values - values
            for process, values in self.final_reads.items()
            if self.expected_values - values
        }

    @property
    def unexpected_values(self) -> Dict[ProcessId, FrozenSet[Hashable]]:
        """Per process, elements in its final read that should not be there."""
        return {
            process: values - self.expected_values
            for process, values in self.final_reads.items()
            if values - self.expected_values
        }

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible rendering. Sets become sorted lists, keys become strings."""
        return {
            "valid": self.valid,
            "reads_consistent": self.reads_consistent,
            "correct_values": self.correct_values,
            "has_duplicates": self.has_duplicates,
            "expected_values": _sorted_list(self.expected_values),
            "final_reads": {str(p): _sorted_list(v) for p, v in self.final_reads.items()},
            "duplicate_values": {str(p): list(v) for p, v in self.duplicate_values.items()},
            "tracking": {
                "adds": {repr(k) if not isinstance(k, str) else k: tag for k, tag in self.tracking.adds.items()},
                "deletes": sorted(self.tracking.deleted_event_ids),
                "delete_attempts": [
                    {
                        "value": attempt.value,
                        "event_id": attempt.event_id,
                        "time": attempt.time,
                        "process": attempt.process,
                        "during_partition": attempt.during_partition,
                        "valid": attempt.valid,
                    }
                    for attempt in self.tracking.delete_attempts
                ],
            },
            "partition_intervals": [
                {"start": span.start_time, "end": span.end_time} for span in self.partition_intervals
            ],
            "settled_read_count": self.settled_read_count,
            "partitioned_read_count": self.partitioned_read_count,
            "variant": self.variant,
        }


def _sorted_list(values) -> List[Any]:
    # Elements may be of mixed types; fall back to repr ordering.
    try:
        return sorted(values)
    except TypeError:
        return sorted(values, key=repr)
