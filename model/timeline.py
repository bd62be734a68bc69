# model/timeline.py

"""
PartitionTimeline
=================

Ordered on/off transitions of the nemesis partition, recovered from the
`info` start/stop markers in a history. The timeline answers one question:
was the designated node isolated at time `t`?

The nemesis stream is trusted input. Repeated starts or unpaired stops are
not rejected; the predicate always reflects the most recent transition.
"""

from __future__ import annotations
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from utils.logger import get_logger
from .operation import Kind, Operation, Phase

logger = get_logger()

Timestamp = Union[int, float]

_TRANSITIONS = {Kind.START.value: True, Kind.STOP.value: False}


@dataclass(frozen=True, slots=True)
class Transition:
    time: Timestamp
    partition_active: bool


@dataclass(frozen=True, slots=True)
class PartitionInterval:
    start_time: Timestamp
    end_time: Optional[Timestamp] = None  # None while the partition never healed

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    def contains(self, t: Timestamp) -> bool:
        """Half-open membership: [start_time, end_time)."""
        return self.start_time <= t and (self.end_time is None or t < self.end_time)

    def __str__(self) -> str:
        end = "open" if self.end_time is None else self.end_time
        return f"[{self.start_time}, {end})"


@dataclass(frozen=True)
class PartitionTimeline:
    """
    Sorted transition points plus the derived `active_at` predicate.

    Attributes:
      transitions: (time, partition_active) points sorted by time; ties keep
                   their history order so the later marker wins.
    """
    transitions: Tuple[Transition, ...] = ()
    _times: Tuple[Timestamp, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_times", tuple(tr.time for tr in self.transitions))

    @classmethod
    def from_history(cls, history: Iterable[Operation]) -> PartitionTimeline:
        points = [
            Transition(op.time, _TRANSITIONS[op.f])
            for op in history
            if op.is_nemesis and op.phase == Phase.INFO and op.f in _TRANSITIONS
        ]
        points.sort(key=lambda tr: tr.time)  # stable
        for tr in points:
            logger.partition_transition(tr.time, tr.partition_active)
        return cls(tuple(points))

    def active_at(self, t: Timestamp) -> bool:
        """Value of the last transition with time <= t, or False if none precedes t."""
        pos = bisect_right(self._times, t)
        if pos == 0:
            return False
        return self.transitions[pos - 1].partition_active

    def is_settled(self, t: Timestamp) -> bool:
        return not self.active_at(t)

    @property
    def intervals(self) -> List[PartitionInterval]:
        """
        Collapse transitions into sorted, non-overlapping intervals. A start
        while already partitioned extends the current interval; a stop with
        nothing open is dropped.
        """
        spans: List[PartitionInterval] = []
        opened: Optional[Timestamp] = None
        for tr in self.transitions:
            if tr.partition_active and opened is None:
                opened = tr.time
            elif not tr.partition_active and opened is not None:
                spans.append(PartitionInterval(opened, tr.time))
                opened = None
        if opened is not None:
            spans.append(PartitionInterval(opened, None))
        return spans

    def __len__(self) -> int:
        return len(self.transitions)
