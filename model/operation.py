# model/operation.py

"""
Operation
=========

One entry of a recorded test history: an invocation or completion issued
by a client process, or a start/stop marker emitted by the nemesis. Every
entry carries a timestamp from a single monotonic clock; timestamps are
used for ordering only.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable, Mapping, Optional, Union

NEMESIS = "nemesis"  #: Process identifier reserved for the fault-injection actor.

ProcessId = Union[int, str]


class Phase(str, Enum):
    INVOKE = "invoke"
    OK = "ok"
    FAIL = "fail"
    INFO = "info"


class Kind(str, Enum):
    ADD = "add"
    DELETE = "delete"
    READ = "read"
    START = "start"
    STOP = "stop"


class HistoryFormatError(Exception):
    """Raised when a history entry lacks required fields or carries invalid ones."""


def freeze(value: Any) -> Hashable:
    """
    Convert decoded values into hashable equivalents so they can live in sets
    and serve as dict keys: lists become tuples, sets become frozensets and
    mappings become sorted tuples of pairs.
    """
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze(v) for v in value)
    if isinstance(value, Mapping):
        return tuple(sorted(((freeze(k), freeze(v)) for k, v in value.items()), key=repr))
    return value


def correlation_id(raw: Any) -> Optional[str]:
    """Return `raw` if it is a usable event id (non-empty string), else None."""
    if isinstance(raw, str) and raw:
        return raw
    return None


@dataclass(frozen=True, slots=True)
class Operation:
    process: ProcessId
    phase: str
    f: str
    time: Union[int, float]
    value: Any = None
    event_id: Any = None
    index: Optional[int] = None

    @property
    def is_nemesis(self) -> bool:
        return self.process == NEMESIS

    @property
    def is_client(self) -> bool:
        return not self.is_nemesis

    @property
    def completed_ok(self) -> bool:
        return self.phase == Phase.OK

    @property
    def tag(self) -> Optional[str]:
        """The server-issued event id, or None when no correlation is available."""
        return correlation_id(self.event_id)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], index: Optional[int] = None) -> Operation:
        """
        Build an Operation from a decoded history entry. Accepts both the
        Jepsen field name `type` and the name `phase` for the entry's phase.

        Raises:
            HistoryFormatError: on a missing time, process or f, or an unknown phase.
        """
        phase = raw.get("type", raw.get("phase"))
        try:
            phase = Phase(phase).value
        except ValueError:
            raise HistoryFormatError(f"Unknown phase {phase!r} in entry {dict(raw)!r}")

        for required in ("process", "f", "time"):
            if raw.get(required) is None:
                raise HistoryFormatError(f"Entry is missing '{required}': {dict(raw)!r}")

        time = raw["time"]
        if isinstance(time, bool) or not isinstance(time, (int, float)):
            raise HistoryFormatError(f"Entry time must be numeric, got {time!r}")

        entry_index = raw.get("index", index)
        return cls(
            process=freeze(raw["process"]),
            phase=phase,
            f=str(raw["f"]),
            time=time,
            value=freeze(raw.get("value")),
            event_id=freeze(raw.get("event_id")),
            index=entry_index if isinstance(entry_index, int) else index,
        )

    def __str__(self) -> str:
        tag = f" #{self.event_id}" if self.event_id is not None else ""
        return f"p{self.process} {self.phase} {self.f} {self.value!r}{tag} @{self.time}"
