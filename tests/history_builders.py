# tests/history_builders.py

"""Factories for building small histories in tests."""

from typing import Any, Iterable, Optional

from model.operation import NEMESIS, Operation


def op(process, phase: str, f: str, time, value: Any = None, event_id: Any = None) -> Operation:
    """Factory for creating Operation objects for testing."""
    return Operation(process=process, phase=phase, f=f, time=time, value=value, event_id=event_id)


def invoke(process, f: str, time, value: Any = None) -> Operation:
    return op(process, "invoke", f, time, value)


def add(process, value, event_id: Optional[Any], time) -> Operation:
    return op(process, "ok", "add", time, value, event_id)


def delete(process, value, event_id: Optional[Any], time) -> Operation:
    return op(process, "ok", "delete", time, value, event_id)


def read(process, values: Iterable[Any], time) -> Operation:
    return op(process, "ok", "read", time, tuple(values))


def start(time) -> Operation:
    return op(NEMESIS, "info", "start", time)


def stop(time) -> Operation:
    return op(NEMESIS, "info", "stop", time)
