# logic/correlator.py

"""
Event correlation: a single left-to-right fold over the completed client
operations of a history. Adds record the tag the server issued for each
value, deletes are matched against those tags, and reads are captured
together with the partition state at their completion time.

Only `ok` completions contribute state. An operation that failed, or whose
outcome is unknown, must not be assumed to have taken effect.
"""

from __future__ import annotations
from functools import reduce
from typing import Callable, Dict, Hashable, Iterable, Tuple

from model.operation import Kind, Operation, correlation_id
from model.records import CorrelatedState, DeleteAttempt, ReadSnapshot
from model.timeline import PartitionTimeline
from utils.logger import get_logger
from .config import DeletePolicy

logger = get_logger()

Step = Callable[[CorrelatedState, Operation], CorrelatedState]


def client_completions(history: Iterable[Operation]) -> Tuple[Operation, ...]:
    """Completed (`ok`) client operations, stable-sorted by time."""
    ops = [op for op in history if op.is_client and op.completed_ok]
    ops.sort(key=lambda op: op.time)
    return tuple(ops)


def _read_elements(value) -> Tuple[Hashable, ...]:
    if value is None:
        return ()
    if isinstance(value, tuple):
        return value
    if isinstance(value, frozenset):
        return tuple(value)
    # A scalar read result is malformed; keep it as a one-element read
    return (value,)


def _delete_tags(event_id) -> Tuple[str, ...]:
    """Usable tags named by a delete: one id, or each id of a collection."""
    if isinstance(event_id, (tuple, frozenset)):
        candidates = event_id
    else:
        candidates = (event_id,)
    return tuple(tag for tag in map(correlation_id, candidates) if tag is not None)


class Correlator:
    """
    Builds per-value add/delete/read state from one history.

    The scan is inherently sequential: delete validity depends on the adds
    completed before it. Each call to `correlate` starts from a fresh
    accumulator, so a Correlator can be reused across histories.
    """

    def __init__(self, timeline: PartitionTimeline, delete_policy: DeletePolicy = DeletePolicy.MATCHING_TAG):
        self.timeline = timeline
        self.delete_policy = delete_policy
        self._handlers: Dict[str, Step] = {
            Kind.ADD.value: self._on_add,
            Kind.DELETE.value: self._on_delete,
            Kind.READ.value: self._on_read,
        }

    def correlate(self, history: Iterable[Operation]) -> CorrelatedState:
        ops = client_completions(history)
        logger.debug(f"Correlating {len(ops)} completed client operations")
        return reduce(self._step, ops, CorrelatedState())

    def _step(self, state: CorrelatedState, op: Operation) -> CorrelatedState:
        handler = self._handlers.get(op.f)
        if handler is None:
            # Unknown kinds are a no-op
            return state
        return handler(state, op)

    def _on_add(self, state: CorrelatedState, op: Operation) -> CorrelatedState:
        state.adds[op.value] = op.tag
        return state

    def _on_delete(self, state: CorrelatedState, op: Operation) -> CorrelatedState:
        recorded = state.adds.get(op.value)
        if self.delete_policy is DeletePolicy.ANY_TAG:
            tags = _delete_tags(op.event_id)
            valid = bool(tags)
        else:
            tags = (op.tag,)
            valid = op.tag is not None and op.value in state.adds and recorded == op.tag

        logger.delete_evaluated(op.value, op.event_id, recorded, valid)
        if valid:
            state.deleted_event_ids.update(tags)
        state.delete_attempts.append(
            DeleteAttempt(
                value=op.value,
                event_id=op.event_id,
                time=op.time,
                process=op.process,
                during_partition=self.timeline.active_at(op.time),
                valid=valid,
            )
        )
        return state

    def _on_read(self, state: CorrelatedState, op: Operation) -> CorrelatedState:
        raw = _read_elements(op.value)
        state.reads.append(
            ReadSnapshot(
                process=op.process,
                time=op.time,
                values=frozenset(raw),
                raw_values=raw,
                during_partition=self.timeline.active_at(op.time),
            )
        )
        return state


def correlate(
    history: Iterable[Operation],
    timeline: PartitionTimeline,
    delete_policy: DeletePolicy = DeletePolicy.MATCHING_TAG,
) -> CorrelatedState:
    """Convenience wrapper: correlate `history` against `timeline`."""
    return Correlator(timeline, delete_policy).correlate(history)
