# logic/client.py

"""
Client capability for the OR-Set workload.

A client turns an invocation into its completion: `invoke(op) -> op'`. The
transport is injected as a callable taking a request body and returning the
decoded reply body, so the client owns only the request/response contract:

    add    {element} -> add_ok    {event_id}
    delete {element} -> delete_ok {event_id}
    read   {}        -> read_ok   {value: [elements...]}

An absent or empty event_id in a reply is legal; the completion simply
carries no correlation.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Any, Callable, Dict, FrozenSet, Mapping, Protocol

from model.operation import Kind, Operation, Phase, freeze
from utils.logger import get_logger

logger = get_logger()

Transport = Callable[[Dict[str, Any]], Mapping[str, Any]]

# Error codes after which the operation certainly did not take effect.
DEFINITE_ERROR_CODES: FrozenSet[int] = frozenset({10, 11, 12, 14, 20, 21, 22, 30})


class RPCError(RuntimeError):
    """Raised when a reply does not match the request it answers."""


class Client(Protocol):
    def invoke(self, op: Operation) -> Operation:
        ...


class ORSetClient:
    """Completes add/delete/read invocations over an injected transport."""

    _REPLY_TYPES = {
        Kind.ADD.value: "add_ok",
        Kind.DELETE.value: "delete_ok",
        Kind.READ.value: "read_ok",
    }

    def __init__(self, transport: Transport):
        self.transport = transport

    @staticmethod
    def request_body(op: Operation) -> Dict[str, Any]:
        if op.f == Kind.READ:
            return {"type": "read"}
        if op.f in (Kind.ADD, Kind.DELETE):
            return {"type": op.f, "element": op.value}
        raise ValueError(f"Unsupported operation kind: {op.f!r}")

    def invoke(self, op: Operation) -> Operation:
        body = self.request_body(op)
        reply = self.transport(body)
        reply_type = reply.get("type")

        if reply_type == "error":
            code = reply.get("code")
            phase = Phase.FAIL if code in DEFINITE_ERROR_CODES else Phase.INFO
            logger.debug(f"{op.f} on p{op.process} -> error {code}: {reply.get('text', '')}")
            return replace(op, phase=phase.value, event_id=None)

        expected = self._REPLY_TYPES[op.f]
        if reply_type != expected:
            raise RPCError(f"Expected '{expected}' reply to {op.f}, got {reply_type!r}")

        if op.f == Kind.READ:
            return replace(op, phase=Phase.OK.value, value=freeze(list(reply.get("value") or [])))

        completed = replace(op, phase=Phase.OK.value)
        if reply.get("event_id"):
            completed = replace(completed, event_id=reply["event_id"])
        return completed
