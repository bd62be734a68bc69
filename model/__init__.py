# model/__init__.py

"""
Domain objects for representing a recorded test history: operations,
the nemesis partition timeline, and the projections derived while
correlating adds, deletes and reads. These types carry no checking logic.
"""

from .operation import (
    NEMESIS,
    HistoryFormatError,
    Kind,
    Operation,
    Phase,
    correlation_id,
    freeze,
)
from .records import CorrelatedState, DeleteAttempt, ReadSnapshot
from .timeline import PartitionInterval, PartitionTimeline, Transition
from .verdict import Tracking, Verdict

__all__ = [
    "NEMESIS",
    "HistoryFormatError",
    "Kind",
    "Operation",
    "Phase",
    "correlation_id",
    "freeze",
    "CorrelatedState",
    "DeleteAttempt",
    "ReadSnapshot",
    "PartitionInterval",
    "PartitionTimeline",
    "Transition",
    "Tracking",
    "Verdict",
]
