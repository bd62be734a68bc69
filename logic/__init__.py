# logic/__init__.py

"""History checking for the OR-Set partition workload.

This package provides:
  • Correlator: fold over completed client operations (adds, deletes, reads)
  • ConsistencyEvaluator: read agreement, expected-set and duplicate checks
  • ORSetChecker: the Checker capability tying the stages together
  • CheckerConfig / PRESETS: named checker variants
  • ORSetClient: the Client capability for add/delete/read RPCs
"""

from .checker import Checker, ORSetChecker, build_checker, check_history
from .client import Client, ORSetClient, RPCError
from .config import PRESETS, CheckerConfig, DeletePolicy, ReadSelectionPolicy, preset
from .correlator import Correlator, correlate
from .evaluator import ConsistencyEvaluator

__all__ = [
    "Checker",
    "ORSetChecker",
    "build_checker",
    "check_history",
    "Client",
    "ORSetClient",
    "RPCError",
    "PRESETS",
    "CheckerConfig",
    "DeletePolicy",
    "ReadSelectionPolicy",
    "preset",
    "Correlator",
    "correlate",
    "ConsistencyEvaluator",
]
