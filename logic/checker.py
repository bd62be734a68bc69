# logic/checker.py

"""
Checker capability and the OR-Set checker.

A checker is anything with `evaluate(history) -> Verdict`. The OR-Set
checker runs the three analysis stages in order: build the partition
timeline, correlate client operations, then evaluate consistency. Variants
differ only in their `CheckerConfig`.
"""

from __future__ import annotations
from typing import Iterable, Optional, Protocol, Sequence

from model.operation import Operation
from model.timeline import PartitionTimeline
from model.verdict import Verdict
from utils.logger import get_logger
from .config import DEFAULT_VARIANT, CheckerConfig, preset
from .correlator import Correlator
from .evaluator import ConsistencyEvaluator

logger = get_logger()


class Checker(Protocol):
    def evaluate(self, history: Iterable[Operation]) -> Verdict:
        ...


class ORSetChecker:
    """
    Post-hoc OR-Set checker. Pure and synchronous: one immutable history in,
    one verdict out. Instances hold only configuration and may be shared
    across independent runs.
    """

    def __init__(self, config: Optional[CheckerConfig] = None):
        self.config = config or CheckerConfig()
        self._evaluator = ConsistencyEvaluator(self.config)

    def evaluate(self, history: Iterable[Operation]) -> Verdict:
        ops: Sequence[Operation] = tuple(history)
        logger.checker_start(self.config.name, len(ops), self.config.describe())

        timeline = PartitionTimeline.from_history(ops)
        logger.debug(f"Partition windows: {[str(span) for span in timeline.intervals] or 'none'}")

        state = Correlator(timeline, self.config.delete_policy).correlate(ops)
        logger.debug(
            f"Correlated {len(state.adds)} added values, {len(state.delete_attempts)} deletes, "
            f"{len(state.reads)} reads"
        )

        verdict = self._evaluator.evaluate(state, timeline)
        logger.final_verdict(verdict.valid)
        return verdict

    def __repr__(self) -> str:
        return f"ORSetChecker({self.config.name}: {self.config.describe()})"


def build_checker(variant: str = DEFAULT_VARIANT, **overrides) -> ORSetChecker:
    """Create a checker from a named preset, optionally overriding single fields.

    Args:
        variant: Preset name (see logic.config.PRESETS)
        **overrides: CheckerConfig fields to replace; None values are ignored

    Raises:
        ValueError: If the variant is unknown
    """
    return ORSetChecker(preset(variant).with_overrides(**overrides))


def check_history(history: Iterable[Operation], config: Optional[CheckerConfig] = None) -> Verdict:
    """Run the OR-Set checker over `history` and return its verdict."""
    return ORSetChecker(config).evaluate(history)
