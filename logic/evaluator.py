# logic/evaluator.py

"""
Consistency evaluation: combine the partition timeline and the correlated
state into a verdict.

The expected final set is computed over add tags, not raw values. That is
the only way to get OR-Set semantics right when a value is added, deleted
and re-added: the re-add carries a fresh tag that the earlier delete never
observed.
"""

from __future__ import annotations
from collections import Counter
from typing import Dict, FrozenSet, Hashable, Iterable, List, Tuple

from model.operation import ProcessId
from model.records import CorrelatedState, ReadSnapshot
from model.timeline import PartitionTimeline
from model.verdict import Tracking, Verdict
from utils.logger import get_logger
from .config import CheckerConfig, ReadSelectionPolicy

logger = get_logger()


def last_read_per_process(reads: Iterable[ReadSnapshot]) -> Dict[ProcessId, ReadSnapshot]:
    """Temporally last read of each process; on equal times the later entry wins."""
    latest: Dict[ProcessId, ReadSnapshot] = {}
    for snapshot in sorted(reads, key=lambda r: r.time):
        latest[snapshot.process] = snapshot
    return latest


def duplicated_elements(raw_values: Iterable[Hashable]) -> Tuple[Hashable, ...]:
    """Elements reported more than once, in order of first appearance."""
    counts = Counter(raw_values)
    return tuple(element for element, freq in counts.items() if freq > 1)


class ConsistencyEvaluator:
    """
    Renders the verdict for one correlated history.

    Attributes:
      config: switches selecting partition awareness, duplicate checking,
              and the final-read selection policy.
    """

    def __init__(self, config: CheckerConfig = CheckerConfig()):
        self.config = config

    def split_reads(self, reads: Iterable[ReadSnapshot]) -> Tuple[List[ReadSnapshot], List[ReadSnapshot]]:
        """Partition reads into (settled, during_partition)."""
        settled: List[ReadSnapshot] = []
        partitioned: List[ReadSnapshot] = []
        for snapshot in reads:
            if self.config.partition_aware and snapshot.during_partition:
                partitioned.append(snapshot)
            else:
                settled.append(snapshot)
        return settled, partitioned

    def select_final_reads(self, reads: Iterable[ReadSnapshot]) -> Dict[ProcessId, ReadSnapshot]:
        reads = list(reads)
        if self.config.read_selection_policy is ReadSelectionPolicy.LAST_OVERALL:
            candidates = reads
        else:
            candidates, _ = self.split_reads(reads)
        final = last_read_per_process(candidates)
        for process, snapshot in final.items():
            logger.read_selected(process, sorted(map(repr, snapshot.values)), snapshot.time)
        return final

    def evaluate(self, state: CorrelatedState, timeline: PartitionTimeline) -> Verdict:
        expected: FrozenSet[Hashable] = state.expected_values()
        settled, partitioned = self.split_reads(state.reads)
        final = self.select_final_reads(state.reads)

        distinct_sets = {snapshot.values for snapshot in final.values()}
        reads_consistent = len(distinct_sets) <= 1

        if not final:
            logger.convergence_skipped("no final reads were selected")
            correct_values = True
        elif not reads_consistent:
            # Correctness cannot be judged against disagreeing replicas
            correct_values = True
        else:
            (agreed,) = distinct_sets
            correct_values = agreed == expected

        duplicates: Dict[ProcessId, Tuple[Hashable, ...]] = {}
        if self.config.check_duplicates:
            for process, snapshot in final.items():
                dups = duplicated_elements(snapshot.raw_values)
                if dups:
                    duplicates[process] = dups
        has_duplicates = bool(duplicates)

        valid = reads_consistent and correct_values and not has_duplicates
        logger.debug(
            f"reads_consistent={reads_consistent}, correct_values={correct_values}, "
            f"has_duplicates={has_duplicates}"
        )

        return Verdict(
            valid=valid,
            reads_consistent=reads_consistent,
            correct_values=correct_values,
            has_duplicates=has_duplicates,
            expected_values=expected,
            final_reads={process: snapshot.values for process, snapshot in final.items()},
            duplicate_values=duplicates,
            tracking=Tracking(
                adds=dict(state.adds),
                deleted_event_ids=frozenset(state.deleted_event_ids),
                delete_attempts=tuple(state.delete_attempts),
            ),
            partition_intervals=tuple(timeline.intervals),
            settled_read_count=len(settled),
            partitioned_read_count=len(partitioned),
            variant=self.config.name,
        )
