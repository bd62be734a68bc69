# logic/config.py

"""
Checker configuration. One evaluator covers every checker variant; a
variant is only a named combination of these switches.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict


class ReadSelectionPolicy(str, Enum):
    """Which read of each process is taken as its final read."""
    LAST_SETTLED = "last-settled"  # latest read completed outside any partition
    LAST_OVERALL = "last-overall"  # latest read, partitioned or not


class DeletePolicy(str, Enum):
    """When a completed delete counts as removing an add tag."""
    MATCHING_TAG = "matching-tag"  # tag must equal the value's current add tag
    ANY_TAG = "any-tag"  # every non-empty tag named, singly or as a collection, is recorded as deleted


@dataclass(frozen=True)
class CheckerConfig:
    partition_aware: bool = True
    check_duplicates: bool = True
    read_selection_policy: ReadSelectionPolicy = ReadSelectionPolicy.LAST_SETTLED
    delete_policy: DeletePolicy = DeletePolicy.MATCHING_TAG
    name: str = "partition-aware"

    def with_overrides(self, **changes) -> CheckerConfig:
        """Copy with fields replaced; the result is renamed to mark it as customized."""
        changes = {k: v for k, v in changes.items() if v is not None}
        if not changes:
            return self
        updated = replace(self, **changes)
        if "name" not in changes and updated != self:
            updated = replace(updated, name=f"{self.name}+custom")
        return updated

    def describe(self) -> str:
        return (
            f"partition_aware={self.partition_aware}, "
            f"check_duplicates={self.check_duplicates}, "
            f"read_selection={self.read_selection_policy.value}, "
            f"delete_policy={self.delete_policy.value}"
        )


PRESETS: Dict[str, CheckerConfig] = {
    "partition-aware": CheckerConfig(),
    "eventual": CheckerConfig(
        partition_aware=False,
        read_selection_policy=ReadSelectionPolicy.LAST_OVERALL,
        name="eventual",
    ),
    "legacy": CheckerConfig(
        partition_aware=False,
        read_selection_policy=ReadSelectionPolicy.LAST_OVERALL,
        delete_policy=DeletePolicy.ANY_TAG,
        name="legacy",
    ),
}

DEFAULT_VARIANT = "partition-aware"


def preset(name: str) -> CheckerConfig:
    """Look up a named configuration.

    Raises:
        ValueError: If no preset carries that name
    """
    try:
        return PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown checker variant '{name}'. Known: {', '.join(sorted(PRESETS))}")
