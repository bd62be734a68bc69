# tests/logic_tests/test_correlator_scenarios.py

import pytest

from logic.config import DeletePolicy
from logic.correlator import Correlator, client_completions, correlate
from model.timeline import PartitionTimeline
from history_builders import add, delete, invoke, op, read, start, stop


def run(history, policy=DeletePolicy.MATCHING_TAG):
    return correlate(history, PartitionTimeline.from_history(history), policy)


class TestCorrelatorScenarios:
    """
    Test suite for the event correlator: which operations contribute state,
    how add tags are recorded, when a delete is valid, and how reads are
    captured with their partition state.
    """

    def test_01_only_ok_client_completions_contribute(self):
        history = [
            invoke(0, "add", 1, 1),
            op(0, "fail", "add", 2, 2, "e2"),
            op(1, "info", "add", 3, 3, "e3"),
            add(0, 1, "e1", 4),
            start(5),
        ]
        assert [o.value for o in client_completions(history)] == [1]
        state = run(history)
        assert state.adds == {1: "e1"}

    def test_02_later_add_overwrites_tag(self):
        state = run([add(0, "x", "e1", 1), add(1, "x", "e2", 2)])
        assert state.adds == {"x": "e2"}

    def test_03_matching_delete_is_valid_and_removes_its_tag(self):
        state = run([add(0, "x", "e1", 1), delete(1, "x", "e1", 2)])
        assert state.deleted_event_ids == {"e1"}
        (attempt,) = state.delete_attempts
        assert attempt.valid is True
        assert attempt.value == "x"
        assert attempt.process == 1
        assert attempt.time == 2
        assert "x" not in state.expected_values()

    @pytest.mark.parametrize(
        "event_id",
        ["e9", "", None, 7, ("e1",)],
        ids=["other-tag", "empty", "absent", "int", "tuple"],
    )
    def test_04_delete_without_matching_tag_is_invalid(self, event_id):
        state = run([add(0, "x", "e1", 1), delete(1, "x", event_id, 2)])
        assert state.deleted_event_ids == set()
        assert state.delete_attempts[0].valid is False
        assert state.expected_values() == {"x"}

    def test_05_delete_of_never_added_value_is_invalid(self):
        state = run([delete(0, "ghost", "e1", 1)])
        assert state.delete_attempts[0].valid is False
        assert state.deleted_event_ids == set()

    def test_06_stale_tag_after_readd_is_invalid(self):
        """
        add(x)->e1, add(x)->e2, delete(x, e1): the delete names a tag that
        is no longer the live one, so x stays in the expected set.
        """
        state = run([add(0, "x", "e1", 1), add(1, "x", "e2", 2), delete(2, "x", "e1", 3)])
        assert state.delete_attempts[0].valid is False
        assert state.expected_values() == {"x"}

    def test_07_readd_after_delete_is_expected_again(self):
        state = run([add(0, "x", "e1", 1), delete(0, "x", "e1", 2), add(0, "x", "e2", 3)])
        assert state.deleted_event_ids == {"e1"}
        assert state.expected_values() == {"x"}

    def test_08_any_tag_policy_accepts_any_nonempty_tag(self):
        state = run([add(0, "x", "e1", 1), delete(1, "y", "zz", 2)], DeletePolicy.ANY_TAG)
        assert state.delete_attempts[0].valid is True
        assert state.deleted_event_ids == {"zz"}
        assert state.expected_values() == {"x"}

    def test_09_any_tag_policy_still_rejects_empty_tag(self):
        state = run([add(0, "x", "e1", 1), delete(1, "x", "", 2)], DeletePolicy.ANY_TAG)
        assert state.delete_attempts[0].valid is False

    def test_10_reads_capture_partition_state_and_raw_values(self):
        history = [start(10), read(0, [1, 1, 2], 12), stop(20), read(1, [2, 1], 25)]
        state = run(history)
        first, second = state.reads
        assert first.during_partition is True
        assert first.raw_values == (1, 1, 2)
        assert first.values == {1, 2}
        assert second.during_partition is False
        assert second.settled

    def test_11_deletes_record_partition_state(self):
        history = [add(0, 1, "e1", 1), start(5), delete(1, 1, "e1", 6), stop(9)]
        assert run(history).delete_attempts[0].during_partition is True

    def test_12_unknown_kinds_are_ignored(self):
        state = run([op(0, "ok", "cas", 1, (1, 2)), add(0, 1, "e1", 2)])
        assert state.adds == {1: "e1"}
        assert state.reads == []
        assert state.delete_attempts == []

    def test_13_scan_follows_time_not_list_order(self):
        """The delete is listed first but completed after the add."""
        state = run([delete(1, "x", "e1", 5), add(0, "x", "e1", 2)])
        assert state.delete_attempts[0].valid is True

    def test_14_empty_read_result(self):
        state = run([op(0, "ok", "read", 1, None)])
        assert state.reads[0].values == frozenset()
        assert state.reads[0].raw_values == ()

    def test_15_each_scan_starts_from_a_fresh_accumulator(self):
        correlator = Correlator(PartitionTimeline())
        first = correlator.correlate([add(0, 1, "e1", 1)])
        second = correlator.correlate([add(0, 2, "e2", 1)])
        assert first.adds == {1: "e1"}
        assert second.adds == {2: "e2"}

    def test_16_uncorrelated_add_is_expected_but_undeletable(self):
        state = run([add(0, "x", None, 1), delete(0, "x", "e1", 2)])
        assert state.adds == {"x": None}
        assert state.delete_attempts[0].valid is False
        assert state.expected_values() == {"x"}

    def test_17_any_tag_policy_accepts_a_collection_of_tags(self):
        """A legacy delete may name several tags; each non-empty one is deleted."""
        history = [add(0, "x", "e1", 1), add(0, "y", "e2", 2), delete(1, "x", ("e1", "e2"), 3)]
        state = run(history, DeletePolicy.ANY_TAG)
        assert state.delete_attempts[0].valid is True
        assert state.deleted_event_ids == {"e1", "e2"}
        assert state.expected_values() == frozenset()

    @pytest.mark.parametrize(
        "event_ids,deleted",
        [(("e1", "", 7), {"e1"}), (frozenset({"e3"}), {"e3"}), ((), set()), (("", None), set())],
        ids=["mixed", "set", "empty", "no-usable-tag"],
    )
    def test_18_any_tag_collection_keeps_only_usable_tags(self, event_ids, deleted):
        state = run([delete(0, "x", event_ids, 1)], DeletePolicy.ANY_TAG)
        assert state.deleted_event_ids == deleted
        assert state.delete_attempts[0].valid is bool(deleted)

    def test_19_matching_tag_policy_rejects_a_collection(self):
        state = run([add(0, "x", "e1", 1), delete(1, "x", ("e1", "e2"), 2)])
        assert state.delete_attempts[0].valid is False
        assert state.deleted_event_ids == set()
