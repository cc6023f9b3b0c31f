"""Tests for StepSequencer: initialize, confirm, reset and manual stepping."""

import pytest

from startday.sequencer import StepSequencer
from startday.steps import INSTRUCTION_SEQUENCE


def _pending_count(sequencer):
    return sum(1 for step in sequencer.steps if step["status"] == "pending")


class TestInitialize:
    def test_single_pending_first_step(self, sequencer):
        steps = sequencer.steps
        assert len(steps) == 1
        assert steps[0]["title"] == "LIGHTS ON"
        assert steps[0]["description"] == "Switch on all lights."
        assert steps[0]["status"] == "pending"
        assert sequencer.finished is False

    def test_first_id_uses_init_prefix(self, sequencer):
        assert sequencer.current_step["id"].startswith("init-")

    def test_empty_definitions_show_nothing(self, sleeps):
        sequencer = StepSequencer([], settle_seconds=0.7, sleep=sleeps)
        assert sequencer.steps == []
        assert sequencer.current_step is None
        assert sequencer.pending_step is None
        assert sequencer.finished is False

    def test_empty_definitions_ignore_confirm(self, sleeps):
        sequencer = StepSequencer([], settle_seconds=0.7, sleep=sleeps)
        assert sequencer.confirm("init-anything") is False
        assert sequencer.state == {"steps": [], "finished": False}
        assert sleeps.calls == []

    def test_defaults_to_instruction_sequence(self, sleeps):
        sequencer = StepSequencer(sleep=sleeps)
        assert sequencer.definitions == INSTRUCTION_SEQUENCE
        assert sequencer.current_step["title"] == INSTRUCTION_SEQUENCE[0]["title"]

    def test_settle_delay_read_from_config(self, mock_config, sleeps):
        sequencer = StepSequencer([{"title": "A"}], sleep=sleeps)
        assert sequencer.settle_seconds == pytest.approx(0.25)
        assert sequencer.reset_prompt == "Start over?"

    def test_accessors_return_copies(self, sequencer):
        sequencer.steps[0]["status"] = "completed"
        sequencer.current_step["title"] = "changed"
        assert sequencer.current_step["status"] == "pending"
        assert sequencer.current_step["title"] == "LIGHTS ON"


class TestConfirm:
    def test_walkthrough_example(self, sequencer, sleeps):
        first = sequencer.pending_step
        assert sequencer.confirm(first["id"]) is True

        second = sequencer.pending_step
        assert second["title"] == "SYSTEM UP"
        assert sequencer.finished is False
        assert sleeps.calls == [0.7]

        assert sequencer.confirm(second["id"]) is True
        assert sequencer.finished is True
        assert sequencer.pending_step is None
        assert sleeps.calls == [0.7, 0.7]

    def test_confirmed_step_kept_in_history(self, sequencer):
        first_id = sequencer.pending_step["id"]
        sequencer.confirm(first_id)

        steps = sequencer.steps
        assert len(steps) == 2
        assert steps[0]["id"] == first_id
        assert steps[0]["status"] == "completed"
        assert steps[1]["status"] == "pending"

    def test_revealed_ids_are_unique(self, sequencer):
        sequencer.confirm(sequencer.pending_step["id"])
        ids = [step["id"] for step in sequencer.steps]
        assert len(set(ids)) == 2
        assert ids[1].startswith("step-")

    def test_mismatched_id_leaves_state_unchanged(self, sequencer, sleeps):
        before = sequencer.state
        assert sequencer.confirm("step-not-the-pending-one") is False
        assert sequencer.state == before
        assert sleeps.calls == []

    def test_completed_id_cannot_be_confirmed_again(self, sequencer):
        first_id = sequencer.pending_step["id"]
        sequencer.confirm(first_id)
        before = sequencer.state

        assert sequencer.confirm(first_id) is False
        assert sequencer.state == before

    def test_n_confirms_finish_and_next_is_noop(self, sleeps):
        definitions = [{"title": f"STEP {i}"} for i in range(5)]
        sequencer = StepSequencer(definitions, settle_seconds=0.7, sleep=sleeps)

        for i in range(5):
            assert sequencer.finished is False
            assert sequencer.confirm(sequencer.pending_step["id"]) is True
            assert _pending_count(sequencer) <= 1

        assert sequencer.finished is True
        assert len(sequencer.steps) == 5

        before = sequencer.state
        assert sequencer.confirm(sequencer.steps[-1]["id"]) is False
        assert sequencer.state == before

    def test_at_most_one_pending_after_each_confirm(self, sequencer):
        while not sequencer.finished:
            assert _pending_count(sequencer) == 1
            sequencer.confirm(sequencer.pending_step["id"])
        assert _pending_count(sequencer) == 0

    def test_definitions_are_not_mutated(self, definitions, sequencer):
        snapshot = [dict(d) for d in definitions]
        while not sequencer.finished:
            sequencer.confirm(sequencer.pending_step["id"])
        assert [dict(d) for d in definitions] == snapshot

    def test_missing_description_is_none(self, sleeps):
        sequencer = StepSequencer([{"title": "ONLY TITLE"}], settle_seconds=0, sleep=sleeps)
        assert sequencer.current_step["description"] is None

    def test_titles_and_progress(self, sequencer):
        assert sequencer.titles() == ["LIGHTS ON"]
        assert sequencer.progress() == (1, 2)
        sequencer.confirm(sequencer.pending_step["id"])
        assert sequencer.titles() == ["LIGHTS ON", "SYSTEM UP"]
        assert sequencer.progress() == (2, 2)


class TestReset:
    def test_declined_keeps_state(self, sequencer):
        sequencer.confirm(sequencer.pending_step["id"])
        before = sequencer.state

        assert sequencer.reset(lambda prompt: False) is False
        assert sequencer.state == before

    def test_accepted_after_finish_restores_first_step(self, sequencer):
        while not sequencer.finished:
            sequencer.confirm(sequencer.pending_step["id"])

        assert sequencer.reset(lambda prompt: True) is True

        steps = sequencer.steps
        assert len(steps) == 1
        assert steps[0]["title"] == "LIGHTS ON"
        assert steps[0]["status"] == "pending"
        assert sequencer.finished is False

    def test_reset_issues_fresh_id(self, sequencer):
        old_id = sequencer.current_step["id"]
        sequencer.reset(lambda prompt: True)
        assert sequencer.current_step["id"] != old_id

    def test_prompt_text_passed_to_host(self, sequencer):
        asked = []

        def ask(prompt):
            asked.append(prompt)
            return False

        sequencer.reset(ask)
        assert asked == ["Reset your flow?"]

    def test_old_id_ignored_after_reset(self, sequencer):
        old_id = sequencer.current_step["id"]
        sequencer.reset(lambda prompt: True)
        assert sequencer.confirm(old_id) is False


class TestManualStepping:
    def test_begin_confirm_marks_completed_without_waiting(self, sequencer, sleeps):
        assert sequencer.begin_confirm(sequencer.pending_step["id"]) is True
        assert sequencer.current_step["status"] == "completed"
        assert sequencer.pending_step is None
        assert len(sequencer.steps) == 1
        assert sleeps.calls == []

    def test_settle_then_advance_reveals(self, sequencer, sleeps):
        sequencer.begin_confirm(sequencer.pending_step["id"])
        sequencer.settle()
        assert sleeps.calls == [0.7]

        assert sequencer.advance() == "reveal"
        assert sequencer.pending_step["title"] == "SYSTEM UP"

    def test_advance_past_last_step_finishes(self, sequencer):
        sequencer.confirm(sequencer.pending_step["id"])
        sequencer.begin_confirm(sequencer.pending_step["id"])
        sequencer.settle()

        assert sequencer.advance() == "finish"
        assert sequencer.finished is True

    def test_advance_only_once_per_confirmation(self, sequencer):
        sequencer.begin_confirm(sequencer.pending_step["id"])
        assert sequencer.advance() == "reveal"
        assert sequencer.advance() is None
        assert len(sequencer.steps) == 2

    def test_advance_without_confirmation_does_nothing(self, sequencer, sleeps):
        sequencer.settle()
        assert sequencer.advance() is None
        assert sleeps.calls == []
        assert len(sequencer.steps) == 1

    def test_mismatched_begin_confirm_is_ignored(self, sequencer):
        before = sequencer.state
        assert sequencer.begin_confirm("step-wrong") is False
        assert sequencer.state == before
        assert sequencer.advance() is None

    def test_stray_begin_confirm_keeps_cycle_going(self, sequencer):
        sequencer.begin_confirm(sequencer.pending_step["id"])
        assert sequencer.begin_confirm("step-wrong") is False

        sequencer.settle()
        assert sequencer.advance() == "reveal"
        assert sequencer.pending_step["title"] == "SYSTEM UP"

    def test_repeated_begin_confirm_keeps_cycle_going(self, sequencer):
        first_id = sequencer.pending_step["id"]
        sequencer.begin_confirm(first_id)
        assert sequencer.begin_confirm(first_id) is False
        assert sequencer.advance() == "reveal"

    def test_confirm_during_transition_is_ignored(self, sequencer):
        first_id = sequencer.current_step["id"]
        sequencer.begin_confirm(first_id)
        assert sequencer.confirm(first_id) is False

    def test_unknown_node_raises(self, sequencer):
        with pytest.raises(KeyError):
            sequencer.run_single_step("teleport")
