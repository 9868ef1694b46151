"""Tests for the static step catalog."""

import pytest

from models.steps import ScreenContext, WizardStep
from orchestrator.catalog import METHOD_ENTRY_STEPS, STEP_CATALOG, get_descriptor
from prompts.screen_prompts import OFFLINE_MESSAGE, ONLINE_MESSAGE
from state import DocumentMethod, VerificationRecord


EXPECTED_TRANSITIONS = {
    0: {1},
    1: {2, 3, 4},
    2: {7},
    3: {7},
    4: {7},
    5: {6},
    6: {8},
    7: {6},
    8: {0},
}


class TestStepCatalog:
    """Tests for the transition table."""

    def test_every_step_is_described(self) -> None:
        assert sorted(int(step) for step in STEP_CATALOG) == list(range(9))

    @pytest.mark.parametrize("step,expected", sorted(EXPECTED_TRANSITIONS.items()))
    def test_next_steps(self, step: int, expected: set) -> None:
        assert {int(s) for s in get_descriptor(step).next_steps} == expected

    def test_capture_steps_converge_on_one_completion_screen(self) -> None:
        targets = {
            frozenset(STEP_CATALOG[step].next_steps)
            for step in METHOD_ENTRY_STEPS.values()
        }
        assert targets == {frozenset({WizardStep.CAPTURE_COMPLETE})}
        assert STEP_CATALOG[WizardStep.CAPTURE_COMPLETE].next_steps == {WizardStep.CONNECTIVITY_NOTICE}

    def test_no_step_leads_to_the_unused_completion_index(self) -> None:
        for descriptor in STEP_CATALOG.values():
            assert WizardStep.COMPLETION not in descriptor.next_steps

    def test_capture_steps_name_their_method(self) -> None:
        for method, step in METHOD_ENTRY_STEPS.items():
            assert STEP_CATALOG[step].required_method == method

    def test_non_capture_steps_require_no_method(self) -> None:
        capture_steps = set(METHOD_ENTRY_STEPS.values())
        for step, descriptor in STEP_CATALOG.items():
            if step not in capture_steps:
                assert descriptor.required_method is None

    def test_unknown_step(self) -> None:
        with pytest.raises(ValueError):
            get_descriptor(42)


class TestRenderHooks:
    """Tests for the per-step body renderers."""

    def test_connectivity_notice_follows_signal(self) -> None:
        descriptor = STEP_CATALOG[WizardStep.CONNECTIVITY_NOTICE]
        record = VerificationRecord()
        assert descriptor.render(ScreenContext(record=record, online=False)) == OFFLINE_MESSAGE
        assert descriptor.render(ScreenContext(record=record, online=True)) == ONLINE_MESSAGE

    def test_digilocker_shows_selected_file(self) -> None:
        record = VerificationRecord(
            document_method=DocumentMethod.DIGITAL_LOCKER,
            document_identifier="passport.pdf",
        )
        body = STEP_CATALOG[WizardStep.DIGITAL_LOCKER_CAPTURE].render(
            ScreenContext(record=record, online=True)
        )
        assert "passport.pdf" in body

    def test_national_id_marks_complete_number(self) -> None:
        descriptor = STEP_CATALOG[WizardStep.NATIONAL_ID_ENTRY]
        partial = VerificationRecord(
            document_method=DocumentMethod.NATIONAL_ID_NUMBER,
            document_identifier="1234",
        )
        complete = partial.model_copy(update={"document_identifier": "123456789012"})
        assert "👍" not in descriptor.render(ScreenContext(record=partial, online=True))
        assert "👍" in descriptor.render(ScreenContext(record=complete, online=True))
