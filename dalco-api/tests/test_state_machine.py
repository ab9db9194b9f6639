import pytest
from app.services.commerce_types import Intent
from app.services.state_machine import (
    PipelineState,
    can_transition,
    transition,
    branch_for,
    InvalidTransitionError,
)


class TestValidTransitions:
    def test_received_to_classified(self):
        result = transition(PipelineState.RECEIVED, PipelineState.CLASSIFIED)
        assert result == PipelineState.CLASSIFIED

    def test_classified_to_each_branch(self):
        for state in (
            PipelineState.FAQ_ANSWERED,
            PipelineState.INVENTORY_CHECKED,
            PipelineState.ORDER_RECORDED,
            PipelineState.UNHANDLED,
        ):
            assert transition(PipelineState.CLASSIFIED, state) == state

    def test_branch_to_logged(self):
        result = transition(PipelineState.ORDER_RECORDED, PipelineState.LOGGED)
        assert result == PipelineState.LOGGED

    def test_logged_to_replied(self):
        result = transition(PipelineState.LOGGED, PipelineState.REPLIED)
        assert result == PipelineState.REPLIED


class TestInvalidTransitions:
    def test_received_cannot_skip_classification(self):
        with pytest.raises(InvalidTransitionError):
            transition(PipelineState.RECEIVED, PipelineState.FAQ_ANSWERED)

    def test_classified_cannot_log_without_branch(self):
        with pytest.raises(InvalidTransitionError):
            transition(PipelineState.CLASSIFIED, PipelineState.LOGGED)

    def test_branch_cannot_reply_before_logging(self):
        with pytest.raises(InvalidTransitionError):
            transition(PipelineState.INVENTORY_CHECKED, PipelineState.REPLIED)

    def test_replied_is_terminal(self):
        for state in PipelineState:
            assert can_transition(PipelineState.REPLIED, state) is False

    def test_error_names_both_states(self):
        with pytest.raises(InvalidTransitionError) as exc_info:
            transition(PipelineState.LOGGED, PipelineState.CLASSIFIED)
        assert "logged -> classified" in str(exc_info.value)


class TestBranchFor:
    def test_each_intent_has_one_branch(self):
        assert branch_for(Intent.FAQ) == PipelineState.FAQ_ANSWERED
        assert branch_for(Intent.INVENTORY) == PipelineState.INVENTORY_CHECKED
        assert branch_for(Intent.ORDER) == PipelineState.ORDER_RECORDED
        assert branch_for(Intent.GENERAL) == PipelineState.UNHANDLED

    def test_unknown_value_is_unhandled(self):
        assert branch_for("complaint") == PipelineState.UNHANDLED
