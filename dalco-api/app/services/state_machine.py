from enum import Enum

from app.services.commerce_types import Intent


class PipelineState(str, Enum):
    RECEIVED = "received"
    CLASSIFIED = "classified"
    FAQ_ANSWERED = "faq_answered"
    INVENTORY_CHECKED = "inventory_checked"
    ORDER_RECORDED = "order_recorded"
    UNHANDLED = "unhandled"
    LOGGED = "logged"
    REPLIED = "replied"


FULFILLED_STATES = [
    PipelineState.FAQ_ANSWERED,
    PipelineState.INVENTORY_CHECKED,
    PipelineState.ORDER_RECORDED,
    PipelineState.UNHANDLED,
]

VALID_TRANSITIONS = {
    PipelineState.RECEIVED: [PipelineState.CLASSIFIED],
    PipelineState.CLASSIFIED: FULFILLED_STATES,
    PipelineState.FAQ_ANSWERED: [PipelineState.LOGGED],
    PipelineState.INVENTORY_CHECKED: [PipelineState.LOGGED],
    PipelineState.ORDER_RECORDED: [PipelineState.LOGGED],
    PipelineState.UNHANDLED: [PipelineState.LOGGED],
    PipelineState.LOGGED: [PipelineState.REPLIED],
    PipelineState.REPLIED: [],
}

INTENT_BRANCHES = {
    Intent.FAQ: PipelineState.FAQ_ANSWERED,
    Intent.INVENTORY: PipelineState.INVENTORY_CHECKED,
    Intent.ORDER: PipelineState.ORDER_RECORDED,
    Intent.GENERAL: PipelineState.UNHANDLED,
}


class InvalidTransitionError(Exception):
    def __init__(self, from_state: PipelineState, to_state: PipelineState):
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(f"Invalid transition: {from_state.value} -> {to_state.value}")


def can_transition(from_state: PipelineState, to_state: PipelineState) -> bool:
    """Check if transition is valid."""
    allowed = VALID_TRANSITIONS.get(from_state, [])
    return to_state in allowed


def transition(from_state: PipelineState, to_state: PipelineState) -> PipelineState:
    """Perform state transition. Raises InvalidTransitionError if not allowed."""
    if not can_transition(from_state, to_state):
        raise InvalidTransitionError(from_state, to_state)
    return to_state


def branch_for(intent: Intent) -> PipelineState:
    """Fulfillment state for an intent; anything unrecognised is unhandled."""
    return INTENT_BRANCHES.get(intent, PipelineState.UNHANDLED)
