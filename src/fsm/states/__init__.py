"""Estados do fluxo de publicação."""

from fsm.states.workflow import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    WorkflowState,
    is_terminal,
    is_valid_state,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "TERMINAL_STATES",
    "WorkflowState",
    "is_terminal",
    "is_valid_state",
]
