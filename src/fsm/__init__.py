"""
Estados de uma execução de publicação no Apperian.

    INITIAL → AUTHENTICATED → TARGET_RESOLVED → UPLOADED
        → [PUBLISHED] → [SIGNING ↺] → ENABLED

FAILED e CANCELLED são alcançáveis de qualquer etapa ativa.
"""

from fsm.manager import INITIAL_STATES, WorkflowStateMachine, create_fsm
from fsm.rules import GuardResult, evaluate_guards
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    WorkflowState,
    is_terminal,
    is_valid_state,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import StateTransition, TransitionResult

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "INITIAL_STATES",
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "GuardResult",
    "StateTransition",
    "TransitionResult",
    "WorkflowState",
    "WorkflowStateMachine",
    "create_fsm",
    "evaluate_guards",
    "get_valid_targets",
    "is_terminal",
    "is_transition_valid",
    "is_valid_state",
    "validate_transition_map",
]
