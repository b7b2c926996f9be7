"""WorkflowStateMachine e factory."""

from fsm.manager.machine import INITIAL_STATES, WorkflowStateMachine, create_fsm

__all__ = ["INITIAL_STATES", "WorkflowStateMachine", "create_fsm"]
