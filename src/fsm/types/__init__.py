"""Registros de transição (StateTransition, TransitionResult)."""

from fsm.types.transition import StateTransition, TransitionResult

__all__ = ["StateTransition", "TransitionResult"]
