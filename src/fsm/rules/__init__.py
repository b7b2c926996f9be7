"""Guards do fluxo de publicação."""

from fsm.rules.guards import (
    DEFAULT_GUARDS,
    Guard,
    GuardResult,
    evaluate_guards,
    guard_known_states,
    guard_run_closed,
    guard_signing_poll_only,
)

__all__ = [
    "DEFAULT_GUARDS",
    "Guard",
    "GuardResult",
    "evaluate_guards",
    "guard_known_states",
    "guard_run_closed",
    "guard_signing_poll_only",
]
