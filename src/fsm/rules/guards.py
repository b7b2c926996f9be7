"""
Guards avaliados depois do grafo de transições.

O grafo diz quais etapas são vizinhas; os guards recusam casos que
o grafo sozinho não expressa (execução já encerrada, volta reflexiva
fora do polling de assinatura).
"""

from collections.abc import Callable
from dataclasses import dataclass

from fsm.states.workflow import TERMINAL_STATES, WorkflowState


@dataclass(frozen=True, slots=True)
class GuardResult:
    """Decisão de um guard: `allowed` e, quando negado, o motivo."""

    allowed: bool
    reason: str | None = None

    @classmethod
    def allow(cls) -> "GuardResult":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "GuardResult":
        return cls(allowed=False, reason=reason)


Guard = Callable[[WorkflowState, WorkflowState], GuardResult]


def guard_known_states(from_state: WorkflowState, to_state: WorkflowState) -> GuardResult:
    """Nega valores que não pertencem a WorkflowState."""
    for label, state in (("origem", from_state), ("destino", to_state)):
        if not isinstance(state, WorkflowState):
            return GuardResult.deny(f"Estado de {label} desconhecido: {state!r}")
    return GuardResult.allow()


def guard_run_closed(from_state: WorkflowState, to_state: WorkflowState) -> GuardResult:
    """Execução em ENABLED, FAILED ou CANCELLED não muda mais de estado."""
    if from_state in TERMINAL_STATES:
        return GuardResult.deny(
            f"Execução já encerrada em {from_state.name}; {to_state.name} recusado"
        )
    return GuardResult.allow()


def guard_signing_poll_only(from_state: WorkflowState, to_state: WorkflowState) -> GuardResult:
    """
    Voltas reflexivas só existem no polling da assinatura.

    Repetir qualquer outra etapa (ex: dois uploads) é recusado.
    """
    if from_state == to_state and from_state is not WorkflowState.SIGNING:
        return GuardResult.deny(f"Etapa {from_state.name} não pode ser repetida")
    return GuardResult.allow()


DEFAULT_GUARDS: tuple[Guard, ...] = (
    guard_known_states,
    guard_run_closed,
    guard_signing_poll_only,
)


def evaluate_guards(
    from_state: WorkflowState,
    to_state: WorkflowState,
    guards: tuple[Guard, ...] | list[Guard] | None = None,
) -> GuardResult:
    """Aplica os guards em ordem; a primeira negação vence."""
    for guard in DEFAULT_GUARDS if guards is None else guards:
        result = guard(from_state, to_state)
        if not result.allowed:
            return result
    return GuardResult.allow()
