"""
WorkflowStateMachine: estado e histórico de uma execução de publicação.

Uma instância pertence a uma única execução e só o orquestrador a
avança. O histórico é a trilha de auditoria devolvida no PublishResult,
por isso chaves sensíveis nunca entram nos metadados.
"""

from typing import Any

from fsm.rules.guards import evaluate_guards
from fsm.states.workflow import DEFAULT_INITIAL_STATE, WorkflowState, is_terminal
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult

INITIAL_STATES = frozenset({DEFAULT_INITIAL_STATE})

_REDACTED_METADATA_KEYS = frozenset({"password", "token", "x-token", "psk"})


def _scrub(metadata: dict[str, Any] | None) -> dict[str, Any]:
    if not metadata:
        return {}
    return {
        key: value
        for key, value in metadata.items()
        if key.lower() not in _REDACTED_METADATA_KEYS
    }


class WorkflowStateMachine:
    """
    Avança a execução pelas etapas do fluxo de publicação.

    Attributes:
        current_state: Etapa atual
        history: Transições aceitas, em ordem
        signing_polls: Quantas consultas de assinatura foram registradas
    """

    __slots__ = ("_current_state", "_history", "_run_id")

    def __init__(
        self,
        initial_state: WorkflowState | None = None,
        run_id: str = "",
    ) -> None:
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._history: list[StateTransition] = []
        self._run_id = run_id

    @property
    def current_state(self) -> WorkflowState:
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Cópia do histórico."""
        return list(self._history)

    @property
    def run_id(self) -> str:
        return self._run_id

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self._current_state)

    @property
    def signing_polls(self) -> int:
        return sum(1 for item in self._history if item.is_signing_poll)

    def get_valid_targets(self) -> frozenset[WorkflowState]:
        return get_valid_targets(self._current_state)

    def can_transition_to(self, target: WorkflowState) -> bool:
        return self._rejection_reason(target) is None

    def transition(
        self,
        target: WorkflowState,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta mover a execução para `target`.

        Args:
            target: Etapa de destino
            trigger: Operação que causou a mudança
            metadata: Identificadores para auditoria; password, token e psk
                são descartados

        Returns:
            TransitionResult aceito (estado e histórico atualizados)
            ou rejeitado (nada muda)
        """
        reason = self._rejection_reason(target)
        if reason is not None:
            return TransitionResult.rejected(reason)

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            sequence=len(self._history) + 1,
            metadata=_scrub(metadata),
        )
        self._history.append(transition)
        self._current_state = target
        return TransitionResult.accepted(transition)

    def _rejection_reason(self, target: WorkflowState) -> str | None:
        if not is_transition_valid(self._current_state, target):
            return f"Transição inválida: {self._current_state.name} → {target.name}"
        guard = evaluate_guards(self._current_state, target)
        return None if guard.allowed else guard.reason

    def get_state_summary(self) -> dict[str, Any]:
        """Resumo da execução para logs estruturados."""
        return {
            "run_id": self._run_id,
            "current_state": self._current_state.name,
            "is_terminal": self.is_terminal,
            "transition_count": len(self._history),
            "signing_polls": self.signing_polls,
            "valid_targets": sorted(state.name for state in self.get_valid_targets()),
        }

    def get_history_summary(self) -> list[dict[str, Any]]:
        return [item.to_log_dict() for item in self._history]


def create_fsm(run_id: str, initial_state: WorkflowState | None = None) -> WorkflowStateMachine:
    """Cria a máquina de uma execução identificada por `run_id`."""
    return WorkflowStateMachine(initial_state=initial_state, run_id=run_id)
