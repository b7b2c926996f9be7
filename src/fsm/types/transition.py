"""Registro das transições de uma execução de publicação."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from fsm.states.workflow import WorkflowState


@dataclass(frozen=True, slots=True)
class StateTransition:
    """
    Uma etapa concluída do fluxo (ou uma consulta de assinatura).

    Attributes:
        from_state: Etapa anterior
        to_state: Etapa alcançada
        trigger: Operação que causou a mudança (ex: 'upload', 'signing_poll')
        sequence: Posição da transição na execução, a partir de 1
        metadata: Identificadores úteis para auditoria (file_id, application_id)
        timestamp: Momento da transição (UTC)
    """

    from_state: WorkflowState
    to_state: WorkflowState
    trigger: str
    sequence: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.trigger or not self.trigger.strip():
            raise ValueError("trigger não pode ser vazio")
        if self.sequence < 0:
            raise ValueError("sequence não pode ser negativo")

    @property
    def is_signing_poll(self) -> bool:
        """True para a volta SIGNING → SIGNING de uma consulta de status."""
        return self.from_state is WorkflowState.SIGNING and self.to_state is WorkflowState.SIGNING

    def to_log_dict(self) -> dict[str, Any]:
        return {
            "sequence": self.sequence,
            "from_state": self.from_state.name,
            "to_state": self.to_state.name,
            "trigger": self.trigger,
            "timestamp": self.timestamp.isoformat(),
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """Resultado de `WorkflowStateMachine.transition`.

    Use `accepted()` ou `rejected()`; a combinação de campos é validada.
    """

    success: bool
    transition: StateTransition | None = None
    error_reason: str | None = None

    def __post_init__(self) -> None:
        if self.success and self.transition is None:
            raise ValueError("Transição aceita deve incluir transition")
        if not self.success and not self.error_reason:
            raise ValueError("Transição rejeitada deve incluir error_reason")

    @classmethod
    def accepted(cls, transition: StateTransition) -> "TransitionResult":
        return cls(success=True, transition=transition)

    @classmethod
    def rejected(cls, reason: str) -> "TransitionResult":
        return cls(success=False, error_reason=reason)
