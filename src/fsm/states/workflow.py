"""
Estados canônicos do fluxo de publicação no Apperian.

Cada execução percorre os estados em ordem, sem voltar atrás.
Qualquer falha leva a FAILED; o token de cancelamento leva a CANCELLED.
"""

from enum import StrEnum


class WorkflowState(StrEnum):
    """
    Estados de uma execução de publicação.

    Estados não-terminais:
        - INITIAL: Execução criada, nenhuma chamada de rede feita
        - AUTHENTICATED: Token obtido, sessão pronta
        - TARGET_RESOLVED: Aplicação remota resolvida (ou intenção de criar)
        - UPLOADED: Binário enviado, identificador de arquivo recebido
        - PUBLISHED: Transação publicada (apenas protocolo EASE)
        - SIGNING: Assinatura solicitada, aguardando status terminal

    Estados terminais:
        - ENABLED: Aplicação habilitada para distribuição
        - FAILED: Erro fatal, execução abortada
        - CANCELLED: Execução cancelada pelo chamador
    """

    INITIAL = "INITIAL"
    AUTHENTICATED = "AUTHENTICATED"
    TARGET_RESOLVED = "TARGET_RESOLVED"
    UPLOADED = "UPLOADED"
    PUBLISHED = "PUBLISHED"
    SIGNING = "SIGNING"

    ENABLED = "ENABLED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATES: frozenset[WorkflowState] = frozenset({
    WorkflowState.ENABLED,
    WorkflowState.FAILED,
    WorkflowState.CANCELLED,
})

DEFAULT_INITIAL_STATE: WorkflowState = WorkflowState.INITIAL


def is_terminal(state: WorkflowState) -> bool:
    """
    Verifica se o estado é terminal (execução encerrada).

    Args:
        state: Estado a ser verificado

    Returns:
        True se o estado é terminal, False caso contrário
    """
    return state in TERMINAL_STATES


def is_valid_state(state: WorkflowState) -> bool:
    """Verifica se o valor é um estado válido do enum."""
    return isinstance(state, WorkflowState)
