"""
Regras de transição válidas entre estados do fluxo de publicação.

O grafo é estritamente para a frente. A única aresta reflexiva é
SIGNING → SIGNING, registrada a cada consulta de status da assinatura.
"""

from fsm.states.workflow import TERMINAL_STATES, WorkflowState

TransitionMap = dict[WorkflowState, frozenset[WorkflowState]]

_ABORT = frozenset({WorkflowState.FAILED, WorkflowState.CANCELLED})

VALID_TRANSITIONS: TransitionMap = {
    WorkflowState.INITIAL: frozenset({WorkflowState.AUTHENTICATED}) | _ABORT,
    WorkflowState.AUTHENTICATED: frozenset({WorkflowState.TARGET_RESOLVED}) | _ABORT,
    WorkflowState.TARGET_RESOLVED: frozenset({WorkflowState.UPLOADED}) | _ABORT,

    # UPLOADED: o protocolo REST não tem etapa de publish
    WorkflowState.UPLOADED: frozenset({
        WorkflowState.PUBLISHED,
        WorkflowState.SIGNING,
        WorkflowState.ENABLED,
    }) | _ABORT,

    WorkflowState.PUBLISHED: frozenset({
        WorkflowState.SIGNING,
        WorkflowState.ENABLED,
    }) | _ABORT,

    WorkflowState.SIGNING: frozenset({
        WorkflowState.SIGNING,  # Uma volta por consulta de status
        WorkflowState.ENABLED,
    }) | _ABORT,

    WorkflowState.ENABLED: frozenset(),
    WorkflowState.FAILED: frozenset(),
    WorkflowState.CANCELLED: frozenset(),
}


def get_valid_targets(state: WorkflowState) -> frozenset[WorkflowState]:
    """
    Retorna os estados de destino válidos para um estado de origem.

    Args:
        state: Estado de origem

    Returns:
        Conjunto de estados de destino permitidos (vazio se terminal)
    """
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: WorkflowState, to_state: WorkflowState) -> bool:
    """Verifica se uma transição é válida segundo as regras definidas."""
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Verifica:
    - Todos os estados do enum estão no mapa
    - Estados terminais têm conjunto vazio
    - Nenhuma transição aponta para estado inexistente

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in WorkflowState:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")

    for state in TERMINAL_STATES:
        targets = VALID_TRANSITIONS.get(state, frozenset())
        if targets:
            errors.append(
                f"Estado terminal {state.name} não deveria ter transições: {targets}"
            )

    for from_state, targets in VALID_TRANSITIONS.items():
        for target in targets:
            if not isinstance(target, WorkflowState):
                errors.append(
                    f"Transição {from_state.name} → {target}: destino inválido"
                )

    return errors
