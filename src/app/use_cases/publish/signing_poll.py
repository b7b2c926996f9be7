"""Polling do status de assinatura.

Consulta o status em intervalo fixo, sem limite de tentativas, até
um status terminal. A espera é não-bloqueante e acorda imediatamente
quando o evento de cancelamento é setado.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from app.domain import SigningStatus, SigningStatusReport
from utils.errors import SigningError, WorkflowCancelledError

if TYPE_CHECKING:
    from app.protocols.publisher_adapter import PublisherAdapterProtocol
    from app.sessions import ApperianSession

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


async def pause(
    interval_seconds: float,
    cancel_event: asyncio.Event | None,
    sleep: SleepFn = asyncio.sleep,
) -> None:
    """Espera o intervalo ou aborta se o cancelamento chegar antes.

    Raises:
        WorkflowCancelledError: Cancelamento setado antes ou durante a espera.
    """
    if cancel_event is None:
        await sleep(interval_seconds)
        return

    if cancel_event.is_set():
        raise WorkflowCancelledError("Execução cancelada")
    try:
        await asyncio.wait_for(cancel_event.wait(), timeout=interval_seconds)
    except TimeoutError:
        return
    raise WorkflowCancelledError("Execução cancelada durante o polling da assinatura")


async def wait_for_signing(
    adapter: PublisherAdapterProtocol,
    session: ApperianSession,
    application_id: str,
    *,
    interval_seconds: float,
    cancel_event: asyncio.Event | None = None,
    sleep: SleepFn = asyncio.sleep,
    on_poll: Callable[[SigningStatusReport, int], None] | None = None,
) -> tuple[SigningStatusReport, int]:
    """Consulta o status até `signed` ou `error`.

    A primeira consulta é imediata; as seguintes esperam `interval_seconds`.
    Status ausente ou desconhecido conta como em andamento.

    Args:
        adapter: Adapter do protocolo
        session: Sessão autenticada
        application_id: App cuja versão está sendo assinada
        interval_seconds: Intervalo fixo entre consultas
        cancel_event: Evento que interrompe o polling
        sleep: Função de espera usada sem cancel_event
        on_poll: Callback chamado a cada consulta (report, tentativa)

    Returns:
        (report terminal `signed`, número de consultas)

    Raises:
        SigningError: Status terminal `error`, com o detalhe do servidor
        WorkflowCancelledError: Cancelamento durante o polling
    """
    attempt = 0
    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise WorkflowCancelledError("Execução cancelada durante o polling da assinatura")

        attempt += 1
        report = await adapter.get_signing_status(session, application_id)
        if on_poll is not None:
            on_poll(report, attempt)

        if report.status is SigningStatus.SIGNED:
            logger.info(
                "signing_completed",
                extra={"application_id": application_id, "detail": report.detail, "attempt": attempt},
            )
            return report, attempt

        if report.status is SigningStatus.ERROR:
            logger.error(
                "signing_failed",
                extra={"application_id": application_id, "detail": report.detail, "attempt": attempt},
            )
            raise SigningError(f"Erro ao assinar aplicação: {report.detail}", detail=report.detail)

        if report.status is None:
            logger.warning(
                "signing_status_unknown",
                extra={"application_id": application_id, "attempt": attempt},
            )
        else:
            logger.info(
                "signing_in_progress",
                extra={"application_id": application_id, "detail": report.detail, "attempt": attempt},
            )

        await pause(interval_seconds, cancel_event, sleep)
