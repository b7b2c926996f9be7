"""Registro de métricas via structured logging.

As métricas são logs estruturados; nenhum backend de métricas é usado.

Uso:
    from app.observability.metrics import record_latency, record_signing_polls

    start = time.perf_counter()
    # ... etapa ...
    record_latency("publish_workflow", "upload", (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de uma etapa.

    Args:
        component: Nome do componente (ex: "publish_workflow")
        operation: Nome da etapa (ex: "authenticate", "upload")
        latency_ms: Latência em milissegundos
        correlation_id: Run id para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_signing_polls(
    poll_count: int,
    final_status: str,
    correlation_id: str | None = None,
) -> None:
    """Registra quantas consultas de status a assinatura levou."""
    logger.info(
        "metric_signing_polls",
        extra={
            "metric_type": "counter",
            "poll_count": poll_count,
            "final_status": final_status,
            "correlation_id": correlation_id,
        },
    )
