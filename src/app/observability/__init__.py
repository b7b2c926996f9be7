"""Observabilidade: run id e métricas via logs estruturados.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_signing_polls
"""

from app.observability.correlation import (
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_latency,
    record_signing_polls,
)

__all__ = [
    "generate_correlation_id",
    "get_correlation_id",
    "record_latency",
    "record_signing_polls",
    "reset_correlation_id",
    "set_correlation_id",
]
