"""Filters de logging para injeção de contexto e mascaramento.

Campos injetados:
- correlation_id: ID da execução (run id)
- service: Nome do serviço (ex: apperian_publisher)

Campos mascarados:
- password, token, X-TOKEN, psk e afins, quando passados via `extra`
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

SENSITIVE_FIELDS = frozenset({"password", "token", "x-token", "authorization", "psk"})
MASK = "***"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SensitiveFieldFilter(logging.Filter):
    """Mascara credenciais passadas por engano via `extra`.

    Nunca bloqueia o record, apenas substitui os valores.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key in list(vars(record)):
            if key.lower() in SENSITIVE_FIELDS:
                setattr(record, key, MASK)
        headers = getattr(record, "headers", None)
        if isinstance(headers, dict):
            record.headers = {
                name: MASK if name.lower() in SENSITIVE_FIELDS else value
                for name, value in headers.items()
            }
        return True
