"""Configuração centralizada de logging.

Logging estruturado JSON em stderr com:
- Campos obrigatórios (correlation_id, service, level, logger, message)
- Mascaramento de credenciais
- Nível escolhido pelo CLI (--dolog liga INFO, senão WARNING)

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização do CLI
    configure_logging(level="INFO", service_name="apperian_publisher")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("upload_started", extra={"platform": "ios"})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SensitiveFieldFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "apperian_publisher"

# httpx loga cada request em INFO; só interessa com DEBUG
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    protocol: str | None = None,
) -> None:
    """Configura logging JSON estruturado para o processo.

    Deve ser chamada uma vez na inicialização do CLI.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função opcional que retorna o correlation_id
            do contexto atual (ex: de ContextVar).
        protocol: Protocolo Apperian (`ease`/`rest`) gravado em todo log.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter(protocol))
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(SensitiveFieldFilter())

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]

    noisy_level = logging.DEBUG if level_upper == "DEBUG" else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado.

    O filter injeta automaticamente service e correlation_id.
    """
    return logging.getLogger(name)
