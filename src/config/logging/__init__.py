"""Configuração de logging estruturado.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="apperian_publisher")
    logger = get_logger(__name__)
    logger.info("upload_completed", extra={"file_id": "abc123"})

Campos obrigatórios em todo log:
- correlation_id
- service
- level
- logger
- message
- asctime

Token e senha nunca aparecem nos logs.
"""

from config.logging.config import configure_logging, get_logger
from config.logging.filters import CorrelationIdFilter, SensitiveFieldFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "SensitiveFieldFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
]
