"""Helpers de logging para a API do Apperian (sem token ou senha)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .api_errors import ApperianApiError

logger = logging.getLogger(__name__)


def log_api_error(
    api_error: ApperianApiError,
    method: str,
    endpoint: str,
    status_code: int,
) -> None:
    """Loga erro de aplicação devolvido pelo Apperian."""
    logger.error(
        "apperian_api_error",
        extra={
            "method": method,
            "endpoint": endpoint,
            "status_code": status_code,
            "error_code": api_error.error_code,
            "error_message": api_error.error_message,
        },
    )


def log_http_status_error(method: str, endpoint: str, status_code: int) -> None:
    """Loga resposta HTTP de erro sem corpo interpretável."""
    logger.error(
        "apperian_http_status_error",
        extra={"method": method, "endpoint": endpoint, "status_code": status_code},
    )


def log_success(
    method: str,
    endpoint: str,
    status_code: int,
) -> None:
    """Loga sucesso sem expor dados sensíveis."""
    logger.debug(
        "apperian_call_succeeded",
        extra={
            "method": method,
            "endpoint": endpoint,
            "status_code": status_code,
        },
    )


def log_upload_finished(
    endpoint: str,
    file_name: str,
    size_bytes: int,
    elapsed_ms: float,
) -> None:
    """Loga o fim do upload do binário (visível com --dolog)."""
    logger.info(
        "apperian_upload_finished",
        extra={
            "endpoint": endpoint,
            "file_name": file_name,
            "size_bytes": size_bytes,
            "elapsed_ms": round(elapsed_ms, 2),
        },
    )
