"""Bootstrap do publicador: inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings
e conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, create_publish_use_case

    initialize_app(do_log=True)
    use_case = create_publish_use_case()
"""

from __future__ import annotations

import logging

from app.bootstrap.publisher_factory import create_publish_use_case, create_publisher_adapter
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_apperian_settings, get_base_settings

# Sem --dolog só avisos e erros chegam ao stderr
QUIET_LOG_LEVEL = "WARNING"
VERBOSE_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app(do_log: bool = False, protocol: str | None = None) -> None:
    """Configura logging estruturado JSON com correlation_id e protocolo.

    LOG_LEVEL=DEBUG no ambiente vence; caso contrário --dolog (ou
    APPERIAN_DOLOG) liga o nível INFO.
    """
    base = get_base_settings()
    if base.log_level.upper() == "DEBUG":
        level = "DEBUG"
    elif do_log or get_apperian_settings().do_log:
        level = VERBOSE_LOG_LEVEL
    else:
        level = QUIET_LOG_LEVEL

    configure_logging(
        level=level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
        protocol=protocol or get_apperian_settings().protocol,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias antes de qualquer chamada de rede.

    Em `staging`/`production` falha rápido; em `development`/`test`
    só registra o alerta.
    """
    base = get_base_settings()
    environment = base.environment
    errors: list[str] = [f"base: {error}" for error in base.validate()]
    errors.extend(f"apperian: {error}" for error in get_apperian_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if environment in STRICT_VALIDATION_ENVS:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


__all__ = [
    "create_publish_use_case",
    "create_publisher_adapter",
    "initialize_app",
    "validate_runtime_settings",
]
