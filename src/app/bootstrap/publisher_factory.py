"""Factory de wiring do publicador (bootstrap).

Único ponto que acopla app <-> api: escolhe o adapter concreto pela
variante de protocolo e injeta no use case.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.apperian import EaseAdapter, RestV2Adapter, create_apperian_http_client
from app.use_cases.publish import PublishApplicationUseCase
from config.settings import get_apperian_settings

if TYPE_CHECKING:
    import httpx

    from api.connectors.apperian.adapters import ApperianAdapterBase
    from app.protocols.http_client import ApperianHttpClientProtocol
    from config.settings import ApperianSettings, ProtocolVariant

logger = logging.getLogger(__name__)

_ADAPTERS: dict[str, type[ApperianAdapterBase]] = {
    "ease": EaseAdapter,
    "rest": RestV2Adapter,
}


def create_publisher_adapter(
    settings: ApperianSettings,
    http_client: ApperianHttpClientProtocol,
    protocol: ProtocolVariant | None = None,
) -> ApperianAdapterBase:
    """Cria o adapter da variante de protocolo.

    Args:
        settings: Settings do Apperian
        http_client: Transport HTTP
        protocol: Sobrescreve settings.protocol quando informado

    Raises:
        ValueError: Variante desconhecida
    """
    variant = protocol or settings.protocol
    adapter_cls = _ADAPTERS.get(variant)
    if adapter_cls is None:
        raise ValueError(f"Protocolo Apperian desconhecido: {variant}")

    logger.info("publisher_adapter_created", extra={"protocol": variant})
    return adapter_cls(http_client, settings)


def create_publish_use_case(
    settings: ApperianSettings | None = None,
    protocol: ProtocolVariant | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PublishApplicationUseCase:
    """Cria o use case de publicação com dependências injetadas."""
    apperian = settings or get_apperian_settings()
    http_client = create_apperian_http_client(apperian, transport=transport)
    adapter = create_publisher_adapter(apperian, http_client, protocol)
    return PublishApplicationUseCase(
        adapter,
        poll_interval_seconds=apperian.signing_poll_interval_seconds,
        default_device_id=apperian.device_id,
    )
