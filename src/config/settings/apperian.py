"""Settings específicas do Apperian.

Endpoints, variante de protocolo, timeouts e intervalo de polling
da assinatura. Carregadas uma vez do ambiente.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

ProtocolVariant = Literal["ease", "rest"]

# Constantes do serviço
EASE_URL: str = "https://easesvc.apperian.com/ease.interface.php"
WS_BASE_URL: str = "https://na01ws.apperian.com"
PLACEHOLDER_DEVICE_ID: str = "00000000-0000-0000-0000-000000000000"
SIGNING_POLL_INTERVAL_SECONDS: float = 5.0

SUPPORTED_PROTOCOLS: frozenset[str] = frozenset({"ease", "rest"})


@dataclass(frozen=True)
class ApperianSettings:
    """Configurações do cliente Apperian.

    Attributes:
        protocol: Variante do protocolo remoto (ease = JSON-RPC, rest = API v2)
        ease_url: Endpoint JSON-RPC da geração EASE
        ws_base_url: Host das APIs REST (v1 e v2)
        request_timeout_seconds: Timeout das chamadas JSON
        upload_timeout_seconds: Timeout do upload multipart do binário
        signing_poll_interval_seconds: Intervalo entre consultas de assinatura
        device_id: Identificador de dispositivo enviado no login
        verify_ssl: Verifica certificados TLS
        do_log: Equivalente a --dolog vindo do ambiente
    """

    protocol: ProtocolVariant = "ease"
    ease_url: str = EASE_URL
    ws_base_url: str = WS_BASE_URL

    # Timeouts
    request_timeout_seconds: float = 30.0
    upload_timeout_seconds: float = 600.0

    # Assinatura
    signing_poll_interval_seconds: float = SIGNING_POLL_INTERVAL_SECONDS

    device_id: str = PLACEHOLDER_DEVICE_ID
    verify_ssl: bool = True
    do_log: bool = False

    def get_v1_endpoint(self, path: str) -> str:
        """Retorna URL completa da API REST v1.

        Args:
            path: Caminho relativo (ex: "applications/123")

        Returns:
            URL no formato: https://na01ws.apperian.com/v1/applications/123
        """
        return f"{self.ws_base_url.rstrip('/')}/v1/{path.lstrip('/')}"

    def get_v2_endpoint(self, path: str) -> str:
        """Retorna URL completa da API REST v2."""
        return f"{self.ws_base_url.rstrip('/')}/v2/{path.lstrip('/')}"

    def validate(self) -> list[str]:
        """Valida configurações mínimas do Apperian.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if self.protocol not in SUPPORTED_PROTOCOLS:
            errors.append("APPERIAN_PROTOCOL deve ser 'ease' ou 'rest'")

        if not self.ease_url:
            errors.append("APPERIAN_EASE_URL não configurado")

        if not self.ws_base_url:
            errors.append("APPERIAN_WS_BASE_URL não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("APPERIAN_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.upload_timeout_seconds <= 0:
            errors.append("APPERIAN_UPLOAD_TIMEOUT_SECONDS deve ser > 0")

        if self.signing_poll_interval_seconds < 0:
            errors.append("APPERIAN_SIGNING_POLL_INTERVAL_SECONDS deve ser >= 0")

        return errors


def _parse_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


def _parse_seconds(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} deve ser numérico (segundos): {raw!r}") from None


def _load_from_env() -> ApperianSettings:
    """Carrega ApperianSettings a partir de variáveis de ambiente."""
    return ApperianSettings(
        protocol=os.getenv("APPERIAN_PROTOCOL", "ease").lower(),  # type: ignore[arg-type]
        ease_url=os.getenv("APPERIAN_EASE_URL", EASE_URL),
        ws_base_url=os.getenv("APPERIAN_WS_BASE_URL", WS_BASE_URL),
        request_timeout_seconds=_parse_seconds("APPERIAN_REQUEST_TIMEOUT_SECONDS", 30.0),
        upload_timeout_seconds=_parse_seconds("APPERIAN_UPLOAD_TIMEOUT_SECONDS", 600.0),
        signing_poll_interval_seconds=_parse_seconds(
            "APPERIAN_SIGNING_POLL_INTERVAL_SECONDS",
            SIGNING_POLL_INTERVAL_SECONDS,
        ),
        device_id=os.getenv("APPERIAN_DEVICE_ID", "") or PLACEHOLDER_DEVICE_ID,
        verify_ssl=_parse_bool(os.getenv("APPERIAN_VERIFY_SSL", "true")),
        do_log=_parse_bool(os.getenv("APPERIAN_DOLOG", "false")),
    )


@lru_cache(maxsize=1)
def get_apperian_settings() -> ApperianSettings:
    """Retorna instância cacheada de ApperianSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
