"""Cliente HTTP base para conectores da camada API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from utils.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP.

    Não há retry nesta camada: a única repetição do fluxo é o
    polling de status da assinatura.
    """

    timeout_seconds: float = 30.0
    upload_timeout_seconds: float = 600.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True
    transport: httpx.AsyncBaseTransport | None = None


class HttpError(TransportError):
    """Erro de requisição HTTP sem dados sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class HttpClient:
    """Cliente HTTP simples para chamadas externas."""

    def __init__(self, config: HttpClientConfig | None = None) -> None:
        self._config = config or HttpClientConfig()

    @property
    def config(self) -> HttpClientConfig:
        return self._config

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        headers: dict[str, str] | None = None,
        files: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Executa uma única troca request/response.

        Raises:
            HttpError: Falha de rede (conexão, timeout, protocolo).
        """
        merged_headers = {**self._config.default_headers, **(headers or {})}
        try:
            async with httpx.AsyncClient(
                verify=self._config.verify_ssl,
                transport=self._config.transport,
            ) as client:
                return await client.request(
                    method,
                    url,
                    json=json,
                    headers=merged_headers,
                    files=files,
                    data=data,
                    timeout=timeout or self._config.timeout_seconds,
                )
        except httpx.TimeoutException as exc:
            logger.warning("http_timeout", extra={"method": method, "endpoint": url})
            raise HttpError(f"Timeout em {method} {url}") from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "http_connection_error",
                extra={"method": method, "endpoint": url, "error_type": type(exc).__name__},
            )
            raise HttpError(f"Falha de conexão em {method} {url}: {exc}") from exc
