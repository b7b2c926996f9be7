"""Cliente HTTP especializado para as APIs do Apperian.

Estende HttpClient genérico com o contrato do Transport:
- Corpo serializado como JSON, exceto no upload multipart do binário
- Erro de aplicação no corpo (error.code, error.message) vira
  RemoteProtocolError, tratado como falha fatal igual a um erro de rede
- Status HTTP >= 400 sem corpo de erro vira HttpError
- Logging estruturado sem token ou senha
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from api.connectors.apperian.api_errors import parse_apperian_error
from api.connectors.apperian.api_logging import (
    log_api_error,
    log_http_status_error,
    log_success,
    log_upload_finished,
)
from api.connectors.apperian.http_base import HttpClient, HttpClientConfig, HttpError
from utils.errors import RemoteProtocolError

if TYPE_CHECKING:
    import httpx

    from config.settings import ApperianSettings

logger: logging.Logger = logging.getLogger(__name__)

_BINARY_CONTENT_TYPE = "application/octet-stream"


class ApperianHttpClient(HttpClient):
    """Transport do fluxo de publicação.

    Cada chamada é uma única troca HTTP; nada é repetido aqui.
    """

    async def execute(
        self,
        endpoint: str,
        verb: str,
        headers: dict[str, str] | None = None,
        body: Any = None,
    ) -> dict[str, Any]:
        """Executa uma chamada JSON e devolve o corpo interpretado.

        Args:
            endpoint: URL completa
            verb: Método HTTP (GET, POST, PUT)
            headers: Headers extras (ex: X-TOKEN)
            body: Corpo serializado como JSON (None = sem corpo)

        Returns:
            Corpo JSON da resposta ({} se vazio)

        Raises:
            HttpError: Falha de rede ou status HTTP de erro
            RemoteProtocolError: Corpo com erro de aplicação ou JSON inválido
        """
        request_headers = {"Content-Type": "application/json", **(headers or {})}
        response = await self.request(
            verb.upper(),
            endpoint,
            json=body,
            headers=request_headers,
        )
        return self._process_response(response, verb.upper(), endpoint)

    async def upload_file(
        self,
        endpoint: str,
        file_path: Path,
        field_name: str,
        *,
        headers: dict[str, str] | None = None,
        metadata: dict[str, Any] | None = None,
        metadata_field: str = "data",
    ) -> dict[str, Any]:
        """Envia o binário em streaming como um campo multipart.

        Quando `metadata` é informado, segue junto como campo JSON.
        Qualquer status diferente de 200 é fatal.

        Raises:
            HttpError: Falha de rede ou status diferente de 200
            RemoteProtocolError: Corpo com erro de aplicação
        """
        data = {metadata_field: json.dumps(metadata)} if metadata is not None else None
        size_bytes = file_path.stat().st_size
        logger.info(
            "apperian_upload_started",
            extra={"endpoint": endpoint, "file_name": file_path.name, "size_bytes": size_bytes},
        )
        start = time.perf_counter()
        with file_path.open("rb") as binary:
            response = await self.request(
                "POST",
                endpoint,
                headers=headers,
                files={field_name: (file_path.name, binary, _BINARY_CONTENT_TYPE)},
                data=data,
                timeout=self._config.upload_timeout_seconds,
            )

        if response.status_code != 200:
            body = _safe_json(response)
            if isinstance(body, dict):
                self._raise_for_api_error(body, "POST", endpoint, response.status_code)
            log_http_status_error("POST", endpoint, response.status_code)
            raise HttpError(
                f"Upload falhou com status {response.status_code}",
                status_code=response.status_code,
            )

        result = self._process_response(response, "POST", endpoint)
        log_upload_finished(
            endpoint,
            file_path.name,
            size_bytes,
            (time.perf_counter() - start) * 1000,
        )
        return result

    def _process_response(
        self,
        response: httpx.Response,
        method: str,
        endpoint: str,
    ) -> dict[str, Any]:
        """Interpreta a resposta e levanta para qualquer tipo de erro."""
        if not response.content:
            response_data: Any = {}
        else:
            try:
                response_data = response.json()
            except ValueError as e:
                if response.status_code >= 400:
                    log_http_status_error(method, endpoint, response.status_code)
                    raise HttpError(
                        f"{method} {endpoint} falhou com status {response.status_code}",
                        status_code=response.status_code,
                    ) from e
                logger.error("apperian_invalid_json", extra={"endpoint": endpoint})
                raise RemoteProtocolError(f"Resposta JSON inválida de {endpoint}") from e

        if not isinstance(response_data, dict):
            raise RemoteProtocolError(f"Resposta inesperada de {endpoint}: não é um objeto")

        self._raise_for_api_error(response_data, method, endpoint, response.status_code)

        if response.status_code >= 400:
            log_http_status_error(method, endpoint, response.status_code)
            raise HttpError(
                f"{method} {endpoint} falhou com status {response.status_code}",
                status_code=response.status_code,
            )

        log_success(method, endpoint, response.status_code)
        return response_data

    @staticmethod
    def _raise_for_api_error(
        response_data: dict[str, Any],
        method: str,
        endpoint: str,
        status_code: int,
    ) -> None:
        api_error = parse_apperian_error(response_data)
        if api_error is None:
            return
        log_api_error(api_error, method, endpoint, status_code)
        raise RemoteProtocolError(
            api_error.describe(),
            error_code=api_error.error_code,
            error_message=api_error.error_message,
        )


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def create_apperian_http_client(
    settings: ApperianSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ApperianHttpClient:
    """Factory para criar o cliente Apperian com config padrão.

    Args:
        settings: ApperianSettings opcional. Se None, carrega do ambiente.
        transport: Transport httpx alternativo (testes)

    Returns:
        Cliente HTTP configurado para o Apperian.
    """
    # Import local para evitar dependência circular
    from config.settings import get_apperian_settings

    apperian = settings or get_apperian_settings()
    config = HttpClientConfig(
        timeout_seconds=apperian.request_timeout_seconds,
        upload_timeout_seconds=apperian.upload_timeout_seconds,
        verify_ssl=apperian.verify_ssl,
        transport=transport,
    )
    return ApperianHttpClient(config=config)
