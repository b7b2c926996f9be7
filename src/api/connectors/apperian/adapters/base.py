"""Base dos adapters: endpoints REST v1 comuns às duas gerações.

Assinatura (credenciais, habilitação, status) e habilitação do app
usam a mesma API v1 com header X-TOKEN nas duas variantes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from app.domain import SigningCredential, SigningStatusReport
from utils.errors import RemoteProtocolError, UnsupportedOperationError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from app.domain import AppMetadata, UploadResult, UploadTicket
    from app.protocols.http_client import ApperianHttpClientProtocol
    from app.sessions import ApperianSession
    from config.settings import ApperianSettings

logger = logging.getLogger(__name__)

_ENABLED_BODY = {"enabled": True}

_Model = TypeVar("_Model", bound=BaseModel)


class ApperianAdapterBase:
    """Operações compartilhadas e helpers de endpoint."""

    variant = "base"
    requires_publish = False

    def __init__(
        self,
        http_client: ApperianHttpClientProtocol,
        settings: ApperianSettings,
    ) -> None:
        self._http = http_client
        self._settings = settings

    async def publish(
        self,
        session: ApperianSession,
        ticket: UploadTicket,
        upload: UploadResult,
        metadata: AppMetadata,
    ) -> str:
        raise UnsupportedOperationError(f"Protocolo {self.variant} não possui etapa de publish")

    async def list_signing_credentials(
        self,
        session: ApperianSession,
    ) -> list[SigningCredential]:
        """Lista as credenciais de assinatura habilitadas da conta."""
        data = await self._http.execute(
            self._settings.get_v1_endpoint("credentials/"),
            "GET",
            headers=session.auth_headers(),
            body=_ENABLED_BODY,
        )
        credentials = data.get("credentials")
        if not isinstance(credentials, list):
            raise RemoteProtocolError("Resposta de credenciais sem 'credentials'")
        return validate_entries(
            SigningCredential,
            (
                {
                    "psk": str(item["psk"]),
                    "description": str(item.get("description") or ""),
                    "platform": item.get("platform"),
                }
                for item in credentials
                if isinstance(item, dict) and item.get("psk")
            ),
            event="signing_credential_invalid",
        )

    async def enable_signing(
        self,
        session: ApperianSession,
        application_id: str,
        psk: str,
    ) -> SigningStatusReport:
        """Solicita a assinatura do app com a credencial `psk`."""
        data = await self._http.execute(
            self._settings.get_v1_endpoint(f"applications/{application_id}/credentials/{psk}"),
            "PUT",
            headers=session.auth_headers(),
            body=_ENABLED_BODY,
        )
        return SigningStatusReport.from_raw(
            data.get("signing_status"),
            data.get("signing_status_details"),
        )

    async def get_signing_status(
        self,
        session: ApperianSession,
        application_id: str,
    ) -> SigningStatusReport:
        """Consulta o status de assinatura da versão atual do app."""
        data = await self._http.execute(
            self._settings.get_v1_endpoint(f"applications/{application_id}"),
            "GET",
            headers=session.auth_headers(),
        )
        version = _dig(data, "application", "version")
        if not isinstance(version, dict):
            raise RemoteProtocolError("Resposta de status sem 'application.version'")
        return SigningStatusReport.from_raw(
            version.get("signing_status"),
            version.get("signing_status_details"),
        )

    async def enable_application(
        self,
        session: ApperianSession,
        application_id: str,
    ) -> dict[str, Any]:
        """Marca o app como habilitado (PUT idempotente)."""
        return await self._http.execute(
            self._settings.get_v1_endpoint(f"applications/{application_id}"),
            "PUT",
            headers=session.auth_headers(),
            body=_ENABLED_BODY,
        )


def _dig(data: dict[str, Any], *keys: str) -> Any:
    current: Any = data
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def validate_entries(
    model: type[_Model],
    entries: Iterable[dict[str, Any]],
    *,
    event: str,
) -> list[_Model]:
    """Valida cada item de uma lista do servidor; itens inválidos são ignorados.

    Registro malformado (ex: `platform` não numérico) é logado e pulado.
    """
    parsed: list[_Model] = []
    for index, entry in enumerate(entries):
        try:
            parsed.append(model.model_validate(entry))
        except ValidationError as exc:
            logger.warning(
                event,
                extra={
                    "component": "apperian_adapter",
                    "action": "validate_entry",
                    "result": "invalid",
                    "index": index,
                    "error_count": exc.error_count(),
                },
            )
    return parsed


def require_field(data: dict[str, Any], *keys: str) -> Any:
    """Retorna o campo aninhado ou levanta RemoteProtocolError se ausente."""
    value = _dig(data, *keys)
    if value is None or value == "":
        raise RemoteProtocolError(f"Resposta do Apperian sem '{'.'.join(keys)}'")
    return value
