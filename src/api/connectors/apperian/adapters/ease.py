"""Adapter da geração EASE: endpoint JSON-RPC único.

Toda chamada é um POST com {jsonrpc, apiVersion, id, method, params}.
O upload vai para a URL devolvida pela transação create/update e o
binário só é associado ao app na chamada de publish.
"""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.apperian.adapters.base import (
    ApperianAdapterBase,
    require_field,
    validate_entries,
)
from app.domain import AppMetadata, Platform, RemoteApplication, UploadResult, UploadTicket
from utils.errors import RemoteProtocolError

if TYPE_CHECKING:
    from pathlib import Path

    from app.protocols.http_client import ApperianHttpClientProtocol
    from app.sessions import ApperianSession
    from config.settings import ApperianSettings

logger = logging.getLogger(__name__)

METHOD_AUTHENTICATE = "com.apperian.eas.user.authenticateuser"
METHOD_GETLIST = "com.apperian.eas.apps.getlist"
METHOD_CREATE = "com.apperian.eas.apps.create"
METHOD_UPDATE = "com.apperian.eas.apps.update"
METHOD_PUBLISH = "com.apperian.eas.apps.publish"

JSONRPC_VERSION = "2.0"
API_VERSION = "1.0"
UPLOAD_FIELD = "LUuploadFile"

# Trecho procurado no campo `type` da lista de apps
EASE_TYPE_CODES: dict[Platform, str] = {
    Platform.IOS: "IPA",
    Platform.ANDROID: "APK",
    Platform.MICROSOFT: "APPX",
}

# Nome do campo EASEmetadata → campo de AppMetadata
_EASE_METADATA_FIELDS = {
    "author": "author",
    "longdescription": "long_description",
    "name": "name",
    "shortdescription": "short_description",
    "version": "version",
    "versionNotes": "version_notes",
}


class EaseAdapter(ApperianAdapterBase):
    """Protocolo EASE (JSON-RPC) + REST v1 para assinatura e habilitação."""

    variant = "ease"
    requires_publish = True

    def __init__(
        self,
        http_client: ApperianHttpClientProtocol,
        settings: ApperianSettings,
    ) -> None:
        super().__init__(http_client, settings)
        self._request_ids = itertools.count()

    async def _call(
        self,
        method: str,
        params: dict[str, Any],
        session: ApperianSession | None = None,
    ) -> dict[str, Any]:
        """Executa um método JSON-RPC e devolve o corpo completo."""
        logger.info("ease_execute_method", extra={"rpc_method": method})
        message = {
            "jsonrpc": JSONRPC_VERSION,
            "apiVersion": API_VERSION,
            "id": next(self._request_ids),
            "method": method,
            "params": params,
        }
        headers = session.auth_headers() if session is not None else None
        return await self._http.execute(self._settings.ease_url, "POST", headers=headers, body=message)

    async def authenticate(
        self,
        username: str,
        password: str,
        device_id: str,
    ) -> str | None:
        # EASE não recebe device id
        data = await self._call(METHOD_AUTHENTICATE, {"email": username, "password": password})
        result = data.get("result")
        if not isinstance(result, dict):
            return None
        return result.get("token")

    async def list_applications(self, session: ApperianSession) -> list[RemoteApplication]:
        data = await self._call(METHOD_GETLIST, {"token": session.token}, session)
        applications = require_field(data, "result", "applications")
        if not isinstance(applications, list):
            raise RemoteProtocolError("Lista de aplicações inválida")
        return validate_entries(
            RemoteApplication,
            (
                {
                    "application_id": str(item["ID"]),
                    "bundle_id": str(item.get("bundleId") or ""),
                    "type_code": str(item.get("type") or ""),
                }
                for item in applications
                if isinstance(item, dict) and item.get("ID") is not None
            ),
            event="application_entry_invalid",
        )

    def matches_platform(self, application: RemoteApplication, platform: Platform) -> bool:
        return EASE_TYPE_CODES[platform] in application.type_code

    async def open_upload(
        self,
        session: ApperianSession,
        target: RemoteApplication | None,
    ) -> UploadTicket:
        """Abre a transação create (novo app) ou update (app existente)."""
        params: dict[str, Any] = {"token": session.token}
        if target is None:
            method = METHOD_CREATE
        else:
            method = METHOD_UPDATE
            params["appID"] = target.application_id

        data = await self._call(method, params, session)
        result = require_field(data, "result")
        return UploadTicket(
            upload_url=str(require_field(result, "fileUploadURL")),
            transaction_id=_optional_str(result.get("transactionID")),
            application_id=target.application_id if target else None,
            server_metadata=_parse_ease_metadata(result.get("EASEmetadata")),
        )

    async def upload_binary(
        self,
        session: ApperianSession,
        ticket: UploadTicket,
        file_path: Path,
        metadata: AppMetadata,
    ) -> UploadResult:
        # Metadados vão na chamada de publish, não no upload
        data = await self._http.upload_file(
            ticket.upload_url,
            file_path,
            UPLOAD_FIELD,
            headers=session.auth_headers(),
        )
        return UploadResult(file_id=str(require_field(data, "fileID")))

    async def publish(
        self,
        session: ApperianSession,
        ticket: UploadTicket,
        upload: UploadResult,
        metadata: AppMetadata,
    ) -> str:
        """Associa o binário enviado à transação e devolve o appID."""
        params = {
            "token": session.token,
            "transactionID": ticket.transaction_id,
            "EASEmetadata": _to_ease_metadata(metadata),
            "files": {"application": upload.file_id},
        }
        data = await self._call(METHOD_PUBLISH, params, session)
        return str(require_field(data, "result", "appID"))


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _parse_ease_metadata(raw: Any) -> AppMetadata:
    if not isinstance(raw, dict):
        return AppMetadata()
    return AppMetadata(**{
        field_name: str(raw.get(ease_name) or "")
        for ease_name, field_name in _EASE_METADATA_FIELDS.items()
    })


def _to_ease_metadata(metadata: AppMetadata) -> dict[str, str]:
    return {
        ease_name: getattr(metadata, field_name)
        for ease_name, field_name in _EASE_METADATA_FIELDS.items()
    }
