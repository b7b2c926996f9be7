"""Adapter da geração REST v2.

Recursos REST com header X-TOKEN. Criação e atualização são um único
POST multipart (binário + metadados), sem etapa de publish.
"""

from __future__ import annotations

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

    from app.sessions import ApperianSession

logger = logging.getLogger(__name__)

UPLOAD_FIELD = "app_file"
METADATA_FIELD = "data"

# Códigos de operating_system aceitos por plataforma
OPERATING_SYSTEM_CODES: dict[Platform, frozenset[int]] = {
    Platform.IOS: frozenset({104}),
    Platform.ANDROID: frozenset({105, 106}),
    Platform.MICROSOFT: frozenset({108}),
}

# Campo da API v2 → campo de AppMetadata
_V2_METADATA_FIELDS = {
    "app_name": "name",
    "version_num": "version",
    "author": "author",
    "short_description": "short_description",
    "long_description": "long_description",
    "version_note": "version_notes",
}


class RestV2Adapter(ApperianAdapterBase):
    """Protocolo REST v2 + REST v1 para assinatura e habilitação."""

    variant = "rest"
    requires_publish = False

    async def authenticate(
        self,
        username: str,
        password: str,
        device_id: str,
    ) -> str | None:
        data = await self._http.execute(
            self._settings.get_v2_endpoint("catalog/authenticate/"),
            "POST",
            body={"user_id": username, "password": password, "device_id": device_id},
        )
        return data.get("token")

    async def list_applications(self, session: ApperianSession) -> list[RemoteApplication]:
        data = await self._http.execute(
            self._settings.get_v2_endpoint("applications/"),
            "GET",
            headers=session.auth_headers(),
        )
        applications = data.get("applications")
        if not isinstance(applications, list):
            raise RemoteProtocolError("Resposta sem 'applications'")
        return validate_entries(
            RemoteApplication,
            (
                {
                    "application_id": str(item["id"]),
                    "bundle_id": str(item.get("bundle_id") or ""),
                    "type_code": str(item.get("operating_system") or ""),
                    "metadata": _parse_v2_metadata(item.get("version")),
                }
                for item in applications
                if isinstance(item, dict) and item.get("id") is not None
            ),
            event="application_entry_invalid",
        )

    def matches_platform(self, application: RemoteApplication, platform: Platform) -> bool:
        try:
            code = int(application.type_code)
        except ValueError:
            return False
        return code in OPERATING_SYSTEM_CODES[platform]

    async def open_upload(
        self,
        session: ApperianSession,
        target: RemoteApplication | None,
    ) -> UploadTicket:
        # Sem chamada de rede: o destino sai do app resolvido
        if target is None:
            return UploadTicket(upload_url=self._settings.get_v2_endpoint("applications/"))
        return UploadTicket(
            upload_url=self._settings.get_v2_endpoint(f"applications/{target.application_id}/"),
            application_id=target.application_id,
            server_metadata=target.metadata,
        )

    async def upload_binary(
        self,
        session: ApperianSession,
        ticket: UploadTicket,
        file_path: Path,
        metadata: AppMetadata,
    ) -> UploadResult:
        data = await self._http.upload_file(
            ticket.upload_url,
            file_path,
            UPLOAD_FIELD,
            headers=session.auth_headers(),
            metadata=_to_v2_metadata(metadata),
            metadata_field=METADATA_FIELD,
        )
        application_id = require_field(data, "application", "id")
        return UploadResult(application_id=str(application_id))


def _parse_v2_metadata(raw: Any) -> AppMetadata:
    if not isinstance(raw, dict):
        return AppMetadata()
    return AppMetadata(**{
        field_name: str(raw.get(v2_name) or "")
        for v2_name, field_name in _V2_METADATA_FIELDS.items()
    })


def _to_v2_metadata(metadata: AppMetadata) -> dict[str, str]:
    return {
        v2_name: getattr(metadata, field_name)
        for v2_name, field_name in _V2_METADATA_FIELDS.items()
    }
