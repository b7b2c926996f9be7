"""Protocolos do adapter de variante da API Apperian.

O orquestrador depende apenas destes contratos; EASE (JSON-RPC) e
REST v2 são implementações plugáveis em api/connectors/apperian.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from pathlib import Path

    from app.domain import (
        AppMetadata,
        Platform,
        RemoteApplication,
        SigningCredential,
        SigningStatusReport,
        UploadResult,
        UploadTicket,
    )
    from app.sessions import ApperianSession


class AuthenticatorProtocol(Protocol):
    """Contrato mínimo para o login."""

    async def authenticate(
        self,
        username: str,
        password: str,
        device_id: str,
    ) -> str | None: ...


class PublisherAdapterProtocol(AuthenticatorProtocol, Protocol):
    """Operações remotas do fluxo de publicação."""

    @property
    def variant(self) -> str: ...

    @property
    def requires_publish(self) -> bool: ...

    async def list_applications(self, session: ApperianSession) -> list[RemoteApplication]: ...

    def matches_platform(self, application: RemoteApplication, platform: Platform) -> bool: ...

    async def open_upload(
        self,
        session: ApperianSession,
        target: RemoteApplication | None,
    ) -> UploadTicket: ...

    async def upload_binary(
        self,
        session: ApperianSession,
        ticket: UploadTicket,
        file_path: Path,
        metadata: AppMetadata,
    ) -> UploadResult: ...

    async def publish(
        self,
        session: ApperianSession,
        ticket: UploadTicket,
        upload: UploadResult,
        metadata: AppMetadata,
    ) -> str: ...

    async def list_signing_credentials(
        self,
        session: ApperianSession,
    ) -> list[SigningCredential]: ...

    async def enable_signing(
        self,
        session: ApperianSession,
        application_id: str,
        psk: str,
    ) -> SigningStatusReport: ...

    async def get_signing_status(
        self,
        session: ApperianSession,
        application_id: str,
    ) -> SigningStatusReport: ...

    async def enable_application(
        self,
        session: ApperianSession,
        application_id: str,
    ) -> dict[str, Any]: ...
