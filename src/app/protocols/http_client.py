"""Protocolos HTTP usados pelo app.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from pathlib import Path


class ApperianHttpClientProtocol(Protocol):
    """Contrato mínimo do Transport do Apperian."""

    async def execute(
        self,
        endpoint: str,
        verb: str,
        headers: dict[str, str] | None = None,
        body: Any = None,
    ) -> dict[str, Any]: ...

    async def upload_file(
        self,
        endpoint: str,
        file_path: Path,
        field_name: str,
        *,
        headers: dict[str, str] | None = None,
        metadata: dict[str, Any] | None = None,
        metadata_field: str = "data",
    ) -> dict[str, Any]: ...
