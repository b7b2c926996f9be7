"""Modelos de domínio para os recursos remotos do Apperian.

Os adapters de protocolo traduzem as respostas de cada geração da API
para estes contratos; o orquestrador só enxerga estes tipos.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from app.domain.workflow_config import MetadataOverrides


class SigningStatus(StrEnum):
    """Status da assinatura reportado pelo Apperian."""

    IN_PROGRESS = "in_progress"
    SIGNED = "signed"
    ERROR = "error"


class AppMetadata(BaseModel):
    """Metadados publicados junto com o binário."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = ""
    version: str = ""
    author: str = ""
    short_description: str = ""
    long_description: str = ""
    version_notes: str = ""

    def merged_with(self, overrides: MetadataOverrides) -> AppMetadata:
        """Aplica as sobrescritas do usuário campo a campo.

        Valor informado vence; ausente ou vazio cai para o valor do servidor.
        """
        return AppMetadata(
            name=overrides.name or self.name,
            version=overrides.version or self.version,
            author=overrides.author or self.author,
            short_description=overrides.short_description or self.short_description,
            long_description=overrides.long_description or self.long_description,
            version_notes=overrides.version_notes or self.version_notes,
        )


class RemoteApplication(BaseModel):
    """Registro de aplicação no Apperian, chaveado por (bundle id, plataforma)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    application_id: str = Field(..., description="ID atribuído pelo servidor.")
    bundle_id: str = Field(default="", description="Bundle id do app.")
    type_code: str = Field(default="", description="Código de tipo/SO do registro.")
    metadata: AppMetadata = Field(default_factory=AppMetadata)


class UploadTicket(BaseModel):
    """Destino do upload do binário para a execução atual.

    No protocolo EASE vem da transação create/update; no REST é montado
    localmente a partir do app resolvido.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    upload_url: str
    transaction_id: str | None = None
    application_id: str | None = None
    server_metadata: AppMetadata = Field(default_factory=AppMetadata)


class UploadResult(BaseModel):
    """Identificadores devolvidos pelo upload do binário."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    file_id: str | None = None
    application_id: str | None = None


class SigningCredential(BaseModel):
    """Credencial de assinatura (psk) habilitada na conta."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    psk: str
    description: str = ""
    platform: int | None = None


class SigningStatusReport(BaseModel):
    """Status da assinatura e texto de detalhe do servidor.

    status=None significa que a resposta não trouxe um status conhecido.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    status: SigningStatus | None = None
    detail: str = ""

    @classmethod
    def from_raw(cls, status: Any, detail: Any = "") -> SigningStatusReport:
        """Converte valores crus da API, tolerando status desconhecido."""
        try:
            parsed = SigningStatus(status) if status is not None else None
        except ValueError:
            parsed = None
        return cls(status=parsed, detail=str(detail or ""))
