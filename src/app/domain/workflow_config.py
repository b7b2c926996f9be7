"""Configuração imutável de uma execução de publicação.

Construída uma única vez pelo validador de entrada e passada por
referência a cada etapa do fluxo. O orquestrador nunca revalida.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class Platform(StrEnum):
    """Plataformas suportadas pelo Apperian."""

    IOS = "ios"
    ANDROID = "android"
    MICROSOFT = "microsoft"

    @property
    def file_extension(self) -> str:
        """Extensão obrigatória do binário para a plataforma."""
        return PLATFORM_EXTENSIONS[self]

    @property
    def signing_platform_code(self) -> int | None:
        """Código de plataforma das credenciais de assinatura (None = sem suporte)."""
        return SIGNING_PLATFORM_CODES.get(self)


PLATFORM_EXTENSIONS: dict[Platform, str] = {
    Platform.IOS: ".ipa",
    Platform.ANDROID: ".apk",
    Platform.MICROSOFT: ".appx",
}

# Microsoft não tem código: assinatura para a plataforma nunca encontra credencial
SIGNING_PLATFORM_CODES: dict[Platform, int] = {
    Platform.IOS: 1,
    Platform.ANDROID: 2,
}


@dataclass(frozen=True, slots=True)
class MetadataOverrides:
    """Metadados informados pelo usuário.

    Campos vazios ou None caem para o valor que o servidor devolveu.
    """

    name: str | None = None
    version: str | None = None
    author: str | None = None
    short_description: str | None = None
    long_description: str | None = None
    version_notes: str | None = None

    def missing_fields(self) -> list[str]:
        """Retorna os campos vazios, na ordem em que são validados."""
        ordered = (
            ("short_description", self.short_description),
            ("long_description", self.long_description),
            ("name", self.name),
            ("author", self.author),
            ("version", self.version),
            ("version_notes", self.version_notes),
        )
        return [field_name for field_name, value in ordered if not value]


@dataclass(frozen=True, slots=True)
class WorkflowConfig:
    """Entrada validada do fluxo de publicação.

    Attributes:
        username: Usuário Apperian
        password: Senha Apperian (nunca logada)
        platform: Plataforma alvo
        file_path: Caminho absoluto do binário
        bundle_id: Identificador do app (bundle id) no Apperian
        create: True para criar um novo app em vez de atualizar
        metadata: Sobrescritas de metadados
        signing_credential: Descrição da credencial (psk) para assinar, opcional
        device_id: Identificador de dispositivo, opcional
    """

    username: str
    password: str
    platform: Platform
    file_path: Path
    bundle_id: str
    create: bool = False
    metadata: MetadataOverrides = MetadataOverrides()
    signing_credential: str | None = None
    device_id: str | None = None

    @property
    def wants_signing(self) -> bool:
        """True quando uma credencial de assinatura foi informada."""
        return bool(self.signing_credential)

    def to_log_dict(self) -> dict[str, object]:
        """Representação segura para logs (sem senha)."""
        return {
            "username": self.username,
            "platform": self.platform.value,
            "file_path": str(self.file_path),
            "bundle_id": self.bundle_id,
            "create": self.create,
            "sign": self.signing_credential,
        }
