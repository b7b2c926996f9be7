"""Validação da entrada do fluxo de publicação.

Cada checagem para na primeira falha; a mensagem descreve só ela.
Nenhuma chamada de rede acontece aqui.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from app.domain import MetadataOverrides, Platform, WorkflowConfig
from utils.errors import ValidationError

if TYPE_CHECKING:
    from api.validators.apperian.options import PublishOptions

logger = logging.getLogger(__name__)

_PLATFORM_LABELS: dict[Platform, str] = {
    Platform.IOS: "iOS",
    Platform.ANDROID: "Android",
    Platform.MICROSOFT: "Microsoft",
}

_CREATE_FIELD_LABELS: dict[str, str] = {
    "short_description": "Descrição curta",
    "long_description": "Descrição longa",
    "name": "Nome do app",
    "author": "Autor do app",
    "version": "Versão do app",
    "version_notes": "Notas da versão",
}


def validate_credentials(options: PublishOptions) -> None:
    """Valida usuário, senha e bundle id.

    Raises:
        ValidationError: Primeiro campo ausente
    """
    if not options.username:
        raise ValidationError("Flag --username ausente")
    if not options.password:
        raise ValidationError("Flag --password ausente")
    if not options.app_id:
        raise ValidationError("Flag --appid ausente")


def validate_platform(app_type: str | None) -> Platform:
    """Normaliza o tipo do app para uma plataforma suportada.

    Raises:
        ValidationError: Tipo ausente ou não suportado
    """
    if not app_type:
        raise ValidationError("Flag --apptype ausente")
    try:
        return Platform(app_type.strip().lower())
    except ValueError:
        raise ValidationError(f"Tipo de app não suportado: {app_type}") from None


def validate_binary_path(
    file_path: str | None,
    platform: Platform,
    cwd: Path | None = None,
) -> Path:
    """Resolve o caminho do binário e confere extensão e existência.

    A extensão é conferida antes da existência: um `.apk` para iOS falha
    mesmo que o arquivo não exista.

    Args:
        file_path: Caminho informado (absoluto ou relativo ao cwd)
        platform: Plataforma já validada
        cwd: Diretório base para caminhos relativos (default: Path.cwd())

    Returns:
        Caminho absoluto do binário

    Raises:
        ValidationError: Caminho ausente, extensão errada ou arquivo inexistente
    """
    if not file_path:
        raise ValidationError("Caminho do arquivo ausente")

    path = Path(file_path)
    if not path.is_absolute():
        path = (cwd or Path.cwd()) / path

    if path.suffix.lower() != platform.file_extension:
        raise ValidationError(f"Extensão do app incorreta para {_PLATFORM_LABELS[platform]}")
    if not path.is_file():
        raise ValidationError(f"Arquivo do app não encontrado: {path}")
    return path


def validate_create_metadata(metadata: MetadataOverrides) -> None:
    """Exige todos os metadados ao criar um app novo.

    Raises:
        ValidationError: Primeiro metadado vazio
    """
    missing = metadata.missing_fields()
    if missing:
        label = _CREATE_FIELD_LABELS[missing[0]]
        raise ValidationError(f"Campo obrigatório para criar um app: {label}")


def build_workflow_config(
    options: PublishOptions,
    cwd: Path | None = None,
) -> WorkflowConfig:
    """Valida as opções e produz a configuração imutável da execução.

    Ordem: credenciais, plataforma, arquivo e, ao criar, metadados.

    Args:
        options: Opções brutas do usuário
        cwd: Diretório base para caminhos relativos

    Returns:
        WorkflowConfig pronto para o orquestrador

    Raises:
        ValidationError: Primeira violação encontrada
    """
    validate_credentials(options)
    platform = validate_platform(options.app_type)
    file_path = validate_binary_path(options.file_path, platform, cwd)

    metadata = MetadataOverrides(
        name=options.app_name or None,
        version=options.app_version or None,
        author=options.app_author or None,
        short_description=options.short_description or None,
        long_description=options.long_description or None,
        version_notes=options.version_notes or None,
    )
    if options.create:
        validate_create_metadata(metadata)

    config = WorkflowConfig(
        username=options.username or "",
        password=options.password or "",
        platform=platform,
        file_path=file_path,
        bundle_id=options.app_id or "",
        create=options.create,
        metadata=metadata,
        signing_credential=options.sign or None,
        device_id=options.device_id or None,
    )
    logger.info("publish_input_validated", extra=config.to_log_dict())
    return config
