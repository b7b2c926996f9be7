"""Testes da validação de entrada do publicador."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from api.validators.apperian import PublishOptions, build_workflow_config, validate_platform
from app.domain import Platform
from utils.errors import ValidationError

CREATE_METADATA = {
    "app_name": "App",
    "app_version": "1.0",
    "app_author": "ACME",
    "long_description": "Longa",
    "short_description": "Curta",
    "version_notes": "Primeira",
}


@pytest.fixture
def ipa(tmp_path: Path) -> Path:
    path = tmp_path / "app.ipa"
    path.write_bytes(b"ipa")
    return path


@pytest.fixture
def options(ipa: Path) -> PublishOptions:
    return PublishOptions(
        username="ana@example.com",
        password="segredo",
        app_id="com.example.app",
        file_path=str(ipa),
        app_type="ios",
    )


class TestRequiredFields:
    """Campos obrigatórios, na ordem de checagem."""

    @pytest.mark.parametrize(
        ("field_name", "message"),
        [
            ("username", "--username"),
            ("password", "--password"),
            ("app_id", "--appid"),
            ("app_type", "--apptype"),
            ("file_path", "Caminho do arquivo"),
        ],
    )
    def test_missing_field_is_reported(self, options, field_name: str, message: str) -> None:
        """Cada campo ausente gera a própria mensagem."""
        with pytest.raises(ValidationError, match=message):
            build_workflow_config(replace(options, **{field_name: ""}))

    def test_first_failure_wins(self) -> None:
        """Com tudo vazio só o primeiro erro aparece."""
        with pytest.raises(ValidationError) as exc_info:
            build_workflow_config(PublishOptions())
        assert "--username" in str(exc_info.value)
        assert exc_info.value.code == "VALIDATION_ERROR"


class TestPlatform:
    """Tipo do app."""

    def test_type_is_case_insensitive(self) -> None:
        """IOS, Android etc. são normalizados."""
        assert validate_platform("IOS") is Platform.IOS
        assert validate_platform("Android") is Platform.ANDROID

    def test_unsupported_type(self) -> None:
        """Tipo fora do enum é rejeitado."""
        with pytest.raises(ValidationError, match="não suportado"):
            validate_platform("blackberry")


class TestBinaryPath:
    """Arquivo e extensão."""

    def test_extension_mismatch_fails_even_if_file_missing(self, options) -> None:
        """`.apk` para iOS falha pela extensão, exista ou não o arquivo."""
        with pytest.raises(ValidationError, match="Extensão do app incorreta para iOS"):
            build_workflow_config(replace(options, file_path="/nao/existe/app.apk"))

    def test_missing_file(self, options) -> None:
        """Extensão certa mas arquivo inexistente."""
        with pytest.raises(ValidationError, match="não encontrado"):
            build_workflow_config(replace(options, file_path="/nao/existe/app.ipa"))

    def test_relative_path_resolved_against_cwd(self, options, ipa: Path) -> None:
        """Caminho relativo é resolvido contra o diretório informado."""
        config = build_workflow_config(replace(options, file_path=ipa.name), cwd=ipa.parent)
        assert config.file_path == ipa
        assert config.file_path.is_absolute()


class TestCreateMetadata:
    """Metadados obrigatórios ao criar."""

    def test_create_requires_every_metadata_field(self, options) -> None:
        """Sem metadados a criação falha antes de qualquer rede."""
        with pytest.raises(ValidationError, match="Descrição curta"):
            build_workflow_config(replace(options, create=True))

    def test_create_reports_first_missing_field(self, options) -> None:
        """Só falta o autor: a mensagem cita o autor."""
        metadata = {**CREATE_METADATA, "app_author": ""}
        with pytest.raises(ValidationError, match="Autor do app"):
            build_workflow_config(replace(options, create=True, **metadata))

    def test_complete_create_config(self, options) -> None:
        """Todos os campos presentes produzem o WorkflowConfig."""
        config = build_workflow_config(
            replace(options, create=True, sign="Cert", device_id="dev-1", **CREATE_METADATA)
        )
        assert config.create is True
        assert config.platform is Platform.IOS
        assert config.metadata.name == "App"
        assert config.metadata.missing_fields() == []
        assert config.wants_signing
        assert config.device_id == "dev-1"

    def test_update_allows_partial_metadata(self, options) -> None:
        """Sem create os metadados são opcionais; vazio vira None."""
        config = build_workflow_config(replace(options, app_version="2.0", app_name=""))
        assert config.metadata.version == "2.0"
        assert config.metadata.name is None
        assert not config.wants_signing
        assert "password" not in config.to_log_dict()
