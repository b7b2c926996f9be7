"""Testes para config.logging.

Cobre: configure_logging, get_logger, CorrelationIdFilter,
SensitiveFieldFilter, create_json_formatter.
"""

from __future__ import annotations

import json
import logging

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    SensitiveFieldFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


def _record(msg: str = "msg", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_configure_logging_default_level(self) -> None:
        """Configura logging com nível padrão INFO."""
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_configure_logging_warning_level_case_insensitive(self) -> None:
        """Nível é case insensitive (nível do CLI sem --dolog)."""
        configure_logging(level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_configure_logging_invalid_level_raises(self) -> None:
        """Nível inválido levanta ValueError."""
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="INVALID")

    def test_configure_logging_replaces_handlers(self) -> None:
        """configure_logging substitui handlers existentes."""
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1

    def test_configure_logging_installs_both_filters(self) -> None:
        """Handler recebe filtro de correlation_id e de mascaramento."""
        configure_logging(correlation_id_getter=lambda: "run-1")
        filters = logging.getLogger().handlers[0].filters
        assert any(isinstance(f, CorrelationIdFilter) for f in filters)
        assert any(isinstance(f, SensitiveFieldFilter) for f in filters)

    def test_httpx_logger_quiet_unless_debug(self) -> None:
        """Logs por request do httpx só aparecem em DEBUG."""
        configure_logging(level="INFO")
        assert logging.getLogger("httpx").level == logging.WARNING
        configure_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.DEBUG

    def test_valid_log_levels_constant(self) -> None:
        """VALID_LOG_LEVELS contém os níveis esperados."""
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS

    def test_default_service_name_constant(self) -> None:
        """DEFAULT_SERVICE_NAME está definido."""
        assert DEFAULT_SERVICE_NAME == "apperian_publisher"


class TestGetLogger:
    """Testes para get_logger."""

    def test_get_logger_same_name_returns_same_instance(self) -> None:
        """Mesmo nome retorna mesma instância."""
        assert get_logger("same.module") is get_logger("same.module")


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_filter_adds_correlation_id_from_getter(self) -> None:
        """Filter adiciona correlation_id do getter."""
        record = _record()
        assert CorrelationIdFilter("my_service", lambda: "run-123").filter(record) is True
        assert record.correlation_id == "run-123"
        assert record.service == "my_service"

    def test_filter_preserves_explicit_correlation_id(self) -> None:
        """Filter preserva correlation_id passado via extra."""
        record = _record(correlation_id="explicit-id")
        CorrelationIdFilter("svc", lambda: "from-getter").filter(record)
        assert record.correlation_id == "explicit-id"

    def test_filter_uses_empty_string_when_no_getter(self) -> None:
        """Filter usa string vazia quando não há getter."""
        record = _record()
        CorrelationIdFilter("service_name", None).filter(record)
        assert record.correlation_id == ""


class TestSensitiveFieldFilter:
    """Testes para SensitiveFieldFilter."""

    def test_masks_password_and_token_extras(self) -> None:
        """Senha e token passados via extra são mascarados."""
        record = _record(password="segredo", token="abc", username="ana")
        assert SensitiveFieldFilter().filter(record) is True
        assert record.password == "***"
        assert record.token == "***"
        assert record.username == "ana"

    def test_masks_token_header(self) -> None:
        """Header X-TOKEN dentro de `headers` é mascarado."""
        record = _record(headers={"X-TOKEN": "abc", "Content-Type": "application/json"})
        SensitiveFieldFilter().filter(record)
        assert record.headers == {"X-TOKEN": "***", "Content-Type": "application/json"}


class TestCreateJsonFormatter:
    """Testes para create_json_formatter e constantes."""

    def test_required_log_fields_content(self) -> None:
        """REQUIRED_LOG_FIELDS contém campos obrigatórios."""
        expected = {"asctime", "levelname", "name", "message", "correlation_id", "service"}
        assert expected == set(REQUIRED_LOG_FIELDS)

    def test_field_rename_map_content(self) -> None:
        """FIELD_RENAME_MAP mapeia campos corretamente."""
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_json_formatter_formats_record(self) -> None:
        """Saída é JSON com campos renomeados e extras."""
        formatter = create_json_formatter()
        record = _record(
            "upload_completed",
            correlation_id="abc-123",
            service="apperian_publisher",
            file_id="f-1",
        )
        payload = json.loads(formatter.format(record))
        assert payload["message"] == "upload_completed"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "test"
        assert payload["correlation_id"] == "abc-123"
        assert payload["file_id"] == "f-1"

    def test_json_formatter_includes_protocol(self) -> None:
        """Protocolo informado aparece em todo log; sem ele vira `unknown`."""
        record = _record(correlation_id="abc-123", service="apperian_publisher")
        rest = json.loads(create_json_formatter("rest").format(record))
        assert rest["protocol"] == "rest"
        unset = json.loads(create_json_formatter().format(_record()))
        assert unset["protocol"] == "unknown"

    def test_configure_logging_passes_protocol_to_formatter(self) -> None:
        """configure_logging grava o protocolo no handler."""
        configure_logging(protocol="ease", correlation_id_getter=lambda: "run-1")
        handler = logging.getLogger().handlers[0]
        record = _record()
        for log_filter in handler.filters:
            log_filter.filter(record)
        payload = json.loads(handler.format(record))
        assert payload["protocol"] == "ease"
        assert payload["correlation_id"] == "run-1"
