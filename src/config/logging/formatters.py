"""Formatter JSON dos logs do publicador.

Todo log de uma execução carrega o run id (correlation_id), o serviço e
o protocolo Apperian em uso (`ease` ou `rest`), para que execuções das
duas gerações possam ser filtradas no mesmo agregador.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

UNKNOWN_PROTOCOL = "unknown"


def create_json_formatter(protocol: str | None = None) -> JsonFormatter:
    """Cria o formatter JSON; `protocol` entra como campo fixo em todo log.

    Exemplo de output:
        {
            "asctime": "2026-10-19 10:30:00,120",
            "level": "INFO",
            "logger": "api.connectors.apperian.http_client",
            "message": "apperian_upload_finished",
            "correlation_id": "5b0c...",
            "service": "apperian_publisher",
            "protocol": "rest",
            "size_bytes": 18231040
        }
    """
    return JsonFormatter(
        " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS),
        rename_fields=FIELD_RENAME_MAP,
        static_fields={"protocol": protocol or UNKNOWN_PROTOCOL},
    )
