"""Opções brutas de linha de comando, antes da validação."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PublishOptions:
    """Valores como chegaram do usuário; qualquer campo pode estar vazio."""

    username: str | None = None
    password: str | None = None
    app_id: str | None = None
    file_path: str | None = None
    app_type: str | None = None
    app_name: str | None = None
    app_version: str | None = None
    app_author: str | None = None
    long_description: str | None = None
    short_description: str | None = None
    version_notes: str | None = None
    create: bool = False
    sign: str | None = None
    device_id: str | None = None
