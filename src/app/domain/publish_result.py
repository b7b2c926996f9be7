"""Resultado tagueado de uma execução de publicação."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class PublishStatus(StrEnum):
    """Desfecho de uma execução."""

    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True, slots=True)
class PublishResult:
    """Resultado devolvido pelo caso de uso ao CLI.

    Attributes:
        status: SUCCESS, FAILED ou CANCELLED
        application_id: ID do app no Apperian (quando conhecido)
        error_code: Código estável do erro (ex: NOT_FOUND)
        error_message: Mensagem legível do primeiro erro fatal
        history: Transições de estado em formato de log
    """

    status: PublishStatus
    application_id: str | None = None
    error_code: str | None = None
    error_message: str | None = None
    history: list[dict[str, Any]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status is PublishStatus.SUCCESS
