"""Erros e helpers de parsing para respostas do Apperian."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ApperianApiError:
    """Erro de aplicação embutido em uma resposta HTTP."""

    error_code: int | str | None
    error_message: str

    def describe(self) -> str:
        """Mensagem legível com o texto do servidor preservado."""
        if self.error_code is None:
            return f"Erro Apperian: {self.error_message}"
        return f"Erro Apperian {self.error_code}: {self.error_message}"


def parse_apperian_error(response_data: dict[str, Any]) -> ApperianApiError | None:
    """Extrai o erro do corpo de uma resposta do Apperian.

    Aceita o formato JSON-RPC (`{"error": {"code", "message"}}`) e o
    formato REST, que às vezes traz `error` como string.

    Args:
        response_data: Dict do response JSON

    Returns:
        ApperianApiError se houver erro, None se sucesso
    """
    error_obj = response_data.get("error")
    if not error_obj:
        return None

    if isinstance(error_obj, str):
        return ApperianApiError(error_code=None, error_message=error_obj)

    if not isinstance(error_obj, dict):
        return ApperianApiError(error_code=None, error_message=str(error_obj))

    return ApperianApiError(
        error_code=error_obj.get("code"),
        error_message=str(error_obj.get("message") or "Erro desconhecido"),
    )
