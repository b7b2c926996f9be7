"""Exceções de domínio do fluxo de publicação.

Toda condição fatal do fluxo é uma subclasse de PublishError. O atributo
`code` é estável e aparece no PublishResult e nos logs.
"""

from __future__ import annotations


class PublishError(RuntimeError):
    """Base para falhas fatais do fluxo de publicação."""

    code = "PUBLISH_ERROR"


class ValidationError(PublishError):
    """Entrada ausente ou inválida, detectada antes de qualquer chamada de rede."""

    code = "VALIDATION_ERROR"


class TransportError(PublishError):
    """Falha de rede ao alcançar o serviço remoto."""

    code = "TRANSPORT_ERROR"


class RemoteProtocolError(PublishError):
    """Resposta HTTP bem-formada cujo corpo carrega um erro de aplicação."""

    code = "REMOTE_PROTOCOL_ERROR"

    def __init__(
        self,
        message: str,
        error_code: int | str | None = None,
        error_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.error_message = error_message


class AuthenticationError(RemoteProtocolError):
    """Login recusado ou resposta sem token."""

    code = "AUTHENTICATION_ERROR"


class NotFoundError(PublishError):
    """Busca por aplicação ou credencial sem correspondência."""

    code = "NOT_FOUND"


class SigningError(PublishError):
    """Assinatura terminou com status `error`."""

    code = "SIGNING_ERROR"

    def __init__(self, message: str, detail: str = "") -> None:
        super().__init__(message)
        self.detail = detail


class UnsupportedOperationError(PublishError):
    """Etapa que o protocolo configurado não possui (ex: publish no REST v2)."""

    code = "UNSUPPORTED_OPERATION"


class WorkflowCancelledError(PublishError):
    """Execução interrompida pelo token de cancelamento."""

    code = "CANCELLED"


class InvalidTransitionError(RuntimeError):
    """Transição de estado fora do grafo do fluxo (erro de programação)."""
