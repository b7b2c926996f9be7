"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AuthenticationError,
    InvalidTransitionError,
    NotFoundError,
    PublishError,
    RemoteProtocolError,
    SigningError,
    TransportError,
    UnsupportedOperationError,
    ValidationError,
    WorkflowCancelledError,
)

__all__ = [
    "AuthenticationError",
    "InvalidTransitionError",
    "NotFoundError",
    "PublishError",
    "RemoteProtocolError",
    "SigningError",
    "TransportError",
    "UnsupportedOperationError",
    "ValidationError",
    "WorkflowCancelledError",
]
