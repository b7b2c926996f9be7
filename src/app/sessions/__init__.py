"""Sessão autenticada do Apperian."""

from app.sessions.apperian_session import (
    TOKEN_HEADER,
    ApperianSession,
    AuthState,
    open_session,
)

__all__ = [
    "TOKEN_HEADER",
    "ApperianSession",
    "AuthState",
    "open_session",
]
