"""Sessão autenticada de uma execução de publicação.

Máquina de estados de autenticação:
    UNAUTHENTICATED → AUTHENTICATING → AUTHENTICATED | FAILED

O token é escrito uma única vez (no login) e só lido depois.
Apenas uma sessão AUTHENTICATED pode emitir chamadas seguintes.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from utils.errors import AuthenticationError, InvalidTransitionError, PublishError

if TYPE_CHECKING:
    from app.protocols.publisher_adapter import AuthenticatorProtocol

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-TOKEN"


class AuthState(StrEnum):
    """Estados de autenticação da sessão."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    AUTHENTICATING = "AUTHENTICATING"
    AUTHENTICATED = "AUTHENTICATED"
    FAILED = "FAILED"


class ApperianSession:
    """Guarda o token de autenticação por uma execução.

    Attributes:
        state: Estado de autenticação atual
        token: Token opaco (somente leitura, exige AUTHENTICATED)
    """

    __slots__ = ("_state", "_token")

    def __init__(self) -> None:
        self._state = AuthState.UNAUTHENTICATED
        self._token: str | None = None

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._state is AuthState.AUTHENTICATED

    @property
    def token(self) -> str:
        """Token da sessão.

        Raises:
            AuthenticationError: Se a sessão não está autenticada.
        """
        if self._state is not AuthState.AUTHENTICATED or self._token is None:
            raise AuthenticationError(
                f"Sessão não autenticada (estado {self._state.value})"
            )
        return self._token

    def auth_headers(self) -> dict[str, str]:
        """Header de autenticação anexado a toda chamada após o login."""
        return {TOKEN_HEADER: self.token}

    async def authenticate(
        self,
        authenticator: AuthenticatorProtocol,
        username: str,
        password: str,
        device_id: str,
    ) -> None:
        """Executa o login e guarda o token.

        Args:
            authenticator: Adapter que executa a chamada de login
            username: Usuário Apperian
            password: Senha Apperian
            device_id: Identificador de dispositivo

        Raises:
            AuthenticationError: Resposta sem token ou token vazio
            PublishError: Falha de transporte ou erro no corpo da resposta
        """
        if self._state is not AuthState.UNAUTHENTICATED:
            raise InvalidTransitionError(
                f"Autenticação só pode partir de UNAUTHENTICATED (atual: {self._state.value})"
            )

        self._state = AuthState.AUTHENTICATING
        try:
            token = await authenticator.authenticate(username, password, device_id)
        except PublishError:
            self._state = AuthState.FAILED
            raise

        if not token or not str(token).strip():
            self._state = AuthState.FAILED
            logger.error("apperian_login_without_token", extra={"username": username})
            raise AuthenticationError("Erro ao autenticar no Apperian: resposta sem token")

        self._token = str(token)
        self._state = AuthState.AUTHENTICATED
        logger.info("apperian_login_succeeded", extra={"username": username})


async def open_session(
    authenticator: AuthenticatorProtocol,
    username: str,
    password: str,
    device_id: str,
) -> ApperianSession:
    """Cria uma sessão e autentica em um passo."""
    session = ApperianSession()
    await session.authenticate(authenticator, username, password, device_id)
    return session
