"""Protocolos e contratos do core da aplicação."""

from .http_client import ApperianHttpClientProtocol
from .publisher_adapter import AuthenticatorProtocol, PublisherAdapterProtocol

__all__ = [
    "ApperianHttpClientProtocol",
    "AuthenticatorProtocol",
    "PublisherAdapterProtocol",
]
