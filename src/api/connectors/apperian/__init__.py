"""Conector Apperian - adapter de borda para o app store corporativo.

Este módulo é o único ponto de IO com o Apperian.
Responsabilidades:
- Transport HTTP (JSON e upload multipart)
- Parsing de erros embutidos nas respostas
- Adapters EASE (JSON-RPC) e REST v2, com REST v1 compartilhado
"""

from .adapters import EaseAdapter, RestV2Adapter
from .api_errors import ApperianApiError, parse_apperian_error
from .http_base import HttpClient, HttpClientConfig, HttpError
from .http_client import ApperianHttpClient, create_apperian_http_client

__all__ = [
    "ApperianApiError",
    "ApperianHttpClient",
    "EaseAdapter",
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
    "RestV2Adapter",
    "create_apperian_http_client",
    "parse_apperian_error",
]
