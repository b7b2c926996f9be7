"""Adapters de variante do protocolo Apperian."""

from .base import ApperianAdapterBase
from .ease import EASE_TYPE_CODES, EaseAdapter
from .rest_v2 import OPERATING_SYSTEM_CODES, RestV2Adapter

__all__ = [
    "EASE_TYPE_CODES",
    "OPERATING_SYSTEM_CODES",
    "ApperianAdapterBase",
    "EaseAdapter",
    "RestV2Adapter",
]
