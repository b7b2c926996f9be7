"""Agregador de settings do apperian_publisher.

Re-exporta todas as settings e funções de cada módulo.
"""

from __future__ import annotations

from config.settings.apperian import (
    EASE_URL,
    PLACEHOLDER_DEVICE_ID,
    SIGNING_POLL_INTERVAL_SECONDS,
    WS_BASE_URL,
    ApperianSettings,
    ProtocolVariant,
    get_apperian_settings,
)
from config.settings.base import (
    DEFAULT_SERVICE_NAME,
    BaseSettings,
    Environment,
    get_base_settings,
)

__all__ = [
    # Constants
    "DEFAULT_SERVICE_NAME",
    "EASE_URL",
    "PLACEHOLDER_DEVICE_ID",
    "SIGNING_POLL_INTERVAL_SECONDS",
    "WS_BASE_URL",
    # Apperian
    "ApperianSettings",
    # Base
    "BaseSettings",
    "Environment",
    "ProtocolVariant",
    "get_apperian_settings",
    "get_base_settings",
]
