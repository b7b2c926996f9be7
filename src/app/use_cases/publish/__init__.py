"""Caso de uso de publicação no Apperian."""

from app.use_cases.publish.publish_application import PublishApplicationUseCase
from app.use_cases.publish.signing_poll import pause, wait_for_signing

__all__ = [
    "PublishApplicationUseCase",
    "pause",
    "wait_for_signing",
]
