"""Validação da entrada do publicador Apperian."""

from api.validators.apperian.options import PublishOptions
from api.validators.apperian.publish import (
    build_workflow_config,
    validate_binary_path,
    validate_create_metadata,
    validate_credentials,
    validate_platform,
)

__all__ = [
    "PublishOptions",
    "build_workflow_config",
    "validate_binary_path",
    "validate_create_metadata",
    "validate_credentials",
    "validate_platform",
]
