"""Modelos de domínio do fluxo de publicação."""

from app.domain.apperian import (
    AppMetadata,
    RemoteApplication,
    SigningCredential,
    SigningStatus,
    SigningStatusReport,
    UploadResult,
    UploadTicket,
)
from app.domain.publish_result import PublishResult, PublishStatus
from app.domain.workflow_config import (
    PLATFORM_EXTENSIONS,
    SIGNING_PLATFORM_CODES,
    MetadataOverrides,
    Platform,
    WorkflowConfig,
)

__all__ = [
    "PLATFORM_EXTENSIONS",
    "SIGNING_PLATFORM_CODES",
    "AppMetadata",
    "MetadataOverrides",
    "Platform",
    "PublishResult",
    "PublishStatus",
    "RemoteApplication",
    "SigningCredential",
    "SigningStatus",
    "SigningStatusReport",
    "UploadResult",
    "UploadTicket",
    "WorkflowConfig",
]
