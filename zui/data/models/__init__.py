"""
Data models for zui.
"""

from .objects import ObjectRecord, OwnerKind, PageCursor
from .packages import (
    LOCK_FILE,
    MANIFEST_FILE,
    PackageManifest,
    PublishOutcome,
    PublishStep,
    to_named_address,
)

__all__ = [
    "LOCK_FILE",
    "MANIFEST_FILE",
    "ObjectRecord",
    "OwnerKind",
    "PackageManifest",
    "PageCursor",
    "PublishOutcome",
    "PublishStep",
    "to_named_address",
]
