"""
zui

Sui command line tools: object owner discovery and dependency-ordered
Move package publishing.
"""

import importlib.metadata

__version__ = importlib.metadata.version("zui")

from .core.object_owners import find_object_owners
from .core.registry import PackageRegistry
from .data.models import (
    ObjectRecord,
    OwnerKind,
    PackageManifest,
    PageCursor,
    PublishOutcome,
    PublishStep,
)
from .publish import PackagePublisher, PublishReport

__all__ = [
    "ObjectRecord",
    "OwnerKind",
    "PackageManifest",
    "PackagePublisher",
    "PackageRegistry",
    "PageCursor",
    "PublishOutcome",
    "PublishReport",
    "PublishStep",
    "find_object_owners",
]
