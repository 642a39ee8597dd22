"""
Package models for the publisher.

Package names are PascalCase in Move.toml and the matching named address is
snake_case, e.g. name = "AccountExtensions" -> account_extensions = "0x0".
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

MANIFEST_FILE = "Move.toml"
LOCK_FILE = "Move.lock"

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def to_named_address(package_name: str) -> str:
    """Convert a PascalCase package name to its snake_case named address."""
    return _CAMEL_BOUNDARY.sub(r"\1_\2", package_name).lower()


class PublishStep(str, Enum):
    """Per-package publish state."""

    PENDING = "pending"
    PREPARING = "preparing"
    BUILDING = "building"
    PUBLISHING = "publishing"
    RECORDING_RESULT = "recording_result"
    UPDATING_DEPENDENTS = "updating_dependents"
    UPDATING_LOCK = "updating_lock"
    PUBLISHED = "published"
    FAILED = "failed"


class PublishOutcome(str, Enum):
    """Result of a whole publish run."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"
    EMPTY = "empty"


@dataclass
class PackageManifest:
    """A publishable Move package discovered on disk."""

    name: str
    path: Path
    local_dependencies: List[str] = field(default_factory=list)
    published: bool = False
    resolved_address: Optional[str] = None

    @property
    def named_address(self) -> str:
        return to_named_address(self.name)

    @property
    def manifest_path(self) -> Path:
        return self.path / MANIFEST_FILE

    @property
    def lock_path(self) -> Path:
        return self.path / LOCK_FILE

    def depends_on(self, name: str) -> bool:
        return name in self.local_dependencies
