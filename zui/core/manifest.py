"""
Move.toml discovery, parsing and address rewriting.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import List, Optional

import structlog
import tomlkit
from tomlkit import TOMLDocument
from tomlkit.exceptions import ParseError

from ..data.models.packages import MANIFEST_FILE
from ..errors import ManifestError

logger = structlog.get_logger()


def find_manifests(root: Path) -> List[Path]:
    """Recursively find every Move.toml under ``root``.

    Directory and file names are visited in sorted order so repeated scans of
    the same tree return the same list. Symlinked directories are not
    followed.
    """
    root = Path(root)
    if not root.is_dir():
        raise ManifestError(f"{root} is not a directory")

    found: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames.sort()
        if MANIFEST_FILE in filenames:
            found.append(Path(dirpath) / MANIFEST_FILE)
    return found


def read_manifest(path: Path) -> TOMLDocument:
    try:
        return tomlkit.parse(Path(path).read_text(encoding="utf-8"))
    except ParseError as e:
        raise ManifestError(f"{path} is not valid TOML: {e}") from e


def write_manifest(path: Path, doc: TOMLDocument) -> None:
    Path(path).write_text(tomlkit.dumps(doc), encoding="utf-8")


def package_name(doc: Mapping) -> Optional[str]:
    """The ``package.name`` of a manifest, or None when it is not declared."""
    package = doc.get("package")
    if not isinstance(package, Mapping):
        return None
    name = package.get("name")
    return str(name) if name else None


def local_dependency_names(doc: Mapping) -> List[str]:
    """Names of dependencies resolved from a local path.

    Git and registry dependencies do not constrain the publish order.
    """
    dependencies = doc.get("dependencies")
    if not isinstance(dependencies, Mapping):
        return []
    return [
        str(name)
        for name, info in dependencies.items()
        if isinstance(info, Mapping) and "local" in info
    ]


def set_named_address(
    path: Path, name: str, value: str, required: bool = True
) -> bool:
    """Set ``[addresses].<name> = value`` in a Move.toml.

    Args:
        path: Path to the Move.toml
        name: Named address to set
        value: Hex address
        required: Raise instead of skipping when there is no [addresses] table

    Returns:
        True if the file was rewritten

    Raises:
        ManifestError: The manifest has no [addresses] table and ``required``
    """
    doc = read_manifest(path)
    addresses = doc.get("addresses")
    if not isinstance(addresses, Mapping):
        if required:
            raise ManifestError(f"{path} does not contain an addresses section")
        logger.warning("manifest_without_addresses", path=str(path), address=name)
        return False

    addresses[name] = value
    write_manifest(path, doc)
    return True
