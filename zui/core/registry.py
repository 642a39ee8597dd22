"""
Package registry and publish ordering.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, List, Optional

import structlog

from ..data.models.packages import PackageManifest
from ..errors import DependencyCycleError
from .manifest import find_manifests, local_dependency_names, package_name, read_manifest

logger = structlog.get_logger()


class PackageRegistry:
    """
    Name-keyed registry of Move packages.

    Packages keep their insertion order, which makes the computed publish
    order stable for a given manifest tree. Traversal state is never stored
    on the packages, so the registry can compute an order any number of
    times.
    """

    def __init__(self) -> None:
        self.packages: Dict[str, PackageManifest] = {}

    def __len__(self) -> int:
        return len(self.packages)

    def __iter__(self) -> Iterator[PackageManifest]:
        return iter(self.packages.values())

    def __contains__(self, name: object) -> bool:
        return name in self.packages

    def names(self) -> List[str]:
        return list(self.packages)

    def get(self, name: str) -> Optional[PackageManifest]:
        return self.packages.get(name)

    def add(self, package: PackageManifest) -> None:
        """Register a package, replacing any earlier package of the same name."""
        previous = self.packages.get(package.name)
        if previous is not None and previous.path != package.path:
            logger.warning(
                "duplicate_package_name",
                package=package.name,
                previous_path=str(previous.path),
                path=str(package.path),
            )
        self.packages[package.name] = package

    def load(self, packages_root: Path) -> int:
        """Register every package found under ``packages_root``.

        Manifests without a ``package.name`` are skipped.

        Returns:
            Number of packages registered by this call
        """
        loaded = 0
        for manifest_path in find_manifests(Path(packages_root)):
            doc = read_manifest(manifest_path)
            name = package_name(doc)
            if not name:
                logger.info("manifest_skipped", path=str(manifest_path), reason="no package name")
                continue

            self.add(
                PackageManifest(
                    name=name,
                    path=manifest_path.parent,
                    local_dependencies=local_dependency_names(doc),
                )
            )
            loaded += 1

        logger.debug("packages_loaded", root=str(packages_root), count=loaded)
        return loaded

    def edges(self) -> Dict[str, List[str]]:
        """Local dependency edges between registered packages."""
        return {
            package.name: [d for d in package.local_dependencies if d in self.packages]
            for package in self
        }

    def dependents_of(self, name: str) -> List[PackageManifest]:
        """Packages that declare ``name`` as a local dependency."""
        return [package for package in self if package.depends_on(name)]

    def publish_order(self) -> List[str]:
        """Order packages so each one follows all of its local dependencies.

        Depth-first post-order from every registered package, in insertion
        order. Dependencies that are not registered are ignored.

        Raises:
            DependencyCycleError: Local dependencies form a cycle
        """
        visited = set()
        in_progress: List[str] = []
        order: List[str] = []

        def visit(name: str) -> None:
            if name in in_progress:
                cycle = in_progress[in_progress.index(name):] + [name]
                raise DependencyCycleError(cycle)
            if name in visited:
                return
            package = self.packages.get(name)
            if package is None:
                return

            in_progress.append(name)
            for dependency in package.local_dependencies:
                visit(dependency)
            in_progress.pop()

            visited.add(name)
            order.append(name)

        for name in self.packages:
            visit(name)

        return order
