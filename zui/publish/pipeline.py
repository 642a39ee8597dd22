"""
Dependency-ordered package publishing.

Flow per package, in publish order:
1. Prepare: delete Move.lock, set the package's own named address to 0x0
2. Build: compile to base64 bytecode with the sui binary
3. Publish: submit the bytecode as a transaction
4. Record: find the new package id, save the created objects
5. Update dependents: write the package id into its own Move.toml and into
   the Move.toml of every package that depends on it locally
6. Update lock: register the published id in Move.lock

The first failure stops the run. Packages published before it stay published
and their manifest edits stay on disk.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union

import structlog
from rich.console import Console

from ..core.manifest import set_named_address
from ..core.registry import PackageRegistry
from ..data.models.packages import PackageManifest, PublishOutcome, PublishStep
from ..errors import PublishResultError, ZuiError
from ..integrations.sui_cli import SuiCli
from .storage import CreatedObjectsStore
from .submitter import Submitter

logger = structlog.get_logger()

UNASSIGNED_ADDRESS = "0x0"


def check_execution_status(response: Dict[str, Any]) -> None:
    """Raise unless the transaction executed successfully."""
    status = (response.get("effects") or {}).get("status") or {}
    if status.get("status") != "success":
        raise PublishResultError(f"Publish failed: {status.get('error')}")


def extract_package_id(response: Dict[str, Any]) -> str:
    """The id of the package created by a publish transaction."""
    for change in response.get("objectChanges") or []:
        if change.get("type") == "published" and change.get("packageId"):
            return change["packageId"]
    raise PublishResultError("Could not find package ID in publish result")


def created_objects(
    package: PackageManifest, response: Dict[str, Any]
) -> List[Dict[str, Any]]:
    """Type and id of every object a publish created or touched."""
    objects = []
    for change in response.get("objectChanges") or []:
        if change.get("type") == "published":
            objects.append({"type": package.name, "id": change.get("packageId")})
        else:
            objects.append({"type": change.get("objectType"), "id": change.get("objectId")})
    return objects


@dataclass
class PublishRecord:
    """Progress of one package through the publish steps."""

    package: str
    step: PublishStep = PublishStep.PENDING
    package_id: Optional[str] = None
    failed_step: Optional[PublishStep] = None
    error: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "package": self.package,
            "step": self.step.value,
            "package_id": self.package_id,
            "failed_step": self.failed_step.value if self.failed_step else None,
            "error": self.error,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }


@dataclass
class PublishReport:
    """Result of a publish run."""

    outcome: PublishOutcome
    order: List[str] = field(default_factory=list)
    records: Dict[str, PublishRecord] = field(default_factory=dict)
    published: List[str] = field(default_factory=list)
    not_published: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.outcome == PublishOutcome.SUCCEEDED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "order": self.order,
            "published": self.published,
            "not_published": self.not_published,
            "packages": [record.to_dict() for record in self.records.values()],
        }


class PackagePublisher:
    """Publishes every package of a registry in dependency order."""

    def __init__(
        self,
        registry: PackageRegistry,
        cli: SuiCli,
        submitter: Union[Submitter, Callable[[], Submitter]],
        confirm: Optional[Callable[[], bool]] = None,
        console: Optional[Console] = None,
        store: Optional[CreatedObjectsStore] = None,
    ):
        """Initialize the publisher.

        Args:
            registry: Loaded packages
            cli: Wrapper for the sui binary
            submitter: Submitter, or a factory called on first use so that no
                network setup happens before confirmation
            confirm: Asks the operator to go ahead; missing means "no"
            console: Where progress and the summary are printed
            store: Where created objects are saved, if anywhere
        """
        self.registry = registry
        self.cli = cli
        self._submitter = submitter
        self.confirm = confirm or (lambda: False)
        self.console = console or Console()
        self.store = store
        self.records: Dict[str, PublishRecord] = {}

    @property
    def submitter(self) -> Submitter:
        if not isinstance(self._submitter, Submitter):
            self._submitter = self._submitter()
        return self._submitter

    def _advance(self, record: PublishRecord, step: PublishStep) -> None:
        logger.debug("publish_step", package=record.package, step=step.value)
        record.step = step

    def publish_package(
        self, package: PackageManifest, record: Optional[PublishRecord] = None
    ) -> str:
        """Run every publish step for one package.

        Returns:
            The on-chain id of the new package
        """
        record = record or PublishRecord(package=package.name)
        record.started_at = datetime.now(timezone.utc)
        self.console.print(f"\n📦 Publishing package: {package.name}")

        self._advance(record, PublishStep.PREPARING)
        if package.lock_path.exists():
            package.lock_path.unlink()
            self.console.print("Deleted Move.lock file")
        set_named_address(package.manifest_path, package.named_address, UNASSIGNED_ADDRESS)

        self._advance(record, PublishStep.BUILDING)
        self.console.print("Building package...")
        bytecode = self.cli.build_bytecode(package.path)

        self._advance(record, PublishStep.PUBLISHING)
        submitter = self.submitter
        self.console.print(f"Active address {submitter.sender}")
        self.console.print("Publishing...")
        response = submitter.submit(bytecode["modules"], bytecode["dependencies"])
        check_execution_status(response)

        self._advance(record, PublishStep.RECORDING_RESULT)
        package_id = extract_package_id(response)
        record.package_id = package_id
        package.resolved_address = package_id
        if self.store is not None:
            saved = self.store.write(package.named_address, created_objects(package, response))
            self.console.print(f"Created objects saved to {saved}")

        self._advance(record, PublishStep.UPDATING_DEPENDENTS)
        self._propagate_address(package, package_id)

        self._advance(record, PublishStep.UPDATING_LOCK)
        self.cli.register_published(
            package.path,
            environment=self.cli.active_env(),
            chain_id=self.cli.chain_identifier(),
            package_id=package_id,
        )

        self._advance(record, PublishStep.PUBLISHED)
        package.published = True
        record.completed_at = datetime.now(timezone.utc)
        logger.info("package_published", package=package.name, package_id=package_id)
        self.console.print(
            f"\n✅ Successfully published {package.name} at: {package_id}",
            style="green",
        )
        return package_id

    def _propagate_address(self, package: PackageManifest, package_id: str) -> None:
        """Write the new id into the package's own manifest and its dependents'."""
        for other in [package, *self.registry.dependents_of(package.name)]:
            updated = set_named_address(
                other.manifest_path,
                package.named_address,
                package_id,
                required=other.name == package.name,
            )
            if updated:
                self.console.print(
                    f"Updated {other.name}'s Move.toml with {package.name}'s address"
                )

    def publish_all(self) -> PublishReport:
        """Order the packages, confirm, then publish them one by one.

        Raises:
            DependencyCycleError: Before the confirmation prompt, with nothing touched
        """
        if len(self.registry) == 0:
            self.console.print("Packages not loaded")
            return PublishReport(outcome=PublishOutcome.EMPTY)

        order = self.registry.publish_order()
        self.console.print(f"\n📋 Publish order: {' → '.join(order)}")

        self.console.print(
            "\nWARNING: Publishing packages will delete Move.lock files "
            "and previously published data will be lost.",
            style="yellow",
        )
        if not self.confirm():
            self.console.print("Publish cancelled")
            return PublishReport(
                outcome=PublishOutcome.CANCELLED,
                order=order,
                not_published=self.registry.names(),
            )

        self.records = {name: PublishRecord(package=name) for name in order}

        failed = False
        for name in order:
            package = self.registry.get(name)
            record = self.records[name]
            try:
                self.publish_package(package, record)
            except Exception as e:
                failed = True
                record.failed_step = record.step
                record.step = PublishStep.FAILED
                record.error = e.message if isinstance(e, ZuiError) else str(e)
                record.completed_at = datetime.now(timezone.utc)
                if isinstance(e, ZuiError):
                    logger.error("package_publish_failed", package=name, error=e.to_dict())
                else:
                    logger.exception("package_publish_failed", package=name)
                self.console.print(f"\n❌ Failed to publish {name}: {record.error}", style="red")
                break

        report = PublishReport(
            outcome=PublishOutcome.FAILED if failed else PublishOutcome.SUCCEEDED,
            order=order,
            records=self.records,
            published=[p.name for p in self.registry if p.published],
            not_published=[p.name for p in self.registry if not p.published],
        )
        self._print_summary(report)
        return report

    def _print_summary(self, report: PublishReport) -> None:
        self.console.print("\n📊 Publish Summary:")
        if report.published:
            self.console.print(f"✅ Successfully published: {', '.join(report.published)}")
        if report.not_published:
            self.console.print(f"❌ Failed to publish: {', '.join(report.not_published)}")
