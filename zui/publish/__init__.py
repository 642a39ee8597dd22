"""
Move package publisher.

Components:
    - pipeline: PackagePublisher, runs the publish steps per package in order
    - submitter: Submitter interface and the JSON-RPC implementation
    - storage: CreatedObjectsStore for the --created-objects-dir output
"""

from .pipeline import (
    PackagePublisher,
    PublishRecord,
    PublishReport,
    check_execution_status,
    created_objects,
    extract_package_id,
)
from .storage import CreatedObjectsStore
from .submitter import RpcSubmitter, Submitter, get_submitter

__all__ = [
    "PackagePublisher",
    "PublishRecord",
    "PublishReport",
    "check_execution_status",
    "created_objects",
    "extract_package_id",
    "CreatedObjectsStore",
    "RpcSubmitter",
    "Submitter",
    "get_submitter",
]
