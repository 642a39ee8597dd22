"""
Error types for zui.

Every fatal condition raised by a command derives from ZuiError and carries a
stable error code. Soft termination of a traversal and a declined publish
confirmation are not errors and never raise.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional, Sequence


class ZuiError(Exception):
    """
    Base class for fatal command errors.

    Attributes:
        code: Stable error code for programmatic handling
        message: Human-readable error description
    """

    code = "ZUI_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        if code is not None:
            self.code = code
        self.message = message
        super().__init__(f"{self.code}: {message}")

    def to_dict(self) -> dict:
        """Convert to dict for JSON serialization."""
        return {
            "error": self.code.lower(),
            "code": self.code,
            "message": self.message,
        }


class GraphQLTransportError(ZuiError):
    """The GraphQL endpoint could not be reached or returned garbage."""

    code = "GRAPHQL_TRANSPORT"


class GraphQLQueryError(ZuiError):
    """The GraphQL endpoint answered with errors, or with no data at all."""

    code = "GRAPHQL_QUERY"

    def __init__(self, message: str, payload: Any = None):
        self.payload = payload
        super().__init__(message)

    @classmethod
    def from_errors(cls, errors: Sequence[Any]) -> "GraphQLQueryError":
        return cls(json.dumps(errors, indent=2), payload=list(errors))

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["payload"] = self.payload
        return data


class ToolchainError(ZuiError):
    """The external sui binary exited with a non-zero status."""

    code = "TOOLCHAIN_FAILED"

    def __init__(
        self,
        command: List[str],
        returncode: int,
        stderr: str = "",
        message: Optional[str] = None,
    ):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            message
            or f"Sui command failed with status {returncode}: {' '.join(command)}"
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            {"command": self.command, "returncode": self.returncode, "stderr": self.stderr}
        )
        return data


class RpcTransportError(ZuiError):
    """The JSON-RPC endpoint could not be reached."""

    code = "RPC_TRANSPORT"


class RpcError(ZuiError):
    """The JSON-RPC endpoint returned an error object."""

    code = "RPC_ERROR"

    def __init__(self, rpc_code: int, message: str, data: Any = None):
        self.rpc_code = rpc_code
        self.data = data
        super().__init__(f"[{rpc_code}] {message}")


class PublishResultError(ZuiError):
    """A publish transaction failed or did not create a package."""

    code = "PUBLISH_RESULT"


class ManifestError(ZuiError):
    """A Move.toml is missing something a publish needs."""

    code = "MANIFEST_INVALID"


class DependencyCycleError(ZuiError):
    """Local package dependencies form a cycle."""

    code = "DEPENDENCY_CYCLE"

    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        super().__init__(
            f"Circular local dependency: {' -> '.join(cycle)}"
        )
