"""
Wrapper around the external ``sui`` binary.

Every invocation blocks until the process exits. A non-zero exit status is
raised as ToolchainError with the captured stderr attached.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from ..errors import ToolchainError

logger = structlog.get_logger()


class SuiCli:
    """Runs ``sui`` subcommands."""

    def __init__(self, binary: str = "sui"):
        self.binary = binary
        self.logger = logger.bind(binary=binary)

    def run(self, args: List[str], capture_output: bool = False) -> str:
        """Run ``sui <args>``.

        Args:
            args: Arguments after the binary name
            capture_output: Return stdout instead of letting the process
                write to the terminal

        Returns:
            The captured stdout, or "" when output is not captured

        Raises:
            ToolchainError: The process could not start or exited non-zero
        """
        command = [self.binary, *args]
        self.logger.debug("sui_command_start", args=args)

        try:
            result = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                capture_output=capture_output,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise ToolchainError(
                command, 127, str(e), message=f"{self.binary} binary not found"
            ) from e

        if result.returncode != 0:
            stderr = result.stderr or ""
            self.logger.error(
                "sui_command_failed",
                args=args,
                returncode=result.returncode,
                stderr=stderr.strip(),
            )
            raise ToolchainError(command, result.returncode, stderr)

        return result.stdout if capture_output else ""

    def run_json(self, args: List[str]) -> Any:
        output = self.run(args, capture_output=True)
        try:
            return json.loads(output)
        except ValueError as e:
            raise ToolchainError(
                [self.binary, *args],
                0,
                output[:500],
                message=f"Could not parse JSON output of: {' '.join(args)}",
            ) from e

    def build_bytecode(self, path: Path) -> Dict[str, List[str]]:
        """Compile a package to base64 bytecode modules and dependency ids."""
        built = self.run_json(
            ["move", "build", "--dump-bytecode-as-base64", "--path", str(path)]
        )
        return {
            "modules": list(built.get("modules", [])),
            "dependencies": list(built.get("dependencies", [])),
        }

    def active_env(self) -> str:
        return self.run(["client", "active-env"], capture_output=True).strip()

    def chain_identifier(self) -> str:
        return self.run(["client", "chain-identifier"], capture_output=True).strip()

    def active_address(self) -> str:
        return self.run(["client", "active-address"], capture_output=True).strip()

    def active_rpc_url(self) -> Optional[str]:
        """RPC URL of the active environment, from ``client envs --json``.

        The output is ``[[{"alias": ..., "rpc": ...}, ...], "<active alias>"]``.
        """
        data = self.run_json(["client", "envs", "--json"])
        if not isinstance(data, list) or len(data) < 2:
            return None
        envs, active = data[0], data[1]
        for env in envs or []:
            if env.get("alias") == active:
                return env.get("rpc")
        return None

    def sign(self, address: str, tx_bytes: str) -> str:
        """Sign transaction bytes with the keystore key of ``address``."""
        signed = self.run_json(
            ["keytool", "sign", "--address", address, "--data", tx_bytes, "--json"]
        )
        signature = signed.get("suiSignature") if isinstance(signed, dict) else None
        if not signature:
            raise ToolchainError(
                [self.binary, "keytool", "sign"],
                0,
                message="keytool sign returned no signature",
            )
        return signature

    def register_published(
        self,
        path: Path,
        environment: str,
        chain_id: str,
        package_id: str,
        version: int = 1,
    ) -> None:
        """Record a published package id in the package's Move.lock."""
        self.run(
            [
                "move", "manage-package",
                "--environment", environment,
                "--network-id", chain_id,
                "--original-id", package_id,
                "--latest-id", package_id,
                "--version-number", str(version),
                "--path", str(path),
            ]
        )
