"""
Transaction submitters for the publisher.

A Submitter turns compiled bytecode into an executed publish transaction.
The publisher only sees the transaction response, so the signing and
transport details can change without touching the pipeline.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import structlog

from ..config import Settings
from ..errors import ZuiError
from ..integrations.sui_cli import SuiCli
from ..integrations.sui_rpc import DEFAULT_RPC_URLS, SuiRpcClient

logger = structlog.get_logger()

EXECUTE_OPTIONS = {"showEffects": True, "showObjectChanges": True}


class Submitter(ABC):
    """Abstract base class for publish transaction submitters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Submitter name for logging and identification."""
        pass

    @property
    @abstractmethod
    def sender(self) -> str:
        """Address that signs and pays for the publish."""
        pass

    @abstractmethod
    def submit(self, modules: List[str], dependencies: List[str]) -> Dict[str, Any]:
        """Publish compiled modules.

        Args:
            modules: Base64 bytecode modules
            dependencies: Package ids the modules link against

        Returns:
            Transaction response with ``effects`` and ``objectChanges``
        """
        pass


class RpcSubmitter(Submitter):
    """Publishes through the fullnode JSON-RPC API.

    The transaction is built by the node, signed with the key of the active
    ``sui`` address and executed with local-execution wait.
    """

    def __init__(self, cli: SuiCli, rpc: SuiRpcClient, gas_budget: int):
        self.cli = cli
        self.rpc = rpc
        self.gas_budget = gas_budget
        self._sender: Optional[str] = None

    @property
    def name(self) -> str:
        return "rpc"

    @property
    def sender(self) -> str:
        if self._sender is None:
            self._sender = self.cli.active_address()
        return self._sender

    def submit(self, modules: List[str], dependencies: List[str]) -> Dict[str, Any]:
        sender = self.sender
        logger.info("publish_transaction_build", sender=sender, rpc=self.rpc.url)

        unsigned = self.rpc.unsafe_publish(
            sender=sender,
            modules=modules,
            dependencies=dependencies,
            gas_budget=self.gas_budget,
        )
        tx_bytes = unsigned["txBytes"]
        signature = self.cli.sign(sender, tx_bytes)

        return self.rpc.execute_transaction_block(
            tx_bytes,
            [signature],
            options=EXECUTE_OPTIONS,
            request_type="WaitForLocalExecution",
        )


def resolve_rpc_url(cli: SuiCli, settings: Settings) -> str:
    """RPC URL from settings, else from the active sui environment."""
    if settings.rpc_url:
        return settings.rpc_url

    url = cli.active_rpc_url()
    if url:
        return url

    env = cli.active_env()
    if env in DEFAULT_RPC_URLS:
        return DEFAULT_RPC_URLS[env]
    raise ZuiError(
        f"No RPC URL known for sui environment '{env}'. Set ZUI_RPC_URL.",
        code="CONFIG_INVALID",
    )


def get_submitter(kind: str, cli: SuiCli, settings: Settings) -> Submitter:
    """Factory function to get a submitter by type.

    Raises:
        ValueError: If submitter type is not supported
    """
    if kind == "rpc":
        rpc = SuiRpcClient(resolve_rpc_url(cli, settings), timeout=settings.rpc_timeout)
        return RpcSubmitter(cli, rpc, gas_budget=settings.gas_budget)
    else:
        raise ValueError(
            f"Unsupported submitter type: {kind}. "
            f"Supported: rpc"
        )
