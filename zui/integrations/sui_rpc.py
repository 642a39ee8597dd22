"""
Sui JSON-RPC client.

Used by the publisher to build and execute publish transactions.
"""

from itertools import count
from typing import Any, Dict, List, Optional, Sequence

import httpx
import structlog

from ..errors import RpcError, RpcTransportError

logger = structlog.get_logger()

# Well-known fullnode endpoints by sui environment alias
DEFAULT_RPC_URLS = {
    "mainnet": "https://fullnode.mainnet.sui.io:443",
    "testnet": "https://fullnode.testnet.sui.io:443",
    "devnet": "https://fullnode.devnet.sui.io:443",
    "localnet": "http://127.0.0.1:9000",
}


class SuiRpcClient:
    """Synchronous JSON-RPC 2.0 client over HTTP."""

    def __init__(
        self,
        url: str,
        timeout: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.url = url
        self._ids = count(1)
        self.client = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def request(self, method: str, params: Sequence[Any] = ()) -> Any:
        """Call a JSON-RPC method and return its ``result``."""
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": list(params),
        }
        logger.debug("rpc_request", method=method, url=self.url)

        try:
            response = self.client.post(self.url, json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            logger.error("rpc_request_failed", method=method, error=str(e))
            raise RpcTransportError(f"{method} request to {self.url} failed: {e}") from e
        except ValueError as e:
            raise RpcTransportError(f"{method} returned invalid JSON") from e

        if body.get("error"):
            error = body["error"]
            raise RpcError(
                rpc_code=error.get("code", -1),
                message=error.get("message", "unknown error"),
                data=error.get("data"),
            )
        return body.get("result")

    def unsafe_publish(
        self,
        sender: str,
        modules: List[str],
        dependencies: List[str],
        gas_budget: int,
        gas: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Build an unsigned publish transaction.

        The node adds the transfer of the UpgradeCap to the sender.
        """
        return self.request(
            "unsafe_publish",
            [sender, modules, dependencies, gas, str(gas_budget)],
        )

    def execute_transaction_block(
        self,
        tx_bytes: str,
        signatures: List[str],
        options: Optional[Dict[str, bool]] = None,
        request_type: str = "WaitForLocalExecution",
    ) -> Dict[str, Any]:
        return self.request(
            "sui_executeTransactionBlock",
            [tx_bytes, signatures, options or {}, request_type],
        )
