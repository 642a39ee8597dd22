"""
Sui GraphQL client.

A small synchronous client for the Sui GraphQL service. It only moves
requests and responses; interpreting the ``errors`` array is left to the
caller because some errors (a pruned cursor range) are not fatal.
"""

from typing import Any, Dict, Mapping, Optional

import httpx
import structlog

from ..errors import GraphQLTransportError

logger = structlog.get_logger()


FIND_OBJECT_OWNERS_QUERY = """
query FindObjectOwners($first: Int!, $type: String!, $after: String) {
    objects(
        first: $first
        after: $after
        filter: {
            type: $type
        }
    ) {
        nodes {
            address
            owner {
                __typename
                ... on AddressOwner {
                    owner { address }
                }
                ... on Parent {
                    parent { address }
                }
            }
        }
        pageInfo {
            hasNextPage
            endCursor
        }
    }
}
"""


class SuiGraphQLClient:
    """
    Client for a Sui GraphQL endpoint.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.url = url
        self.client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self) -> "SuiGraphQLClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def query(
        self, query: str, variables: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        """Run one query and return the decoded response body.

        Returns:
            The response document, with ``data`` and optionally ``errors``

        Raises:
            GraphQLTransportError: The request failed or the body is not a
                GraphQL response
        """
        payload = {"query": query, "variables": dict(variables or {})}

        try:
            response = self.client.post(self.url, json=payload)
        except httpx.HTTPError as e:
            logger.error("graphql_request_failed", url=self.url, error=str(e))
            raise GraphQLTransportError(f"Request to {self.url} failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict) or ("data" not in body and "errors" not in body):
            raise GraphQLTransportError(
                f"{self.url} returned HTTP {response.status_code} "
                f"without a GraphQL response: {response.text[:200]}"
            )

        return body
