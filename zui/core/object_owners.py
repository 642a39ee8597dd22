"""
Object owner finder.

Walks every page of an ``objects(filter: {type})`` query and normalizes the
owner of each object. Pages are requested one at a time and results keep the
server's order. The whole result set is held in memory until the traversal
ends.
"""

from __future__ import annotations

import json
from typing import Iterable, List

import structlog

from ..data.models.objects import ObjectRecord, PageCursor
from ..errors import GraphQLQueryError
from ..integrations.sui_graphql import FIND_OBJECT_OWNERS_QUERY, SuiGraphQLClient

logger = structlog.get_logger()

# Maximum page size accepted by the Sui GraphQL service
QUERY_PAGE_SIZE = 50

# Error returned once the cursor points at pruned data; treated as end-of-data
OUT_OF_RANGE_MESSAGE = "Requested data is outside the available range"


def _is_out_of_range(errors: list) -> bool:
    first = errors[0] if errors else None
    return isinstance(first, dict) and first.get("message") == OUT_OF_RANGE_MESSAGE


def find_object_owners(
    client: SuiGraphQLClient,
    object_type: str,
    limit: int = 0,
    page_size: int = QUERY_PAGE_SIZE,
) -> List[ObjectRecord]:
    """Find objects of a type and their owners.

    Args:
        client: GraphQL client for the target network
        object_type: Fully qualified type, e.g. "0x123::module::Struct"
        limit: Maximum number of objects to return; 0 means no limit
        page_size: Objects requested per page

    Returns:
        Records in server order, at most ``limit`` of them

    Raises:
        GraphQLQueryError: The server returned errors or no data
    """
    if limit < 0:
        raise ValueError("limit must be >= 0")

    results: List[ObjectRecord] = []
    page = PageCursor.start()
    query_num = 1

    while page.has_next_page and (limit == 0 or len(results) < limit):
        logger.debug("query", query_num=query_num, cursor=page.cursor)
        query_num += 1

        resp = client.query(
            FIND_OBJECT_OWNERS_QUERY,
            {"first": page_size, "type": object_type, "after": page.cursor},
        )

        errors = resp.get("errors")
        if errors:
            if _is_out_of_range(errors):
                logger.info("range_no_longer_available", collected=len(results))
                break
            raise GraphQLQueryError.from_errors(errors)

        data = resp.get("data")
        if not data or not data.get("objects"):
            raise GraphQLQueryError("Query returned no data")

        objects = data["objects"]
        for node in objects.get("nodes") or []:
            if limit != 0 and len(results) >= limit:
                break
            results.append(ObjectRecord.from_node(node))

        page = PageCursor.from_page_info(objects.get("pageInfo") or {})

    logger.debug("traversal_complete", objects=len(results), queries=query_num - 1)
    return results


def render_object_records(records: Iterable[ObjectRecord]) -> str:
    """Serialize records as one compact JSON array."""
    return json.dumps([record.to_dict() for record in records], separators=(",", ":"))
