"""
Object models for the owner finder.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class OwnerKind(str, Enum):
    """Ownership variant of an on-chain object.

    Known kinds use the GraphQL ``__typename`` as their value.
    """

    ADDRESS_OWNER = "AddressOwner"
    SHARED = "Shared"
    IMMUTABLE = "Immutable"
    PARENT = "Parent"
    UNKNOWN = "unknown"

    @classmethod
    def from_typename(cls, typename: Optional[str]) -> "OwnerKind":
        for kind in cls:
            if kind is not cls.UNKNOWN and kind.value == typename:
                return kind
        return cls.UNKNOWN

    @property
    def has_address(self) -> bool:
        return self in (OwnerKind.ADDRESS_OWNER, OwnerKind.PARENT)


@dataclass(frozen=True)
class ObjectRecord:
    """One discovered object with its normalized owner.

    Only AddressOwner and Parent records may carry ``owner_address``. They
    are not required to: when the server omits the nested address the record
    keeps the kind and reports a null owner.
    """

    id: str
    owner_kind: OwnerKind
    owner_address: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.owner_kind.has_address and self.owner_address is not None:
            raise ValueError(
                f"{self.owner_kind.value} objects have no owner address"
            )

    @classmethod
    def from_node(cls, node: Mapping[str, Any]) -> "ObjectRecord":
        """Build a record from one ``objects.nodes`` entry.

        An object whose owner payload is null is kept with an unknown owner.
        """
        owner = node.get("owner")
        if not owner:
            return cls(id=node["address"], owner_kind=OwnerKind.UNKNOWN)

        kind = OwnerKind.from_typename(owner.get("__typename"))
        address = None
        if kind is OwnerKind.ADDRESS_OWNER:
            address = (owner.get("owner") or {}).get("address")
        elif kind is OwnerKind.PARENT:
            address = (owner.get("parent") or {}).get("address")

        return cls(id=node["address"], owner_kind=kind, owner_address=address)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "id": self.id,
            "ownerType": self.owner_kind.value,
            "owner": self.owner_address,
        }


@dataclass(frozen=True)
class PageCursor:
    """Continuation state between two page requests."""

    cursor: Optional[str]
    has_next_page: bool

    @classmethod
    def start(cls) -> "PageCursor":
        return cls(cursor=None, has_next_page=True)

    @classmethod
    def from_page_info(cls, page_info: Mapping[str, Any]) -> "PageCursor":
        return cls(
            cursor=page_info.get("endCursor"),
            has_next_page=bool(page_info.get("hasNextPage")),
        )
