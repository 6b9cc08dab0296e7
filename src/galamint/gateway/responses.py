"""Decoders for gateway listing responses.

Listing endpoints answer in several shapes. Each response is decoded once
here into a tagged value so call sites never inspect raw JSON.
"""

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

PageShape = Literal["data", "list", "collections", "unrecognized"]


@dataclass(frozen=True)
class CollectionAuthorization:
    """One collection authorization granted on chain."""

    collection: Optional[str]
    authorized_user: Optional[str]
    transaction_id: Optional[str] = None

    @classmethod
    def from_item(cls, item: dict) -> "CollectionAuthorization":
        return cls(
            collection=item.get("collection") or item.get("collectionName"),
            authorized_user=(
                item.get("authorizedUser") or item.get("authorized_user") or item.get("user")
            ),
            transaction_id=item.get("transactionId") or item.get("transaction_id"),
        )


@dataclass(frozen=True)
class AuthorizationPage:
    """A decoded page of collection authorizations.

    ``shape`` records which response layout was recognized; an
    ``unrecognized`` page always has no items.
    """

    shape: PageShape
    items: list[CollectionAuthorization] = field(default_factory=list)
    bookmark: str = ""

    def for_user(self, wallet_address: str) -> list[CollectionAuthorization]:
        return [
            item for item in self.items
            if item.authorized_user == wallet_address and item.collection
        ]


def _items(raw: list) -> list[CollectionAuthorization]:
    return [CollectionAuthorization.from_item(i) for i in raw if isinstance(i, dict)]


def decode_authorization_page(payload: Any) -> AuthorizationPage:
    """Decode a FetchNftCollectionAuthorizationsWithPagination response."""
    if isinstance(payload, list):
        return AuthorizationPage(shape="list", items=_items(payload))

    if not isinstance(payload, dict):
        return AuthorizationPage(shape="unrecognized")

    data = payload.get("Data")
    if isinstance(data, list):
        return AuthorizationPage(shape="data", items=_items(data))
    if isinstance(data, dict) and isinstance(data.get("results"), list):
        return AuthorizationPage(
            shape="data",
            items=_items(data["results"]),
            bookmark=str(data.get("nextPageBookmark") or ""),
        )

    collections = payload.get("collections")
    if isinstance(collections, list):
        return AuthorizationPage(shape="collections", items=_items(collections))

    return AuthorizationPage(shape="unrecognized")


@dataclass(frozen=True)
class TokenClassSupply:
    """Supply and display data for one token class."""

    collection: Optional[str]
    type: Optional[str]
    category: Optional[str]
    additional_key: Optional[str]
    total_supply: Optional[str]
    image: Optional[str]


def decode_token_class_supply(payload: Any) -> list[TokenClassSupply]:
    """Decode a FetchTokenClassesWithSupply response. Unknown shapes give []."""
    data = payload.get("Data") if isinstance(payload, dict) else None
    if not isinstance(data, list):
        return []

    supplies = []
    for item in data:
        if not isinstance(item, dict):
            continue
        total = item.get("totalSupply")
        supplies.append(
            TokenClassSupply(
                collection=item.get("collection"),
                type=item.get("type"),
                category=item.get("category"),
                additional_key=item.get("additionalKey"),
                total_supply=str(total) if total is not None else None,
                image=item.get("image") or None,
            )
        )
    return supplies
