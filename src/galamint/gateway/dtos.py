"""Request bodies for the GalaChain token-contract methods.

Field names, nesting and key order form the wire contract with the chain
and must not change. Callers choose the expiry: ``keys.expiration_timestamp``
for DTOs the backend submits, ``keys.signing_deadline`` for DTOs a wallet signs.
"""

import json
from typing import Any, Optional

GRANT_AUTHORIZATION = "GrantNftCollectionAuthorization"
CREATE_COLLECTION = "CreateNftCollection"
FETCH_AUTHORIZATIONS = "FetchNftCollectionAuthorizationsWithPagination"
FETCH_TOKEN_CLASSES = "FetchTokenClassesWithSupply"
MINT_WITH_ALLOWANCE = "MintTokenWithAllowance"
BURN_TOKENS = "BurnTokens"
DRY_RUN = "DryRun"

# Token contract every NFT collection is created under.
GALACHAIN_TOKEN_CONTRACT = "gc-a9b8b472b035c0510508c248d1110d3162b7e5f4-GalaChainToken"


def to_json(body: Any) -> str:
    """Compact JSON, the same bytes a browser's JSON.stringify produces."""
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


def grant_authorization_dto(
    authorized_user: str,
    collection: str,
    unique_key: str,
    expires_at: int,
) -> dict:
    return {
        "authorizedUser": authorized_user,
        "collection": collection,
        "dtoExpiresAt": expires_at,
        "uniqueKey": unique_key,
    }


def create_collection_dto(
    collection: str,
    authorities: list[str],
    unique_key: str,
    expires_at: int,
    category: str = "",
    type: str = "",
    additional_key: str = "",
    name: str = "",
    description: str = "",
    image: str = "",
    symbol: str = "",
    rarity: str = "",
    max_supply: str = "",
    max_capacity: str = "",
    metadata_address: str = "",
    contract_address: str = GALACHAIN_TOKEN_CONTRACT,
) -> dict:
    return {
        "collection": collection,
        "authorities": list(authorities),
        "category": category,
        "type": type,
        "additionalKey": additional_key,
        "name": name,
        "description": description,
        "image": image,
        "symbol": symbol,
        "rarity": rarity,
        "maxSupply": max_supply,
        "maxCapacity": max_capacity,
        "metadataAddress": metadata_address,
        "contractAddress": contract_address,
        "dtoExpiresAt": expires_at,
        "uniqueKey": unique_key,
    }


def token_class_key(
    collection: str,
    type: str,
    category: str,
    additional_key: Optional[str] = None,
) -> dict:
    key = {"collection": collection, "type": type, "category": category}
    if additional_key is not None:
        key["additionalKey"] = additional_key
    return key


def mint_dto(
    owner: str,
    quantity: str,
    token_class: dict,
    unique_key: str,
    expires_at: int,
    token_instance: str = "0",
) -> dict:
    """MintTokenWithAllowance body; the nested token class carries the expiry too."""
    return {
        "owner": owner,
        "quantity": quantity,
        "tokenClass": {**token_class, "dtoExpiresAt": expires_at},
        "tokenInstance": token_instance,
        "dtoExpiresAt": expires_at,
        "uniqueKey": unique_key,
    }


def signer_address(dto: dict) -> Optional[str]:
    """Pick the address a dry run should simulate as: owner, grantee, or first authority."""
    if dto.get("owner"):
        return dto["owner"]
    if dto.get("authorizedUser"):
        return dto["authorizedUser"]
    authorities = dto.get("authorities") or []
    return authorities[0] if authorities else None


def dry_run_dto(method: str, dto: Any) -> dict:
    """DryRun body. ``dto`` may already be a JSON string."""
    parsed = json.loads(dto) if isinstance(dto, str) else dto
    body = {
        "dto": dto if isinstance(dto, str) else to_json(dto),
        "method": method,
    }
    signer = signer_address(parsed) if isinstance(parsed, dict) else None
    if signer:
        body["signerAddress"] = signer
    return body
