"""Collection claim contracts."""

from typing import Any, Optional

from pydantic import Field

from galamint.web.contracts.base import ApiModel


class ClaimCollectionRequest(ApiModel):
    """Request to claim a collection name, optionally with a signed authorization."""

    collection: str = Field(..., min_length=1, description="Collection name to claim")
    wallet_address: str = Field(..., min_length=1, description="Claiming wallet")
    signed_authorization: Optional[dict[str, Any]] = Field(
        None, description="Signed GrantNftCollectionAuthorization DTO"
    )


class ClaimCollectionResponse(ApiModel):
    """Either the stored collection or the DTO to sign."""

    success: bool = True
    message: str = "Collection claimed successfully"
    collection: Optional[dict] = None
    transaction_id: Optional[str] = None
    unsigned_auth_dto: Optional[dict] = None


class CollectionListResponse(ApiModel):
    success: bool = True
    collections: list[dict] = Field(default_factory=list)


class CollectionResponse(ApiModel):
    success: bool = True
    collection: dict


class FeeEstimateResponse(ApiModel):
    """Fee estimate from a dry run; "0" when the fee could not be read."""

    success: bool = True
    estimated_fee: str = "0"
