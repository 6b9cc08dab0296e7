"""Token class contracts."""

from typing import Any, Optional

from pydantic import Field

from galamint.web.contracts.base import ApiModel


class TokenClassFields(ApiModel):
    """Token class definition as sent by the client."""

    collection: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    additional_key: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    symbol: Optional[str] = None
    rarity: Optional[str] = None
    max_supply: Optional[str] = None
    max_capacity: Optional[str] = None
    metadata_address: Optional[str] = None


class CreateTokenClassRequest(TokenClassFields):
    """Create (or estimate) a token class for a collection the wallet owns."""

    wallet_address: str = Field(..., min_length=1)
    signed_transaction: Optional[dict[str, Any]] = Field(
        None, description="Signed CreateNftCollection DTO"
    )


class CreateTokenClassResponse(ApiModel):
    success: bool = True
    message: str = "Token class created successfully"
    token_class: Optional[dict] = None
    transaction_id: Optional[str] = None
    unsigned_create_dto: Optional[dict] = None


class TokenClassListResponse(ApiModel):
    success: bool = True
    token_classes: list[dict] = Field(default_factory=list)
