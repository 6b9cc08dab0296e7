"""Mint contracts."""

from typing import Any, Optional

from pydantic import Field

from galamint.web.contracts.base import ApiModel


class MintFields(ApiModel):
    """What to mint and for whom."""

    collection: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    additional_key: Optional[str] = None
    owner: str = Field(..., min_length=1, description="Address receiving the tokens")
    quantity: str = Field(..., min_length=1, description="Integer quantity as string")


class MintTokensRequest(MintFields):
    wallet_address: str = Field(..., min_length=1)
    signed_transaction: Optional[dict[str, Any]] = Field(
        None, description="Signed MintTokenWithAllowance DTO"
    )


class MintTokensResponse(ApiModel):
    success: bool = True
    message: str = "Tokens minted successfully"
    transaction: Optional[dict] = None
    transaction_id: Optional[str] = None
    unsigned_mint_dto: Optional[dict] = None


class MintTransactionListResponse(ApiModel):
    success: bool = True
    transactions: list[dict] = Field(default_factory=list)
