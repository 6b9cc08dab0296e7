"""Burn transaction contracts."""

from decimal import Decimal
from typing import Any

from pydantic import Field

from galamint.web.contracts.base import ApiModel


class BurnRequest(ApiModel):
    signed_transaction: dict[str, Any] = Field(..., description="Signed BurnTokens DTO")
    gala_amount: Decimal = Field(..., description="GALA burned, must be positive")
    wallet_address: str


class BurnResponse(ApiModel):
    success: bool = True
    message: str = "Transaction processed successfully"
    transaction_id: str


class TransactionHistoryResponse(ApiModel):
    success: bool = True
    transactions: list[dict] = Field(default_factory=list)
