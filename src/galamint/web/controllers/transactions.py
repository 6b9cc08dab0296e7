"""Burn transaction API endpoints."""

from fastapi import APIRouter, Depends

from galamint.web.contracts.transactions import (
    BurnRequest,
    BurnResponse,
    TransactionHistoryResponse,
)
from galamint.web.controllers.deps import get_transaction_service, http_errors
from galamint.web.services.transaction_service import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post("/burn", response_model=BurnResponse)
async def burn_tokens(
    request: BurnRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> BurnResponse:
    """Relay a signed BurnTokens DTO."""
    with http_errors("Burn tokens"):
        transaction = await service.burn(
            request.wallet_address,
            request.gala_amount,
            request.signed_transaction,
        )
    return BurnResponse(transaction_id=transaction.transaction_id)


@router.get("/history/{address}", response_model=TransactionHistoryResponse)
async def get_transaction_history(
    address: str,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionHistoryResponse:
    with http_errors("Fetch transaction history"):
        transactions = await service.history(address)
    return TransactionHistoryResponse(transactions=[t.to_dict() for t in transactions])
