"""Mint API endpoints."""

from fastapi import APIRouter, Depends

from galamint.web.contracts.collections import FeeEstimateResponse
from galamint.web.contracts.mint import (
    MintFields,
    MintTokensRequest,
    MintTokensResponse,
    MintTransactionListResponse,
)
from galamint.web.controllers.deps import get_mint_service, http_errors
from galamint.web.services.intents import intent_from
from galamint.web.services.mint_service import MintService

router = APIRouter(prefix="/mint", tags=["mint"])


@router.post("/tokens", response_model=MintTokensResponse)
async def mint_tokens(
    request: MintTokensRequest,
    service: MintService = Depends(get_mint_service),
) -> MintTokensResponse:
    """Mint tokens of an existing token class.

    Without ``signedTransaction`` the response carries ``unsignedMintDto``.
    """
    with http_errors("Mint tokens"):
        result = await service.mint(
            request.wallet_address,
            request,
            intent_from(request.signed_transaction),
        )

    return MintTokensResponse(
        transaction=result.transaction.to_dict() if result.transaction else None,
        transaction_id=result.transaction_id,
        unsigned_mint_dto=result.unsigned_dto,
    )


@router.get("/transactions/{address}", response_model=MintTransactionListResponse)
async def get_mint_transactions(
    address: str,
    service: MintService = Depends(get_mint_service),
) -> MintTransactionListResponse:
    with http_errors("Fetch mint transactions"):
        transactions = await service.list_for_wallet(address)
    return MintTransactionListResponse(transactions=[t.to_dict() for t in transactions])


@router.post("/estimate-fee", response_model=FeeEstimateResponse)
async def estimate_mint_fee(
    request: MintTokensRequest,
    service: MintService = Depends(get_mint_service),
) -> FeeEstimateResponse:
    with http_errors("Estimate mint fee"):
        fee = await service.estimate_mint_fee(request)
    return FeeEstimateResponse(estimated_fee=fee)


@router.get("/estimate-fee/{address}", response_model=FeeEstimateResponse)
async def estimate_mint_fee_for_address(
    address: str,
    service: MintService = Depends(get_mint_service),
) -> FeeEstimateResponse:
    fields = MintFields(
        collection="DUMMY",
        type="DUMMY",
        category="DUMMY",
        additional_key="none",
        owner=address,
        quantity="1",
    )
    with http_errors("Estimate mint fee"):
        fee = await service.estimate_mint_fee(fields)
    return FeeEstimateResponse(estimated_fee=fee)
