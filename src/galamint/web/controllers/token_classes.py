"""Token class API endpoints."""

from fastapi import APIRouter, Depends

from galamint.web.contracts.collections import FeeEstimateResponse
from galamint.web.contracts.token_classes import (
    CreateTokenClassRequest,
    CreateTokenClassResponse,
    TokenClassFields,
    TokenClassListResponse,
)
from galamint.web.controllers.deps import get_token_class_service, http_errors
from galamint.web.services.intents import intent_from
from galamint.web.services.token_class_service import (
    TokenClassService,
    validate_token_class_fields,
)

router = APIRouter(prefix="/token-classes", tags=["token-classes"])

# Fee does not depend on the definition; used by the address-only estimate.
PLACEHOLDER_TOKEN_CLASS = TokenClassFields(
    collection="DUMMY",
    type="DUMMY",
    category="DUMMY",
    additional_key="none",
    name="DUMMY",
    description="DUMMY",
    image="https://example.com/dummy.jpg",
    symbol="DUM",
    rarity="Common",
    max_supply="1000",
    max_capacity="1000",
    metadata_address="",
)


@router.post("/create", response_model=CreateTokenClassResponse)
async def create_token_class(
    request: CreateTokenClassRequest,
    service: TokenClassService = Depends(get_token_class_service),
) -> CreateTokenClassResponse:
    """Create a token class.

    ``description``, ``image``, ``symbol``, ``rarity``, ``maxSupply`` and
    ``maxCapacity`` are required; ``symbol`` and ``rarity`` are letters only.
    """
    with http_errors("Create token class"):
        validate_token_class_fields(request)
        result = await service.create(
            request.wallet_address,
            request,
            intent_from(request.signed_transaction),
        )

    return CreateTokenClassResponse(
        token_class=result.token_class.to_dict() if result.token_class else None,
        transaction_id=result.transaction_id,
        unsigned_create_dto=result.unsigned_dto,
    )


@router.get("/user/{address}", response_model=TokenClassListResponse)
async def get_user_token_classes(
    address: str,
    service: TokenClassService = Depends(get_token_class_service),
) -> TokenClassListResponse:
    """List a wallet's token classes after refreshing supply from the chain."""
    with http_errors("Fetch token classes"):
        await service.sync_from_chain(address)
        token_classes = await service.list_for_wallet(address)
    return TokenClassListResponse(token_classes=[tc.to_dict() for tc in token_classes])


@router.get("/collection/{collection}", response_model=TokenClassListResponse)
async def get_collection_token_classes(
    collection: str,
    service: TokenClassService = Depends(get_token_class_service),
) -> TokenClassListResponse:
    with http_errors("Fetch token classes"):
        token_classes = await service.list_for_collection(collection)
    return TokenClassListResponse(token_classes=[tc.to_dict() for tc in token_classes])


@router.post("/estimate-fee", response_model=FeeEstimateResponse)
async def estimate_create_fee(
    request: CreateTokenClassRequest,
    service: TokenClassService = Depends(get_token_class_service),
) -> FeeEstimateResponse:
    with http_errors("Estimate token class fee"):
        fee = await service.estimate_create_fee(request.wallet_address, request)
    return FeeEstimateResponse(estimated_fee=fee)


@router.get("/estimate-fee/{address}", response_model=FeeEstimateResponse)
async def estimate_create_fee_for_address(
    address: str,
    service: TokenClassService = Depends(get_token_class_service),
) -> FeeEstimateResponse:
    with http_errors("Estimate token class fee"):
        fee = await service.estimate_create_fee(address, PLACEHOLDER_TOKEN_CLASS)
    return FeeEstimateResponse(estimated_fee=fee)
