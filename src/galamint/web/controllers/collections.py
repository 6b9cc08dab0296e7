"""Collection API endpoints."""

from fastapi import APIRouter, Depends

from galamint.web.contracts.collections import (
    ClaimCollectionRequest,
    ClaimCollectionResponse,
    CollectionListResponse,
    CollectionResponse,
    FeeEstimateResponse,
)
from galamint.web.controllers.deps import get_collection_service, http_errors
from galamint.web.services.collection_service import CollectionService
from galamint.web.services.intents import intent_from

router = APIRouter(prefix="/collections", tags=["collections"])

# Fee does not depend on the name; used by the address-only estimate.
PLACEHOLDER_COLLECTION = "DUMMY"


@router.post("/claim", response_model=ClaimCollectionResponse)
async def claim_collection(
    request: ClaimCollectionRequest,
    service: CollectionService = Depends(get_collection_service),
) -> ClaimCollectionResponse:
    """Claim a collection name.

    Without ``signedAuthorization`` the response carries ``unsignedAuthDto``
    for the wallet to sign; resubmit it signed to complete the claim.
    """
    with http_errors("Claim collection"):
        result = await service.claim(
            request.wallet_address,
            request.collection,
            intent_from(request.signed_authorization),
        )

    return ClaimCollectionResponse(
        collection=result.collection.to_dict() if result.collection else None,
        transaction_id=result.transaction_id,
        unsigned_auth_dto=result.unsigned_dto,
    )


@router.post("/estimate-fee", response_model=FeeEstimateResponse)
async def estimate_claim_fee(
    request: ClaimCollectionRequest,
    service: CollectionService = Depends(get_collection_service),
) -> FeeEstimateResponse:
    with http_errors("Estimate claim fee"):
        fee = await service.estimate_claim_fee(request.wallet_address, request.collection)
    return FeeEstimateResponse(estimated_fee=fee)


@router.get("/estimate-fee/{address}", response_model=FeeEstimateResponse)
async def estimate_claim_fee_for_address(
    address: str,
    service: CollectionService = Depends(get_collection_service),
) -> FeeEstimateResponse:
    with http_errors("Estimate claim fee"):
        fee = await service.estimate_claim_fee(address, PLACEHOLDER_COLLECTION)
    return FeeEstimateResponse(estimated_fee=fee)


@router.get("/single/{collection_name}", response_model=CollectionResponse)
async def get_collection(
    collection_name: str,
    service: CollectionService = Depends(get_collection_service),
) -> CollectionResponse:
    with http_errors("Fetch collection"):
        collection = await service.get(collection_name)
    return CollectionResponse(collection=collection.to_dict())


@router.get("/{address}", response_model=CollectionListResponse)
async def get_user_collections(
    address: str,
    service: CollectionService = Depends(get_collection_service),
) -> CollectionListResponse:
    """List a wallet's collections after syncing grants from the chain."""
    with http_errors("Fetch collections"):
        await service.sync_from_chain(address)
        collections = await service.list_for_wallet(address)
    return CollectionListResponse(collections=[c.to_dict() for c in collections])
