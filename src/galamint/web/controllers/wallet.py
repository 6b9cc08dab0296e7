"""Wallet API endpoints."""

from fastapi import APIRouter, Depends

from galamint.web.contracts.wallet import ConnectWalletRequest, ConnectWalletResponse
from galamint.web.controllers.deps import get_wallet_service, http_errors
from galamint.web.services.wallet_service import WalletService

router = APIRouter(prefix="/wallet", tags=["wallet"])


@router.post("/connect", response_model=ConnectWalletResponse)
async def connect_wallet(
    request: ConnectWalletRequest,
    service: WalletService = Depends(get_wallet_service),
) -> ConnectWalletResponse:
    """Register a wallet; connecting again is a no-op."""
    with http_errors("Connect wallet"):
        user = await service.connect(request.wallet_address)
    return ConnectWalletResponse(wallet_address=user.wallet_address)
