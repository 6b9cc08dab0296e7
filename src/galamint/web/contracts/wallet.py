"""Wallet contracts."""

from pydantic import Field

from galamint.web.contracts.base import ApiModel


class ConnectWalletRequest(ApiModel):
    wallet_address: str = Field(..., description="eth|, client| or 0x address")


class ConnectWalletResponse(ApiModel):
    success: bool = True
    message: str = "Wallet connected successfully"
    wallet_address: str
