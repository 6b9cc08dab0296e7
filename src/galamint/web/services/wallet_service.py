"""Wallet service: register wallets that connect to the backend."""

import logging

from galamint.errors import InvalidRequestError
from galamint.records.models import User
from galamint.records.repository import RecordRepository
from galamint.web.services.common import store_errors

logger = logging.getLogger(__name__)

# GalaChain user aliases and plain Ethereum addresses.
WALLET_PREFIXES = ("eth|", "client|", "0x")


def is_valid_wallet_address(address: str) -> bool:
    return bool(address) and address.startswith(WALLET_PREFIXES)


class WalletService:
    def __init__(self, repo: RecordRepository):
        self.repo = repo

    async def connect(self, wallet_address: str) -> User:
        """Find or create the user for a wallet.

        Raises:
            InvalidRequestError: the address has no known prefix
        """
        if not is_valid_wallet_address(wallet_address):
            raise InvalidRequestError("Invalid wallet address format")

        with store_errors("Failed to connect wallet"):
            user = await self.repo.find_or_create_user(wallet_address)

        logger.info(f"Wallet connected: {wallet_address}")
        return user
