"""Burn service: relay signed BurnTokens DTOs and keep a burn history."""

import logging
from decimal import Decimal
from typing import Any

from galamint.errors import GatewayError, InvalidRequestError
from galamint.gateway.client import GalaChainClient
from galamint.gateway.dtos import BURN_TOKENS
from galamint.gateway.keys import fallback_transaction_id
from galamint.records.models import BurnTransaction, RecordStatus
from galamint.records.repository import RecordRepository
from galamint.web.services.common import store_errors, transaction_id_of
from galamint.web.services.wallet_service import is_valid_wallet_address

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for GALA burns."""

    def __init__(self, repo: RecordRepository, gateway: GalaChainClient):
        self.repo = repo
        self.gateway = gateway

    async def burn(
        self,
        wallet_address: str,
        gala_amount: Decimal,
        signed_payload: Any,
    ) -> BurnTransaction:
        """Relay a signed burn and record it as completed.

        A burn the gateway rejects is recorded as failed, under a
        ``failed-<ms>`` id, before the error is raised.

        Raises:
            InvalidRequestError: bad amount or wallet, or the gateway rejected the burn
        """
        if gala_amount <= 0:
            raise InvalidRequestError("Amount must be positive")
        if not is_valid_wallet_address(wallet_address):
            raise InvalidRequestError("Invalid wallet address")

        with store_errors("Failed to record burn transaction"):
            try:
                result = await self.gateway.submit_signed(BURN_TOKENS, signed_payload)
            except GatewayError as e:
                await self._record_failure(wallet_address, gala_amount, e)
                raise InvalidRequestError("GalaChain transaction failed") from e

            transaction = await self.repo.create_burn_transaction(
                wallet_address,
                gala_amount,
                transaction_id_of(result),
                status=RecordStatus.COMPLETED,
            )

        logger.info(
            f"Burned {gala_amount} GALA for {wallet_address} ({transaction.transaction_id})"
        )
        return transaction

    async def _record_failure(
        self, wallet_address: str, gala_amount: Decimal, error: GatewayError
    ) -> None:
        logger.warning(f"Burn for {wallet_address} rejected: {error.message}")
        await self.repo.create_burn_transaction(
            wallet_address,
            gala_amount,
            fallback_transaction_id("failed"),
            status=RecordStatus.FAILED,
        )
        # The request session rolls back on the error that follows.
        await self.repo.commit()

    async def history(self, wallet_address: str) -> list[BurnTransaction]:
        if not is_valid_wallet_address(wallet_address):
            raise InvalidRequestError("Invalid wallet address")
        with store_errors("Failed to fetch transaction history"):
            return await self.repo.list_burn_transactions(wallet_address)
