"""Mint service: mint tokens of an existing token class with allowance."""

import logging
from dataclasses import dataclass
from typing import Optional

from galamint.errors import InvalidRequestError
from galamint.gateway.client import GalaChainClient
from galamint.gateway.dtos import MINT_WITH_ALLOWANCE, mint_dto, token_class_key
from galamint.gateway.fees import extract_fee
from galamint.gateway.keys import generate_unique_key, signing_deadline
from galamint.records.models import (
    DEFAULT_ADDITIONAL_KEY,
    MintTransaction,
    RecordStatus,
)
from galamint.records.repository import RecordRepository
from galamint.web.contracts.mint import MintFields
from galamint.web.services.common import store_errors, transaction_id_of
from galamint.web.services.intents import Intent, Signed, Unsigned

logger = logging.getLogger(__name__)


@dataclass
class MintResult:
    transaction: Optional[MintTransaction] = None
    transaction_id: Optional[str] = None
    unsigned_dto: Optional[dict] = None


def build_mint_dto(fields: MintFields) -> dict:
    """Unsigned MintTokenWithAllowance DTO with a fresh key and signing deadline."""
    return mint_dto(
        owner=fields.owner,
        quantity=fields.quantity,
        token_class=token_class_key(
            fields.collection,
            fields.type,
            fields.category,
            fields.additional_key or DEFAULT_ADDITIONAL_KEY,
        ),
        unique_key=generate_unique_key("mint"),
        expires_at=signing_deadline(),
    )


class MintService:
    """Service for minting tokens and reading the mint log."""

    def __init__(self, repo: RecordRepository, gateway: GalaChainClient):
        self.repo = repo
        self.gateway = gateway

    async def mint(
        self,
        wallet_address: str,
        fields: MintFields,
        intent: Intent = Unsigned(),
    ) -> MintResult:
        """Mint tokens of a token class that exists locally.

        A relayed mint also completes a token class still marked pending.

        Raises:
            InvalidRequestError: the token class has not been created
            GatewayError: the gateway rejected the signed mint
        """
        with store_errors("Failed to mint tokens"):
            token_class = await self.repo.get_token_class(
                fields.collection, fields.type, fields.category, fields.additional_key
            )
            if token_class is None:
                raise InvalidRequestError(
                    "Token class not found. Please create the token class first."
                )

            if not isinstance(intent, Signed):
                return MintResult(unsigned_dto=build_mint_dto(fields))

            result = await self.gateway.submit_signed(MINT_WITH_ALLOWANCE, intent.payload)
            transaction_id = transaction_id_of(result)

            transaction = await self.repo.create_mint_transaction(
                wallet_address=wallet_address,
                collection=fields.collection,
                type=fields.type,
                category=fields.category,
                additional_key=fields.additional_key or DEFAULT_ADDITIONAL_KEY,
                owner=fields.owner,
                quantity=fields.quantity,
                token_instance="0",
                transaction_id=transaction_id,
                status=RecordStatus.COMPLETED,
            )

            if token_class.status == RecordStatus.PENDING:
                await self.repo.set_token_class_status(
                    token_class, RecordStatus.COMPLETED, transaction_id=transaction_id
                )

            logger.info(
                f"Minted {fields.quantity} of {fields.collection}/{fields.type} "
                f"to {fields.owner} ({transaction_id})"
            )
            return MintResult(transaction=transaction, transaction_id=transaction_id)

    async def list_for_wallet(self, wallet_address: str) -> list[MintTransaction]:
        with store_errors("Failed to fetch mint transactions"):
            return await self.repo.list_mint_transactions(wallet_address)

    async def estimate_mint_fee(self, fields: MintFields) -> str:
        """Dry-run the mint; the fee is charged to the token owner."""
        response = await self.gateway.dry_run(MINT_WITH_ALLOWANCE, build_mint_dto(fields))
        return extract_fee(response, MINT_WITH_ALLOWANCE, fields.owner)
