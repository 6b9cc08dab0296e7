"""Collection service: claim collection names and estimate the claim fee.

Claiming grants the wallet authorization over a collection name on chain
(GrantNftCollectionAuthorization).
"""

import logging
from dataclasses import dataclass
from typing import Optional

from galamint.errors import InvalidRequestError, NotFoundError
from galamint.gateway.client import GalaChainClient
from galamint.gateway.dtos import GRANT_AUTHORIZATION, grant_authorization_dto
from galamint.gateway.fees import extract_fee
from galamint.gateway.keys import generate_unique_key, signing_deadline
from galamint.records.models import Collection, RecordStatus
from galamint.records.repository import RecordRepository
from galamint.services.chain_sync import sync_collections_from_chain
from galamint.web.services.common import insert_unique, store_errors, transaction_id_of
from galamint.web.services.intents import Intent, Signed, Unsigned

logger = logging.getLogger(__name__)


@dataclass
class ClaimResult:
    """Stored collection after a relayed claim, or the DTO the wallet must sign."""

    collection: Optional[Collection] = None
    transaction_id: Optional[str] = None
    unsigned_dto: Optional[dict] = None


def unsigned_grant_dto(wallet_address: str, collection_name: str) -> dict:
    return grant_authorization_dto(
        authorized_user=wallet_address,
        collection=collection_name,
        unique_key=generate_unique_key("auth"),
        expires_at=signing_deadline(),
    )


class CollectionService:
    """Service for claiming and reading collections."""

    def __init__(self, repo: RecordRepository, gateway: GalaChainClient):
        self.repo = repo
        self.gateway = gateway

    async def claim(
        self,
        wallet_address: str,
        collection_name: str,
        intent: Intent = Unsigned(),
    ) -> ClaimResult:
        """Claim ``collection_name`` for ``wallet_address``.

        Raises:
            InvalidRequestError: the wallet already claimed this name
            ConflictError: the name is already stored for another wallet
            GatewayError: the gateway rejected the signed authorization
        """
        with store_errors("Failed to claim collection"):
            existing = await self.repo.find_claimed_collection(collection_name, wallet_address)
            if existing is not None:
                raise InvalidRequestError("You have already claimed this collection")

            if isinstance(intent, Signed):
                result = await self.gateway.submit_signed(GRANT_AUTHORIZATION, intent.payload)
                transaction_id = transaction_id_of(result)

                collection = await insert_unique(
                    self.repo,
                    self.repo.create_collection(
                        collection_name=collection_name,
                        wallet_address=wallet_address,
                        transaction_id=transaction_id,
                        status=RecordStatus.COMPLETED,
                    ),
                    "Collection name is already claimed",
                )
                logger.info(f"Collection {collection_name} claimed by {wallet_address}")
                return ClaimResult(collection=collection, transaction_id=transaction_id)

            return ClaimResult(unsigned_dto=unsigned_grant_dto(wallet_address, collection_name))

    async def get(self, collection_name: str) -> Collection:
        with store_errors("Failed to fetch collection"):
            collection = await self.repo.get_collection(collection_name)
            if collection is None:
                raise NotFoundError("Collection not found")
            return collection

    async def list_for_wallet(self, wallet_address: str) -> list[Collection]:
        with store_errors("Failed to fetch collections"):
            return await self.repo.list_collections(wallet_address)

    async def sync_from_chain(self, wallet_address: str) -> list[Collection]:
        with store_errors("Failed to sync collections"):
            return await sync_collections_from_chain(self.repo, self.gateway, wallet_address)

    async def estimate_claim_fee(self, wallet_address: str, collection_name: str) -> str:
        """Dry-run the grant and read the fee charged to ``wallet_address``."""
        dto = unsigned_grant_dto(wallet_address, collection_name)
        response = await self.gateway.dry_run(GRANT_AUTHORIZATION, dto)
        return extract_fee(response, GRANT_AUTHORIZATION, wallet_address)
