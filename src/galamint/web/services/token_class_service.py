"""Token class service.

A token class is created on chain with CreateNftCollection under a
collection the wallet has claimed.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from galamint.errors import InvalidRequestError
from galamint.gateway.client import GalaChainClient
from galamint.gateway.dtos import CREATE_COLLECTION, create_collection_dto
from galamint.gateway.fees import extract_fee
from galamint.gateway.keys import generate_unique_key, signing_deadline
from galamint.records.models import DEFAULT_ADDITIONAL_KEY, RecordStatus, TokenClass
from galamint.records.repository import RecordRepository
from galamint.services.chain_sync import sync_token_classes_from_chain
from galamint.utils.numbers import format_big_number
from galamint.web.contracts.token_classes import TokenClassFields
from galamint.web.services.collection_service import CollectionService
from galamint.web.services.common import insert_unique, store_errors, transaction_id_of
from galamint.web.services.intents import Intent, Signed, Unsigned

logger = logging.getLogger(__name__)

LETTERS_ONLY = re.compile(r"^[A-Za-z]+$")

REQUIRED_FIELDS = ("description", "image", "symbol", "rarity", "max_supply", "max_capacity")


@dataclass
class TokenClassResult:
    token_class: Optional[TokenClass] = None
    transaction_id: Optional[str] = None
    unsigned_dto: Optional[dict] = None


def is_letters_only(value: Optional[str]) -> bool:
    """Symbol and rarity accept ASCII letters only."""
    return bool(value) and LETTERS_ONLY.match(value) is not None


def validate_token_class_fields(fields: TokenClassFields) -> None:
    """Reject definitions the chain would refuse or display badly.

    Raises:
        InvalidRequestError: a required field is missing, or symbol/rarity
            contains anything but letters
    """
    if not all(getattr(fields, name) for name in REQUIRED_FIELDS):
        raise InvalidRequestError(
            "Missing required fields: description, image, symbol, rarity, "
            "maxSupply, and maxCapacity are required"
        )
    if not is_letters_only(fields.symbol):
        raise InvalidRequestError("Symbol must contain only letters (a-z, A-Z)")
    if not is_letters_only(fields.rarity):
        raise InvalidRequestError("Rarity must contain only letters (a-z, A-Z)")


def build_create_dto(wallet_address: str, fields: TokenClassFields) -> dict:
    """Unsigned CreateNftCollection DTO with a fresh key and signing deadline."""
    return create_collection_dto(
        collection=fields.collection,
        authorities=[wallet_address],
        category=fields.category,
        type=fields.type,
        additional_key=fields.additional_key or DEFAULT_ADDITIONAL_KEY,
        name=fields.name or fields.collection,
        description=fields.description or "",
        image=fields.image or "",
        symbol=fields.symbol or "",
        rarity=fields.rarity or "",
        max_supply=format_big_number(fields.max_supply),
        max_capacity=format_big_number(fields.max_capacity),
        metadata_address=fields.metadata_address or "",
        unique_key=generate_unique_key("create"),
        expires_at=signing_deadline(),
    )


class TokenClassService:
    """Service for creating and reading token classes."""

    def __init__(
        self,
        repo: RecordRepository,
        gateway: GalaChainClient,
        collections: Optional[CollectionService] = None,
    ):
        self.repo = repo
        self.gateway = gateway
        self.collections = collections or CollectionService(repo, gateway)

    async def create(
        self,
        wallet_address: str,
        fields: TokenClassFields,
        intent: Intent = Unsigned(),
    ) -> TokenClassResult:
        """Create a token class in a collection owned by ``wallet_address``.

        Raises:
            NotFoundError: the collection has not been claimed
            InvalidRequestError: the wallet does not own the collection, or
                the token class already exists
            ConflictError: the natural key was inserted concurrently
        """
        with store_errors("Failed to create token class"):
            collection = await self.collections.get(fields.collection)
            if collection.wallet_address != wallet_address:
                raise InvalidRequestError("You do not own this collection")

            additional_key = fields.additional_key or DEFAULT_ADDITIONAL_KEY
            existing = await self.repo.get_token_class(
                fields.collection, fields.type, fields.category, additional_key
            )
            if existing is not None:
                raise InvalidRequestError("Token class already exists")

            if isinstance(intent, Signed):
                result = await self.gateway.submit_signed(CREATE_COLLECTION, intent.payload)
                transaction_id = transaction_id_of(result)

                token_class = await insert_unique(
                    self.repo,
                    self.repo.create_token_class(
                        collection=fields.collection,
                        type=fields.type,
                        category=fields.category,
                        additional_key=additional_key,
                        wallet_address=wallet_address,
                        transaction_id=transaction_id,
                        status=RecordStatus.COMPLETED,
                        current_supply="0",
                        image=fields.image,
                    ),
                    "Token class already exists",
                )
                logger.info(
                    f"Token class {fields.collection}/{fields.type}/{fields.category}/"
                    f"{additional_key} created by {wallet_address}"
                )
                return TokenClassResult(token_class=token_class, transaction_id=transaction_id)

            return TokenClassResult(unsigned_dto=build_create_dto(wallet_address, fields))

    async def list_for_wallet(self, wallet_address: str) -> list[TokenClass]:
        with store_errors("Failed to fetch token classes"):
            return await self.repo.list_token_classes_for_wallet(wallet_address)

    async def list_for_collection(self, collection: str) -> list[TokenClass]:
        with store_errors("Failed to fetch token classes"):
            return await self.repo.list_token_classes_for_collection(collection)

    async def sync_from_chain(self, wallet_address: str) -> list[TokenClass]:
        with store_errors("Failed to sync token classes from chain"):
            return await sync_token_classes_from_chain(self.repo, self.gateway, wallet_address)

    async def estimate_create_fee(self, wallet_address: str, fields: TokenClassFields) -> str:
        dto = build_create_dto(wallet_address, fields)
        response = await self.gateway.dry_run(CREATE_COLLECTION, dto)
        return extract_fee(response, CREATE_COLLECTION, wallet_address)
