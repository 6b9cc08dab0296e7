"""Best-effort reconciliation of local records with GalaChain state.

Runs before reads. A sync failure never reaches the caller: the
routines log it and fall back to what the record store already holds.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from galamint.errors import GatewayError
from galamint.gateway.client import GalaChainClient
from galamint.gateway.dtos import token_class_key
from galamint.gateway.keys import fallback_transaction_id
from galamint.records.models import Collection, RecordStatus, TokenClass
from galamint.records.repository import RecordRepository

logger = logging.getLogger(__name__)


async def sync_collections_from_chain(
    repo: RecordRepository,
    gateway: GalaChainClient,
    wallet_address: str,
) -> list[Collection]:
    """Store collection authorizations granted to ``wallet_address`` on chain.

    Returns the wallet's synced collections, or its existing local
    collections if the gateway cannot be read.
    """
    try:
        page = await gateway.fetch_collection_authorizations()
    except GatewayError as e:
        logger.warning(f"Collection sync for {wallet_address} skipped: {e.message}")
        return await repo.list_collections(wallet_address)

    synced: list[Collection] = []
    try:
        for auth in page.for_user(wallet_address):
            collection = await repo.get_collection(auth.collection)
            if collection is None:
                collection = await repo.create_collection(
                    collection_name=auth.collection,
                    wallet_address=wallet_address,
                    transaction_id=auth.transaction_id or fallback_transaction_id("sync"),
                    status=RecordStatus.COMPLETED,
                )
                logger.info(f"Synced collection {auth.collection} for {wallet_address}")
            elif collection.wallet_address != wallet_address:
                # Claimed locally by another wallet; the unique name wins.
                logger.warning(
                    f"Chain grants {auth.collection} to {wallet_address} but it is "
                    f"stored for {collection.wallet_address}"
                )
                continue
            synced.append(collection)
    except IntegrityError as e:
        # A concurrent claim inserted the same name first.
        await repo.rollback()
        logger.warning(f"Collection sync for {wallet_address} raced a claim: {e.orig}")
        return await repo.list_collections(wallet_address)

    return synced


async def sync_token_classes_from_chain(
    repo: RecordRepository,
    gateway: GalaChainClient,
    wallet_address: str,
) -> list[TokenClass]:
    """Refresh supply and image of token classes in the wallet's collections."""
    synced: list[TokenClass] = []

    for collection in await repo.list_collections(wallet_address):
        for token_class in await repo.list_token_classes_for_collection(
            collection.collection_name
        ):
            key = token_class_key(
                token_class.collection,
                token_class.type,
                token_class.category,
                token_class.additional_key,
            )
            try:
                supplies = await gateway.fetch_token_classes_with_supply([key])
            except Exception as e:
                logger.warning(f"Failed to sync token class {token_class.id}: {e}")
                synced.append(token_class)
                continue

            if supplies:
                try:
                    await repo.update_token_class_supply(
                        token_class,
                        current_supply=supplies[0].total_supply,
                        image=supplies[0].image,
                    )
                except SQLAlchemyError as e:
                    # Session is unusable after a failed flush; reload what is stored.
                    await repo.rollback()
                    logger.warning(f"Token class sync for {wallet_address} aborted: {e}")
                    return await _stored_token_classes(repo, wallet_address)
            synced.append(token_class)

    return synced


async def _stored_token_classes(repo: RecordRepository, wallet_address: str) -> list[TokenClass]:
    stored: list[TokenClass] = []
    for collection in await repo.list_collections(wallet_address):
        stored.extend(await repo.list_token_classes_for_collection(collection.collection_name))
    return stored
