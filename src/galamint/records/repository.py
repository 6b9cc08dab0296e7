"""Repository for collection, token class and mint records."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from galamint.records.models import (
    DEFAULT_ADDITIONAL_KEY,
    STATUS_TRANSITIONS,
    BurnTransaction,
    Collection,
    MintTransaction,
    RecordStatus,
    TokenClass,
    User,
)


class InvalidStatusTransition(ValueError):
    """Raised when a record would move out of a terminal status."""


class RecordRepository:
    """Repository for all bookkeeping record operations.

    Writes are flushed, not committed; the session owner commits.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self) -> None:
        """Commit now; for records that must survive a failed request."""
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    async def _save(self, record):
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    # Collection operations
    async def create_collection(
        self,
        collection_name: str,
        wallet_address: str,
        transaction_id: str,
        status: RecordStatus = RecordStatus.COMPLETED,
        **details: Optional[str],
    ) -> Collection:
        """Create a collection record. Optional details map to nullable columns."""
        collection = Collection(
            collection_name=collection_name,
            wallet_address=wallet_address,
            transaction_id=transaction_id,
            status=status,
            **details,
        )
        return await self._save(collection)

    async def get_collection(self, collection_name: str) -> Optional[Collection]:
        """Get collection by its (globally unique) name."""
        stmt = select(Collection).where(Collection.collection_name == collection_name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_claimed_collection(
        self, collection_name: str, wallet_address: str
    ) -> Optional[Collection]:
        """Get the collection claimed by a specific wallet."""
        stmt = select(Collection).where(
            Collection.collection_name == collection_name,
            Collection.wallet_address == wallet_address,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_collections(self, wallet_address: str) -> list[Collection]:
        """Get all collections for a wallet, newest first."""
        stmt = (
            select(Collection)
            .where(Collection.wallet_address == wallet_address)
            .order_by(Collection.created_at.desc(), Collection.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    # Token class operations
    async def create_token_class(
        self,
        collection: str,
        type: str,
        category: str,
        wallet_address: str,
        transaction_id: str,
        additional_key: Optional[str] = None,
        status: RecordStatus = RecordStatus.COMPLETED,
        current_supply: str = "0",
        image: Optional[str] = None,
    ) -> TokenClass:
        token_class = TokenClass(
            collection=collection,
            type=type,
            category=category,
            additional_key=additional_key or DEFAULT_ADDITIONAL_KEY,
            wallet_address=wallet_address,
            transaction_id=transaction_id,
            status=status,
            current_supply=current_supply,
            image=image,
        )
        return await self._save(token_class)

    async def get_token_class(
        self,
        collection: str,
        type: str,
        category: str,
        additional_key: Optional[str] = None,
    ) -> Optional[TokenClass]:
        """Get token class by natural key. A missing additional key means "none"."""
        stmt = select(TokenClass).where(
            TokenClass.collection == collection,
            TokenClass.type == type,
            TokenClass.category == category,
            TokenClass.additional_key == (additional_key or DEFAULT_ADDITIONAL_KEY),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_token_classes_for_wallet(self, wallet_address: str) -> list[TokenClass]:
        stmt = (
            select(TokenClass)
            .where(TokenClass.wallet_address == wallet_address)
            .order_by(TokenClass.created_at.desc(), TokenClass.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_token_classes_for_collection(self, collection: str) -> list[TokenClass]:
        stmt = (
            select(TokenClass)
            .where(TokenClass.collection == collection)
            .order_by(TokenClass.created_at.desc(), TokenClass.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update_token_class_supply(
        self,
        token_class: TokenClass,
        current_supply: Optional[str] = None,
        image: Optional[str] = None,
    ) -> TokenClass:
        """Refresh supply and image from chain data. None leaves a field unchanged."""
        if current_supply is not None:
            token_class.current_supply = current_supply
        if image:
            token_class.image = image
        return await self._save(token_class)

    async def set_token_class_status(
        self,
        token_class: TokenClass,
        status: RecordStatus,
        transaction_id: Optional[str] = None,
    ) -> TokenClass:
        """Move a token class to a new status.

        Raises InvalidStatusTransition for anything but pending -> completed/failed.
        """
        current = RecordStatus(token_class.status)
        if status not in STATUS_TRANSITIONS[current]:
            raise InvalidStatusTransition(
                f"Token class {token_class.id} cannot move from {current.value} to {status.value}"
            )
        token_class.status = status
        if transaction_id:
            token_class.transaction_id = transaction_id
        return await self._save(token_class)

    # Mint operations
    async def create_mint_transaction(
        self,
        wallet_address: str,
        collection: str,
        type: str,
        category: str,
        owner: str,
        quantity: str,
        transaction_id: str,
        additional_key: Optional[str] = None,
        token_instance: str = "0",
        status: RecordStatus = RecordStatus.COMPLETED,
    ) -> MintTransaction:
        transaction = MintTransaction(
            wallet_address=wallet_address,
            collection=collection,
            type=type,
            category=category,
            additional_key=additional_key,
            owner=owner,
            quantity=quantity,
            token_instance=token_instance,
            transaction_id=transaction_id,
            status=status,
        )
        return await self._save(transaction)

    async def list_mint_transactions(self, wallet_address: str) -> list[MintTransaction]:
        """Get all mint transactions initiated by a wallet, newest first."""
        stmt = (
            select(MintTransaction)
            .where(MintTransaction.wallet_address == wallet_address)
            .order_by(MintTransaction.created_at.desc(), MintTransaction.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    # User operations
    async def get_user(self, wallet_address: str) -> Optional[User]:
        stmt = select(User).where(User.wallet_address == wallet_address)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_or_create_user(self, wallet_address: str) -> User:
        """Get the user for a wallet, creating it with a zero gem balance."""
        user = await self.get_user(wallet_address)
        if user is None:
            user = await self._save(User(wallet_address=wallet_address, gem_balance=0))
        return user

    # Burn operations
    async def create_burn_transaction(
        self,
        wallet_address: str,
        gala_amount: Decimal,
        transaction_id: str,
        status: RecordStatus = RecordStatus.COMPLETED,
    ) -> BurnTransaction:
        transaction = BurnTransaction(
            user_wallet_address=wallet_address,
            gala_amount=gala_amount,
            transaction_id=transaction_id,
            status=status,
        )
        return await self._save(transaction)

    async def list_burn_transactions(self, wallet_address: str) -> list[BurnTransaction]:
        """Get all burns for a wallet, newest first."""
        stmt = (
            select(BurnTransaction)
            .where(BurnTransaction.user_wallet_address == wallet_address)
            .order_by(BurnTransaction.created_at.desc(), BurnTransaction.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
