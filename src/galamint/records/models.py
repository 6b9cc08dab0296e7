"""SQLAlchemy models for local bookkeeping records."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from sqlalchemy import DateTime, Index, Integer, Numeric, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class RecordStatus(str, Enum):
    """Status of a chain-backed record."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


# Allowed status transitions; terminal states never move again.
STATUS_TRANSITIONS = {
    RecordStatus.PENDING: {RecordStatus.COMPLETED, RecordStatus.FAILED},
    RecordStatus.COMPLETED: set(),
    RecordStatus.FAILED: set(),
}

DEFAULT_ADDITIONAL_KEY = "none"


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _status(value: Any) -> str:
    return value.value if isinstance(value, RecordStatus) else str(value)


class Collection(Base):
    """A collection name claimed by a wallet."""

    __tablename__ = "collections"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    collection_name: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    wallet_address: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    symbol: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    contract_address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    rarity: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    max_supply: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    max_capacity: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    metadata_address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    transaction_id: Mapped[str] = mapped_column(String(255), nullable=False)  # From the grant
    status: Mapped[RecordStatus] = mapped_column(
        String(20), default=RecordStatus.PENDING, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def to_dict(self) -> dict:
        """Serialize using the gateway-facing camelCase field names."""
        return {
            "id": self.id,
            "collectionName": self.collection_name,
            "walletAddress": self.wallet_address,
            "description": self.description,
            "image": self.image,
            "category": self.category,
            "symbol": self.symbol,
            "contractAddress": self.contract_address,
            "name": self.name,
            "type": self.type,
            "rarity": self.rarity,
            "maxSupply": self.max_supply,
            "maxCapacity": self.max_capacity,
            "metadataAddress": self.metadata_address,
            "transactionId": self.transaction_id,
            "status": _status(self.status),
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


class TokenClass(Base):
    """A token class (collection/type/category/additionalKey) created on chain.

    The composite natural key is enforced by a unique index.
    """

    __tablename__ = "token_classes"
    __table_args__ = (
        Index(
            "ix_token_classes_natural_key",
            "collection",
            "type",
            "category",
            "additional_key",
            unique=True,
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    collection: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    additional_key: Mapped[str] = mapped_column(
        String(100), nullable=False, default=DEFAULT_ADDITIONAL_KEY
    )
    wallet_address: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    transaction_id: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[RecordStatus] = mapped_column(
        String(20), default=RecordStatus.PENDING, nullable=False
    )
    current_supply: Mapped[str] = mapped_column(String(100), default="0")  # Integer as string
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    @property
    def natural_key(self) -> tuple[str, str, str, str]:
        return (self.collection, self.type, self.category, self.additional_key)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "collection": self.collection,
            "type": self.type,
            "category": self.category,
            "additionalKey": self.additional_key,
            "walletAddress": self.wallet_address,
            "transactionId": self.transaction_id,
            "status": _status(self.status),
            "currentSupply": self.current_supply,
            "image": self.image,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


class MintTransaction(Base):
    """Append-only log entry for a mint relayed to the gateway."""

    __tablename__ = "mint_transactions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    wallet_address: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    collection: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    additional_key: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    owner: Mapped[str] = mapped_column(String(255), nullable=False)  # NFT owner address
    quantity: Mapped[str] = mapped_column(String(100), nullable=False)
    token_instance: Mapped[str] = mapped_column(String(100), default="0")
    transaction_id: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[RecordStatus] = mapped_column(
        String(20), default=RecordStatus.PENDING, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "walletAddress": self.wallet_address,
            "collection": self.collection,
            "type": self.type,
            "category": self.category,
            "additionalKey": self.additional_key,
            "owner": self.owner,
            "quantity": self.quantity,
            "tokenInstance": self.token_instance,
            "transactionId": self.transaction_id,
            "status": _status(self.status),
            "createdAt": _iso(self.created_at),
        }


class User(Base):
    """A wallet that has connected to the backend."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    wallet_address: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    gem_balance: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "walletAddress": self.wallet_address,
            "gemBalance": self.gem_balance,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


class BurnTransaction(Base):
    """A GALA burn relayed for a wallet, kept whether or not the chain accepted it.

    Not tied to ``users`` by a foreign key: a rejected burn is stored even
    for a wallet that never connected.
    """

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_wallet_address: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    gala_amount: Mapped[Decimal] = mapped_column(Numeric(10, 6), nullable=False)
    transaction_id: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[RecordStatus] = mapped_column(
        String(20), default=RecordStatus.PENDING, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userWalletAddress": self.user_wallet_address,
            "galaAmount": float(self.gala_amount),
            "transactionId": self.transaction_id,
            "status": _status(self.status),
            "createdAt": _iso(self.created_at),
        }
