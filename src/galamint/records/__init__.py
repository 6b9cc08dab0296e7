"""Record store for collections, token classes, mints, users and burns."""

from galamint.records.database import get_session, init_db
from galamint.records.models import (
    BurnTransaction,
    Collection,
    MintTransaction,
    RecordStatus,
    TokenClass,
    User,
)
from galamint.records.repository import InvalidStatusTransition, RecordRepository

__all__ = [
    # Models
    "Collection",
    "TokenClass",
    "MintTransaction",
    "User",
    "BurnTransaction",
    # Enums
    "RecordStatus",
    # Database
    "get_session",
    "init_db",
    "RecordRepository",
    "InvalidStatusTransition",
]
