"""FastAPI dependencies shared by the controllers."""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from galamint.errors import ServiceError
from galamint.gateway.client import GalaChainClient, get_gateway
from galamint.records.database import get_session
from galamint.records.repository import RecordRepository
from galamint.web.services import (
    CollectionService,
    MintService,
    TokenClassService,
    TransactionService,
    WalletService,
)

logger = logging.getLogger(__name__)


def get_repository(session: AsyncSession = Depends(get_session)) -> RecordRepository:
    return RecordRepository(session)


def get_collection_service(
    repo: RecordRepository = Depends(get_repository),
    gateway: GalaChainClient = Depends(get_gateway),
) -> CollectionService:
    return CollectionService(repo, gateway)


def get_token_class_service(
    repo: RecordRepository = Depends(get_repository),
    gateway: GalaChainClient = Depends(get_gateway),
) -> TokenClassService:
    return TokenClassService(repo, gateway)


def get_mint_service(
    repo: RecordRepository = Depends(get_repository),
    gateway: GalaChainClient = Depends(get_gateway),
) -> MintService:
    return MintService(repo, gateway)


def get_wallet_service(repo: RecordRepository = Depends(get_repository)) -> WalletService:
    return WalletService(repo)


def get_transaction_service(
    repo: RecordRepository = Depends(get_repository),
    gateway: GalaChainClient = Depends(get_gateway),
) -> TransactionService:
    return TransactionService(repo, gateway)


@contextmanager
def http_errors(action: str) -> Iterator[None]:
    """Re-raise service errors as HTTPException with the service's status code."""
    try:
        yield
    except ServiceError as exc:
        if exc.status_code >= 500:
            logger.error(f"{action} failed: {exc.message}")
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
