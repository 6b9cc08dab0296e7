"""Helpers shared by the domain services."""

import logging
from contextlib import contextmanager
from typing import Any, Awaitable, Iterator, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from galamint.errors import ConflictError, ServiceError
from galamint.gateway.keys import fallback_transaction_id
from galamint.records.repository import RecordRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


@contextmanager
def store_errors(failure_message: str) -> Iterator[None]:
    """Turn unexpected record-store failures into a generic 500 ServiceError."""
    try:
        yield
    except ServiceError:
        raise
    except SQLAlchemyError as e:
        logger.exception(failure_message)
        raise ServiceError(failure_message) from e


async def insert_unique(
    repo: RecordRepository,
    insert: Awaitable[T],
    conflict_message: str,
) -> T:
    """Await an insert; a unique-constraint violation becomes a ConflictError.

    The store's constraint is authoritative, the service pre-checks are not.
    """
    try:
        return await insert
    except IntegrityError as e:
        await repo.rollback()
        logger.warning(f"{conflict_message}: {e.orig}")
        raise ConflictError(conflict_message) from e


def transaction_id_of(response: Any, prefix: str = "tx") -> str:
    """Gateway-assigned transaction id, or a local ``tx-<ms>`` placeholder."""
    if isinstance(response, dict) and response.get("transactionId"):
        return str(response["transactionId"])
    return fallback_transaction_id(prefix)
