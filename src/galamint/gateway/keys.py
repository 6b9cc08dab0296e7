"""Unique keys and expiration timestamps for gateway DTOs.

All helpers are pure apart from reading the clock; pass ``now`` (epoch
seconds, float) to pin the time. Values must be regenerated per request.
"""

import secrets
import string
import time
from typing import Optional

# Chain-submission window: one hour plus a buffer for signing and relay delays.
SUBMISSION_TTL_SECONDS = 3600 + 10
# Client-signing window, in milliseconds.
SIGNING_WINDOW_MS = 60_000

_BASE36 = string.digits + string.ascii_lowercase


def _now(now: Optional[float]) -> float:
    return time.time() if now is None else now


def _epoch_ms(now: Optional[float]) -> int:
    return int(_now(now) * 1000)


def generate_unique_key(prefix: str = "tx", now: Optional[float] = None) -> str:
    """Build a unique key like ``auth-1735000000000-k3j9x0a1b``."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"{prefix}-{_epoch_ms(now)}-{suffix}"


def expiration_timestamp(now: Optional[float] = None) -> int:
    """Expiry for DTOs the backend submits itself, in epoch seconds."""
    return int(_now(now)) + SUBMISSION_TTL_SECONDS


def signing_deadline(now: Optional[float] = None) -> int:
    """Expiry for DTOs handed to the client for signing, in epoch milliseconds."""
    return _epoch_ms(now) + SIGNING_WINDOW_MS


def fallback_transaction_id(prefix: str = "tx", now: Optional[float] = None) -> str:
    """Placeholder id used when the gateway response carries no transactionId."""
    return f"{prefix}-{_epoch_ms(now)}"
