"""Fee extraction from GalaChain DryRun responses.

The dry-run response lists simulated ledger writes under ``Data.writes``.
The fee write is keyed ``\\0GCFTU\\0{method}\\0{user}\\0``, but the exact key
layout is not documented and varies, so the lookup degrades from an exact
match to a prefix match to a bare ``GCFTU`` substring match.
"""

import json
import logging
from typing import Any, Iterator, Optional

logger = logging.getLogger(__name__)

FEE_MARKER = "GCFTU"
FEE_FIELD = "cumulativeFeeQuantity"
NO_FEE = "0"


def fee_key(method: str, user_address: str) -> str:
    """Exact write key of the fee record for a method/user pair."""
    return f"\0{FEE_MARKER}\0{method}\0{user_address}\0"


def fee_key_prefix(method: str) -> str:
    return f"\0{FEE_MARKER}\0{method}\0"


def _decode(value: Any) -> Any:
    """Write records may arrive JSON-encoded; a bad encoding raises ValueError."""
    return json.loads(value) if isinstance(value, str) else value


def _fee_of(value: Any) -> Optional[str]:
    record = _decode(value)
    if not isinstance(record, dict):
        return None
    fee = record.get(FEE_FIELD)
    return str(fee) if fee else None


def _candidates(writes: dict, method: str) -> Iterator[str]:
    prefix = fee_key_prefix(method)
    for key in writes:
        if key.startswith(prefix):
            yield key
    for key in writes:
        if FEE_MARKER in key:
            yield key


def extract_fee(dry_run_response: Any, method: str, user_address: str) -> str:
    """Return the estimated fee as a string, or "0" when none can be found.

    Never raises: an unreadable response degrades to "0".
    """
    try:
        data = dry_run_response.get("Data") if isinstance(dry_run_response, dict) else None
        writes = data.get("writes") if isinstance(data, dict) else None
        if not isinstance(writes, dict) or not writes:
            return NO_FEE

        exact = fee_key(method, user_address)
        if exact in writes:
            return _fee_of(writes[exact]) or NO_FEE

        for key in _candidates(writes, method):
            fee = _fee_of(writes[key])
            if fee:
                return fee
    except (ValueError, TypeError, AttributeError) as e:
        # json.JSONDecodeError is a ValueError
        logger.warning(f"Could not extract fee from DryRun response for {method}: {e}")

    return NO_FEE
