"""Two-phase submission intents.

A mutating request either asks for an unsigned DTO to sign in the wallet,
or carries the signed DTO to relay. Controllers build the intent once; the
services dispatch on its type.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class Unsigned:
    """Build and return the DTO; nothing is submitted or stored."""


@dataclass(frozen=True)
class Signed:
    """Relay ``payload`` verbatim to the gateway, then store the record."""

    payload: dict


Intent = Union[Unsigned, Signed]


def intent_from(signed_payload: Optional[Any]) -> Intent:
    """Map an optional signed payload from a request body to an intent."""
    if signed_payload is not None:
        return Signed(payload=signed_payload)
    return Unsigned()
