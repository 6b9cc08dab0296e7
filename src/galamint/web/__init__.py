"""Web boundary layer.

Controllers translate HTTP requests into service calls; services never sign
anything. Unsigned DTOs go back to the client, signed DTOs are relayed to
GalaChain as received.
"""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
