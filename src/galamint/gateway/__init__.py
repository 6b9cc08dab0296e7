"""GalaChain gateway client, DTO builders and response decoders."""

from galamint.gateway.client import GalaChainClient, get_gateway
from galamint.gateway.fees import extract_fee

__all__ = [
    "GalaChainClient",
    "get_gateway",
    "extract_fee",
]
