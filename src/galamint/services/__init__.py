"""Background-style services that reconcile local records with the chain."""

from galamint.services.chain_sync import (
    sync_collections_from_chain,
    sync_token_classes_from_chain,
)

__all__ = [
    "sync_collections_from_chain",
    "sync_token_classes_from_chain",
]
