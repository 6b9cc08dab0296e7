"""Domain services for collections, token classes, mints, wallets and burns.

Every mutating chain operation is two-phase: without a signature the
service returns the DTO for the wallet to sign; with one it relays the
signed DTO to GalaChain and stores the resulting record. Burns accept
signed DTOs only.
"""

from galamint.web.services.collection_service import CollectionService
from galamint.web.services.mint_service import MintService
from galamint.web.services.token_class_service import TokenClassService
from galamint.web.services.transaction_service import TransactionService
from galamint.web.services.wallet_service import WalletService

__all__ = [
    "CollectionService",
    "TokenClassService",
    "MintService",
    "WalletService",
    "TransactionService",
]
