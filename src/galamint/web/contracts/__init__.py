"""Request and response contracts for the web layer.

These Pydantic models define the API interface for web clients.
"""

from galamint.web.contracts.collections import (
    ClaimCollectionRequest,
    ClaimCollectionResponse,
    CollectionListResponse,
    CollectionResponse,
    FeeEstimateResponse,
)
from galamint.web.contracts.mint import (
    MintFields,
    MintTokensRequest,
    MintTokensResponse,
    MintTransactionListResponse,
)
from galamint.web.contracts.token_classes import (
    CreateTokenClassRequest,
    CreateTokenClassResponse,
    TokenClassFields,
    TokenClassListResponse,
)
from galamint.web.contracts.transactions import (
    BurnRequest,
    BurnResponse,
    TransactionHistoryResponse,
)
from galamint.web.contracts.wallet import ConnectWalletRequest, ConnectWalletResponse

__all__ = [
    # Collection contracts
    "ClaimCollectionRequest",
    "ClaimCollectionResponse",
    "CollectionListResponse",
    "CollectionResponse",
    "FeeEstimateResponse",
    # Token class contracts
    "TokenClassFields",
    "CreateTokenClassRequest",
    "CreateTokenClassResponse",
    "TokenClassListResponse",
    # Mint contracts
    "MintFields",
    "MintTokensRequest",
    "MintTokensResponse",
    "MintTransactionListResponse",
    # Wallet contracts
    "ConnectWalletRequest",
    "ConnectWalletResponse",
    # Burn contracts
    "BurnRequest",
    "BurnResponse",
    "TransactionHistoryResponse",
]
