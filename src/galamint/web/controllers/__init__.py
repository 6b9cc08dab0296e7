"""HTTP controllers for the collection, token class, mint, wallet and burn endpoints."""

from galamint.web.controllers.collections import router as collections_router
from galamint.web.controllers.mint import router as mint_router
from galamint.web.controllers.token_classes import router as token_classes_router
from galamint.web.controllers.transactions import router as transactions_router
from galamint.web.controllers.wallet import router as wallet_router

__all__ = [
    "collections_router",
    "token_classes_router",
    "mint_router",
    "wallet_router",
    "transactions_router",
]
