"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from galamint import __version__
from galamint.config import get_settings
from galamint.records.database import close_db, init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    await init_db()
    yield
    # Shutdown
    await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Galamint API",
        description="NFT collection, token class and mint relay for GalaChain",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routes
    from galamint.api.routes import health
    from galamint.web.controllers import (
        collections_router,
        mint_router,
        token_classes_router,
        transactions_router,
        wallet_router,
    )

    prefix = settings.route_prefix

    app.include_router(health.router, tags=["Health"])
    if prefix:
        app.include_router(health.router, prefix=prefix, tags=["Health"])
    app.include_router(collections_router, prefix=prefix)
    app.include_router(token_classes_router, prefix=prefix)
    app.include_router(mint_router, prefix=prefix)
    app.include_router(wallet_router, prefix=prefix)
    app.include_router(transactions_router, prefix=prefix)

    return app


# Default app instance
app = create_app()
