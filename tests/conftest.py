"""Pytest configuration and fixtures."""

import json
import os
from typing import Any, AsyncGenerator, Optional

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["GALACHAIN_API"] = "http://gateway.test/api/token"
os.environ["API_PREFIX"] = "api"
os.environ["DEBUG"] = "false"

from galamint.gateway.client import GalaChainClient
from galamint.records.models import Base
from galamint.records.repository import RecordRepository

WALLET = "client|wallet-one"
OTHER_WALLET = "client|wallet-two"


class ChainStub:
    """GalaChain gateway stand-in served through httpx.MockTransport.

    Responses are configured per method; every request is recorded with
    its decoded JSON body.
    """

    DEFAULT = {"Status": 1, "Data": []}

    def __init__(self, base_url: str = "http://gateway.test/api/token"):
        self.base_url = base_url
        self.responses: dict[str, tuple[int, Any]] = {}
        self.errors: dict[str, Exception] = {}
        self.requests: list[httpx.Request] = []
        self.client = GalaChainClient(base_url, transport=httpx.MockTransport(self.handle))

    def respond(self, method: str, payload: Any, status_code: int = 200) -> None:
        self.responses[method] = (status_code, payload)

    def fail(self, method: str, status_code: int = 500, text: str = "upstream failure") -> None:
        self.responses[method] = (status_code, text)

    def unreachable(self, method: str) -> None:
        self.errors[method] = httpx.ConnectError("connection refused")

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method = request.url.path.rsplit("/", 1)[-1]

        if method in self.errors:
            raise self.errors[method]

        status_code, payload = self.responses.get(method, (200, self.DEFAULT))
        if isinstance(payload, str):
            return httpx.Response(status_code, text=payload)
        return httpx.Response(status_code, json=payload)

    def calls(self, method: str) -> list[Any]:
        """Decoded bodies of every request made to ``method``."""
        return [
            json.loads(r.content)
            for r in self.requests
            if r.url.path.rsplit("/", 1)[-1] == method
        ]

    def last(self, method: str) -> Optional[Any]:
        calls = self.calls(method)
        return calls[-1] if calls else None


@pytest_asyncio.fixture
async def db_engine():
    """Create in-memory database engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for testing."""
    session_factory = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def repo(db_session: AsyncSession) -> RecordRepository:
    """Create record repository for testing."""
    return RecordRepository(db_session)


@pytest.fixture
def chain() -> ChainStub:
    """Gateway stub; ``chain.client`` is a real GalaChainClient bound to it."""
    return ChainStub()
