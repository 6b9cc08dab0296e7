"""Tests for the FastAPI endpoints."""

import json

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from galamint.api.app import create_app
from galamint.gateway.client import get_gateway
from galamint.gateway.fees import fee_key
from galamint.records.database import close_db, get_session
from galamint.records.repository import RecordRepository

WALLET = "client|wallet-one"
OTHER_WALLET = "client|wallet-two"


@pytest.fixture
async def session_factory(db_engine):
    return async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_app(session_factory, chain):
    """Create test application bound to the test database and gateway stub."""

    async def override_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_gateway] = lambda: chain.client

    yield app

    # Cleanup
    await close_db()


@pytest.fixture
async def client(test_app):
    """Create async test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def claimed(session_factory):
    """Store a collection claimed by WALLET."""
    async with session_factory() as session:
        await RecordRepository(session).create_collection("Dragons", WALLET, "tx-claim")
        await session.commit()


def token_class_body(**overrides) -> dict:
    body = {
        "walletAddress": WALLET,
        "collection": "Dragons",
        "type": "Fire",
        "category": "Item",
        "description": "Fire dragons",
        "image": "https://img/dragon.png",
        "symbol": "ABC",
        "rarity": "Rare",
        "maxSupply": "1000",
        "maxCapacity": "1000",
    }
    body.update(overrides)
    return body


def mint_body(**overrides) -> dict:
    body = {
        "walletAddress": WALLET,
        "collection": "Dragons",
        "type": "Fire",
        "category": "Item",
        "owner": OTHER_WALLET,
        "quantity": "1",
    }
    body.update(overrides)
    return body


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.asyncio
    async def test_health_check(self, client):
        """Health reports the database as up, with and without the prefix."""
        for path in ("/health", "/api/health"):
            response = await client.get(path)

            assert response.status_code == 200
            assert response.json() == {"status": "ok", "info": {"database": {"status": "up"}}}

    @pytest.mark.asyncio
    async def test_health_database_down(self, client, monkeypatch):
        """Health answers 503 when the database does not respond."""

        async def failing_ping():
            raise OperationalError("SELECT 1", {}, Exception("unable to open database"))

        monkeypatch.setattr("galamint.api.routes.health.ping_db", failing_ping)

        response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "error"
        assert response.json()["info"]["database"]["status"] == "down"

    @pytest.mark.asyncio
    async def test_detailed_health(self, client):
        """Detailed health includes the redacted configuration."""
        response = await client.get("/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["config"]["environment"] == "test"
        assert data["config"]["api_prefix"] == "/api"


class TestCollectionEndpoints:
    """Tests for collection endpoints."""

    @pytest.mark.asyncio
    async def test_claim_unsigned(self, client):
        """An unsigned claim returns the DTO to sign."""
        response = await client.post(
            "/api/collections/claim",
            json={"collection": "Dragons", "walletAddress": WALLET},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["collection"] is None
        assert data["unsignedAuthDto"]["authorizedUser"] == WALLET
        assert data["unsignedAuthDto"]["collection"] == "Dragons"

    @pytest.mark.asyncio
    async def test_claim_signed_then_duplicate(self, client, chain):
        """A signed claim is stored; claiming again answers 400."""
        chain.respond("GrantNftCollectionAuthorization", {"Status": 1, "transactionId": "tx-1"})
        body = {
            "collection": "Dragons",
            "walletAddress": WALLET,
            "signedAuthorization": {"collection": "Dragons", "signature": "0xsig"},
        }

        first = await client.post("/api/collections/claim", json=body)
        second = await client.post("/api/collections/claim", json=body)

        assert first.status_code == 200
        assert first.json()["collection"]["collectionName"] == "Dragons"
        assert first.json()["transactionId"] == "tx-1"
        assert second.status_code == 400
        assert second.json()["detail"] == "You have already claimed this collection"

    @pytest.mark.asyncio
    async def test_claim_gateway_error(self, client, chain):
        """A gateway rejection answers 500 with the gateway message."""
        chain.fail("GrantNftCollectionAuthorization", status_code=400, text="bad signature")

        response = await client.post(
            "/api/collections/claim",
            json={
                "collection": "Dragons",
                "walletAddress": WALLET,
                "signedAuthorization": {"signature": "0x0"},
            },
        )

        assert response.status_code == 500
        assert response.json()["detail"] == "GalaChain API error: 400 - bad signature"

    @pytest.mark.asyncio
    async def test_claim_requires_wallet(self, client):
        """Request bodies are validated."""
        response = await client.post("/api/collections/claim", json={"collection": "Dragons"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_syncs_from_chain(self, client, chain):
        """Listing stores grants found on chain."""
        chain.respond(
            "FetchNftCollectionAuthorizationsWithPagination",
            {"Data": [{"collection": "Knights", "authorizedUser": WALLET}]},
        )

        response = await client.get(f"/api/collections/{WALLET}")

        assert response.status_code == 200
        names = [c["collectionName"] for c in response.json()["collections"]]
        assert names == ["Knights"]

    @pytest.mark.asyncio
    async def test_list_when_gateway_down(self, client, chain, claimed):
        """Listing falls back to stored collections."""
        chain.unreachable("FetchNftCollectionAuthorizationsWithPagination")

        response = await client.get(f"/api/collections/{WALLET}")

        assert response.status_code == 200
        assert [c["collectionName"] for c in response.json()["collections"]] == ["Dragons"]

    @pytest.mark.asyncio
    async def test_single(self, client, claimed):
        """A single collection is found by name."""
        response = await client.get("/api/collections/single/Dragons")

        assert response.status_code == 200
        assert response.json()["collection"]["walletAddress"] == WALLET

    @pytest.mark.asyncio
    async def test_single_missing(self, client):
        """Unknown names answer 404."""
        response = await client.get("/api/collections/single/Nope")

        assert response.status_code == 404
        assert response.json()["detail"] == "Collection not found"

    @pytest.mark.asyncio
    async def test_estimate_fee(self, client, chain):
        """The claim fee comes from the dry run."""
        chain.respond(
            "DryRun",
            {
                "Data": {
                    "writes": {
                        fee_key("GrantNftCollectionAuthorization", WALLET): json.dumps(
                            {"cumulativeFeeQuantity": "1"}
                        )
                    }
                }
            },
        )

        response = await client.post(
            "/api/collections/estimate-fee",
            json={"collection": "Dragons", "walletAddress": WALLET},
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "estimatedFee": "1"}

    @pytest.mark.asyncio
    async def test_estimate_fee_for_address(self, client, chain):
        """The address-only estimate uses a placeholder collection."""
        response = await client.get(f"/api/collections/estimate-fee/{WALLET}")

        assert response.status_code == 200
        assert response.json()["estimatedFee"] == "0"
        dto = json.loads(chain.last("DryRun")["dto"])
        assert dto["collection"] == "DUMMY"
        assert dto["authorizedUser"] == WALLET


class TestTokenClassEndpoints:
    """Tests for token class endpoints."""

    @pytest.mark.asyncio
    async def test_create_unsigned(self, client, claimed):
        """A valid definition returns the create DTO."""
        response = await client.post("/api/token-classes/create", json=token_class_body())

        assert response.status_code == 200
        dto = response.json()["unsignedCreateDto"]
        assert dto["symbol"] == "ABC"
        assert dto["additionalKey"] == "none"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("symbol", ["AB1", "ab-c"])
    async def test_create_rejects_symbol(self, client, claimed, symbol):
        """Symbols must be letters only."""
        response = await client.post(
            "/api/token-classes/create", json=token_class_body(symbol=symbol)
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Symbol must contain only letters (a-z, A-Z)"

    @pytest.mark.asyncio
    async def test_create_missing_fields(self, client, claimed):
        """Required fields are enforced before anything else."""
        body = token_class_body()
        del body["maxCapacity"]

        response = await client.post("/api/token-classes/create", json=body)

        assert response.status_code == 400
        assert "Missing required fields" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_create_not_owner(self, client, claimed):
        """Another wallet cannot create classes in the collection."""
        response = await client.post(
            "/api/token-classes/create", json=token_class_body(walletAddress=OTHER_WALLET)
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "You do not own this collection"

    @pytest.mark.asyncio
    async def test_create_signed_then_list(self, client, chain, claimed):
        """A signed create is stored and listed for the wallet and collection."""
        chain.respond("CreateNftCollection", {"Status": 1, "transactionId": "tx-create"})
        chain.respond("FetchTokenClassesWithSupply", {"Data": [{"totalSupply": "5"}]})

        created = await client.post(
            "/api/token-classes/create",
            json=token_class_body(signedTransaction={"signature": "0x1"}),
        )
        by_wallet = await client.get(f"/api/token-classes/user/{WALLET}")
        by_collection = await client.get("/api/token-classes/collection/Dragons")

        assert created.status_code == 200
        assert created.json()["tokenClass"]["currentSupply"] == "0"
        assert by_wallet.json()["tokenClasses"][0]["currentSupply"] == "5"
        assert by_collection.json()["tokenClasses"][0]["transactionId"] == "tx-create"

    @pytest.mark.asyncio
    async def test_estimate_fee_for_address(self, client, chain):
        """The address-only estimate signs as the given address."""
        response = await client.get(f"/api/token-classes/estimate-fee/{WALLET}")

        assert response.status_code == 200
        assert chain.last("DryRun")["signerAddress"] == WALLET


class TestMintEndpoints:
    """Tests for mint endpoints."""

    @pytest.mark.asyncio
    async def test_mint_without_class(self, client):
        """Minting an unknown class answers 400."""
        response = await client.post("/api/mint/tokens", json=mint_body())

        assert response.status_code == 400
        assert response.json()["detail"] == (
            "Token class not found. Please create the token class first."
        )

    @pytest.mark.asyncio
    async def test_mint_signed_then_list(self, client, chain, session_factory):
        """A signed mint is logged under the initiating wallet."""
        async with session_factory() as session:
            await RecordRepository(session).create_token_class(
                "Dragons", "Fire", "Item", WALLET, "tx-class"
            )
            await session.commit()
        chain.respond("MintTokenWithAllowance", {"Status": 1, "transactionId": "tx-mint"})

        minted = await client.post(
            "/api/mint/tokens", json=mint_body(signedTransaction={"signature": "0x1"})
        )
        listed = await client.get(f"/api/mint/transactions/{WALLET}")

        assert minted.status_code == 200
        assert minted.json()["transactionId"] == "tx-mint"
        transactions = listed.json()["transactions"]
        assert len(transactions) == 1
        assert transactions[0]["owner"] == OTHER_WALLET

    @pytest.mark.asyncio
    async def test_estimate_fee_for_address(self, client, chain):
        """The address-only estimate mints one placeholder token to the address."""
        response = await client.get(f"/api/mint/estimate-fee/{WALLET}")

        assert response.status_code == 200
        dto = json.loads(chain.last("DryRun")["dto"])
        assert dto["owner"] == WALLET
        assert dto["quantity"] == "1"
        assert dto["tokenClass"]["additionalKey"] == "none"


class TestWalletEndpoints:
    """Tests for wallet endpoints."""

    @pytest.mark.asyncio
    async def test_connect(self, client, session_factory):
        response = await client.post("/api/wallet/connect", json={"walletAddress": WALLET})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Wallet connected successfully"
        assert data["walletAddress"] == WALLET
        async with session_factory() as session:
            assert await RecordRepository(session).get_user(WALLET) is not None

    @pytest.mark.asyncio
    async def test_connect_invalid_address(self, client):
        response = await client.post("/api/wallet/connect", json={"walletAddress": "nobody"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid wallet address format"


class TestTransactionEndpoints:
    """Tests for burn endpoints."""

    @pytest.mark.asyncio
    async def test_burn_then_history(self, client, chain):
        """An accepted burn shows up in the wallet's history."""
        chain.respond("BurnTokens", {"Status": 1, "transactionId": "tx-burn"})

        burned = await client.post(
            "/api/transactions/burn",
            json={
                "signedTransaction": {"signature": "0x1"},
                "galaAmount": 1.5,
                "walletAddress": WALLET,
            },
        )
        history = await client.get(f"/api/transactions/history/{WALLET}")

        assert burned.status_code == 200
        assert burned.json()["transactionId"] == "tx-burn"
        assert burned.json()["message"] == "Transaction processed successfully"
        transactions = history.json()["transactions"]
        assert len(transactions) == 1
        assert transactions[0]["galaAmount"] == 1.5
        assert transactions[0]["status"] == "completed"

    @pytest.mark.asyncio
    async def test_burn_non_positive_amount(self, client):
        response = await client.post(
            "/api/transactions/burn",
            json={"signedTransaction": {}, "galaAmount": 0, "walletAddress": WALLET},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Amount must be positive"

    @pytest.mark.asyncio
    async def test_burn_requires_signed_transaction(self, client):
        response = await client.post(
            "/api/transactions/burn", json={"galaAmount": 1, "walletAddress": WALLET}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_rejected_burn_kept_in_history(self, client, chain):
        """The failed row survives the request's rollback."""
        chain.fail("BurnTokens", status_code=400, text="insufficient balance")

        burned = await client.post(
            "/api/transactions/burn",
            json={
                "signedTransaction": {"signature": "0x1"},
                "galaAmount": 2,
                "walletAddress": WALLET,
            },
        )
        history = await client.get(f"/api/transactions/history/{WALLET}")

        assert burned.status_code == 400
        assert burned.json()["detail"] == "GalaChain transaction failed"
        transactions = history.json()["transactions"]
        assert len(transactions) == 1
        assert transactions[0]["status"] == "failed"
        assert transactions[0]["transactionId"].startswith("failed-")

    @pytest.mark.asyncio
    async def test_history_invalid_address(self, client):
        response = await client.get("/api/transactions/history/nobody")

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid wallet address"
