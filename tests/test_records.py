"""Tests for the record repository."""

from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from galamint.records.database import async_url
from galamint.records.models import RecordStatus, User
from galamint.records.repository import InvalidStatusTransition, RecordRepository

WALLET = "client|wallet-one"
OTHER_WALLET = "client|wallet-two"


class TestCollections:
    """Tests for collection records."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, repo: RecordRepository, db_session):
        """Stored collections are found by name and serialize to camelCase."""
        await repo.create_collection("Dragons", WALLET, "tx-1", description="Fire")
        await db_session.commit()

        collection = await repo.get_collection("Dragons")

        assert collection is not None
        data = collection.to_dict()
        assert data["collectionName"] == "Dragons"
        assert data["walletAddress"] == WALLET
        assert data["transactionId"] == "tx-1"
        assert data["description"] == "Fire"
        assert data["status"] == "completed"
        assert data["createdAt"] is not None

    @pytest.mark.asyncio
    async def test_name_is_unique(self, repo: RecordRepository):
        """A name can be stored only once, whatever the wallet."""
        await repo.create_collection("Dragons", WALLET, "tx-1")

        with pytest.raises(IntegrityError):
            await repo.create_collection("Dragons", OTHER_WALLET, "tx-2")

    @pytest.mark.asyncio
    async def test_find_claimed_by_wallet(self, repo: RecordRepository):
        """Claimed lookup matches both name and wallet."""
        await repo.create_collection("Dragons", WALLET, "tx-1")

        assert await repo.find_claimed_collection("Dragons", WALLET) is not None
        assert await repo.find_claimed_collection("Dragons", OTHER_WALLET) is None

    @pytest.mark.asyncio
    async def test_list_newest_first(self, repo: RecordRepository):
        """Listing is scoped to the wallet, newest first."""
        await repo.create_collection("First", WALLET, "tx-1")
        await repo.create_collection("Second", WALLET, "tx-2")
        await repo.create_collection("Elsewhere", OTHER_WALLET, "tx-3")

        names = [c.collection_name for c in await repo.list_collections(WALLET)]

        assert names == ["Second", "First"]


class TestTokenClasses:
    """Tests for token class records."""

    @pytest.mark.asyncio
    async def test_additional_key_defaults_to_none_string(self, repo: RecordRepository):
        """A missing additional key is stored and matched as "none"."""
        created = await repo.create_token_class("Dragons", "Fire", "Item", WALLET, "tx-1")

        assert created.additional_key == "none"
        assert created.current_supply == "0"
        found = await repo.get_token_class("Dragons", "Fire", "Item")
        assert found is not None
        assert found.id == created.id
        assert found.natural_key == ("Dragons", "Fire", "Item", "none")

    @pytest.mark.asyncio
    async def test_natural_key_is_unique(self, repo: RecordRepository):
        """The four-part key can be stored only once."""
        await repo.create_token_class("Dragons", "Fire", "Item", WALLET, "tx-1", "none")

        with pytest.raises(IntegrityError):
            await repo.create_token_class("Dragons", "Fire", "Item", WALLET, "tx-2")

    @pytest.mark.asyncio
    async def test_distinct_additional_keys(self, repo: RecordRepository):
        """Classes differing only by additional key coexist."""
        await repo.create_token_class("Dragons", "Fire", "Item", WALLET, "tx-1", "gold")
        await repo.create_token_class("Dragons", "Fire", "Item", WALLET, "tx-2", "silver")

        classes = await repo.list_token_classes_for_collection("Dragons")

        assert {tc.additional_key for tc in classes} == {"gold", "silver"}

    @pytest.mark.asyncio
    async def test_update_supply(self, repo: RecordRepository):
        """Supply refresh keeps the image when none is given."""
        tc = await repo.create_token_class(
            "Dragons", "Fire", "Item", WALLET, "tx-1", image="https://img/1.png"
        )

        await repo.update_token_class_supply(tc, current_supply="25", image=None)

        assert tc.current_supply == "25"
        assert tc.image == "https://img/1.png"

    @pytest.mark.asyncio
    async def test_pending_to_completed(self, repo: RecordRepository):
        """Pending classes complete and take the new transaction id."""
        tc = await repo.create_token_class(
            "Dragons", "Fire", "Item", WALLET, "tx-1", status=RecordStatus.PENDING
        )

        await repo.set_token_class_status(tc, RecordStatus.COMPLETED, transaction_id="tx-2")

        assert tc.status == RecordStatus.COMPLETED
        assert tc.transaction_id == "tx-2"

    @pytest.mark.asyncio
    async def test_terminal_status_is_final(self, repo: RecordRepository):
        """Completed classes never change status again."""
        tc = await repo.create_token_class("Dragons", "Fire", "Item", WALLET, "tx-1")

        with pytest.raises(InvalidStatusTransition):
            await repo.set_token_class_status(tc, RecordStatus.FAILED)


class TestMintTransactions:
    """Tests for the mint log."""

    @pytest.mark.asyncio
    async def test_list_by_initiating_wallet(self, repo: RecordRepository):
        """Mints are listed by the wallet that initiated them."""
        await repo.create_mint_transaction(
            WALLET, "Dragons", "Fire", "Item", OTHER_WALLET, "3", "tx-1", "none"
        )
        await repo.create_mint_transaction(
            OTHER_WALLET, "Dragons", "Fire", "Item", WALLET, "1", "tx-2", "none"
        )

        transactions = await repo.list_mint_transactions(WALLET)

        assert len(transactions) == 1
        data = transactions[0].to_dict()
        assert data["owner"] == OTHER_WALLET
        assert data["quantity"] == "3"
        assert data["tokenInstance"] == "0"
        assert data["status"] == "completed"


class TestUsers:
    """Tests for user records."""

    @pytest.mark.asyncio
    async def test_find_or_create_is_idempotent(self, repo: RecordRepository):
        created = await repo.find_or_create_user(WALLET)
        found = await repo.find_or_create_user(WALLET)

        assert created.id == found.id
        assert created.to_dict()["gemBalance"] == 0

    @pytest.mark.asyncio
    async def test_wallet_is_unique(self, repo: RecordRepository, db_session):
        await repo.find_or_create_user(WALLET)
        db_session.add(User(wallet_address=WALLET))

        with pytest.raises(IntegrityError):
            await db_session.flush()


class TestBurnTransactions:
    """Tests for the burn history."""

    @pytest.mark.asyncio
    async def test_amount_keeps_six_decimals(self, repo: RecordRepository):
        transaction = await repo.create_burn_transaction(WALLET, Decimal("0.123456"), "tx-1")

        data = transaction.to_dict()
        assert data["galaAmount"] == 0.123456
        assert data["userWalletAddress"] == WALLET
        assert data["status"] == "completed"


class TestDatabaseUrl:
    """Tests for the async driver URL upgrade."""

    def test_plain_sqlite_uses_aiosqlite(self):
        assert async_url("sqlite:///./data/galamint.db") == "sqlite+aiosqlite:///./data/galamint.db"

    def test_async_url_unchanged(self):
        url = "sqlite+aiosqlite:///:memory:"
        assert async_url(url) == url
        assert async_url("postgresql+asyncpg://db/galamint") == "postgresql+asyncpg://db/galamint"
