"""Tests for gateway DTO builders."""

import json

from galamint.gateway.dtos import (
    GALACHAIN_TOKEN_CONTRACT,
    create_collection_dto,
    dry_run_dto,
    grant_authorization_dto,
    mint_dto,
    to_json,
    token_class_key,
)

WALLET = "client|wallet-one"


class TestDtoShapes:
    """Tests for DTO field layout."""

    def test_grant_authorization(self):
        """Grant DTO fields and order."""
        dto = grant_authorization_dto(WALLET, "Dragons", "auth-1-abc", 123)

        assert list(dto) == ["authorizedUser", "collection", "dtoExpiresAt", "uniqueKey"]
        assert dto["authorizedUser"] == WALLET

    def test_create_collection_key_order(self):
        """CreateNftCollection keys keep the wire order."""
        dto = create_collection_dto(
            collection="Dragons",
            authorities=[WALLET],
            unique_key="create-1-abc",
            expires_at=123,
        )

        assert list(dto) == [
            "collection", "authorities", "category", "type", "additionalKey",
            "name", "description", "image", "symbol", "rarity", "maxSupply",
            "maxCapacity", "metadataAddress", "contractAddress", "dtoExpiresAt",
            "uniqueKey",
        ]
        assert dto["contractAddress"] == GALACHAIN_TOKEN_CONTRACT

    def test_token_class_key_without_additional_key(self):
        """A missing additional key is omitted, not sent as null."""
        assert token_class_key("Dragons", "Fire", "Item") == {
            "collection": "Dragons",
            "type": "Fire",
            "category": "Item",
        }

    def test_mint_nested_expiry(self):
        """The nested token class carries the same expiry."""
        dto = mint_dto(
            owner=WALLET,
            quantity="3",
            token_class=token_class_key("Dragons", "Fire", "Item", "none"),
            unique_key="mint-1-abc",
            expires_at=456,
        )

        assert dto["tokenClass"]["dtoExpiresAt"] == 456
        assert dto["tokenClass"]["additionalKey"] == "none"
        assert dto["tokenInstance"] == "0"
        assert dto["dtoExpiresAt"] == 456


class TestDryRun:
    """Tests for DryRun wrapping."""

    def test_signer_from_owner(self):
        """Mint dry runs simulate as the owner."""
        body = dry_run_dto("MintTokenWithAllowance", {"owner": WALLET, "quantity": "1"})

        assert body["method"] == "MintTokenWithAllowance"
        assert body["signerAddress"] == WALLET
        assert json.loads(body["dto"]) == {"owner": WALLET, "quantity": "1"}

    def test_signer_from_authorities(self):
        """Create dry runs simulate as the first authority."""
        body = dry_run_dto("CreateNftCollection", {"authorities": [WALLET, "client|b"]})

        assert body["signerAddress"] == WALLET

    def test_no_signer(self):
        """No signer field when the DTO names nobody."""
        body = dry_run_dto("CreateNftCollection", {"authorities": []})

        assert "signerAddress" not in body

    def test_string_dto_passes_through(self):
        """A DTO that is already serialized is sent unchanged."""
        raw = '{"authorizedUser":"client|wallet-one"}'
        body = dry_run_dto("GrantNftCollectionAuthorization", raw)

        assert body["dto"] == raw
        assert body["signerAddress"] == WALLET

    def test_compact_json(self):
        """Serialization has no whitespace and keeps non-ASCII text."""
        assert to_json({"a": 1, "b": "é"}) == '{"a":1,"b":"é"}'
