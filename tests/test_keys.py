"""Tests for unique keys and DTO expirations."""

import re

from galamint.gateway.keys import (
    expiration_timestamp,
    fallback_transaction_id,
    generate_unique_key,
    signing_deadline,
)

NOW = 1_700_000_000.0


class TestUniqueKeys:
    """Tests for unique key generation."""

    def test_key_format(self):
        """Key is prefix, epoch milliseconds and nine base-36 characters."""
        key = generate_unique_key("auth", now=NOW)

        assert re.fullmatch(r"auth-1700000000000-[0-9a-z]{9}", key)

    def test_default_prefix(self):
        """Default prefix is tx."""
        assert generate_unique_key().startswith("tx-")

    def test_keys_differ_at_same_instant(self):
        """Keys generated in the same millisecond are still distinct."""
        keys = {generate_unique_key("mint", now=NOW) for _ in range(50)}

        assert len(keys) == 50

    def test_fallback_transaction_id(self):
        """Fallback id is prefix and epoch milliseconds."""
        assert fallback_transaction_id("sync", now=NOW) == "sync-1700000000000"


class TestExpirations:
    """Tests for DTO expiry values."""

    def test_submission_expiry_in_seconds(self):
        """Backend-submitted DTOs expire one hour and ten seconds out."""
        assert expiration_timestamp(now=NOW + 0.7) == 1_700_003_610

    def test_signing_deadline_in_milliseconds(self):
        """Client-signed DTOs expire sixty seconds out, in milliseconds."""
        assert signing_deadline(now=NOW) == 1_700_000_060_000
