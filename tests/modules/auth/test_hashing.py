"""Tests for the bcrypt credential hasher."""

import pytest
from unittest.mock import patch

from modules.auth.exceptions import HashingError
from modules.auth.hashing import BcryptHasher, DEFAULT_ROUNDS
from modules.auth.interfaces import ICredentialHasher


@pytest.fixture
def hasher() -> BcryptHasher:
    """Minimum cost factor keeps the suite fast."""
    return BcryptHasher(rounds=4)


class TestBcryptHasher:
    def test_implements_interface(self, hasher):
        """BcryptHasher should satisfy ICredentialHasher."""
        assert isinstance(hasher, ICredentialHasher)

    def test_default_rounds(self):
        """Default cost factor should be 12."""
        assert DEFAULT_ROUNDS == 12
        assert BcryptHasher().rounds == 12

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_rejects_out_of_range_rounds(self, rounds):
        """Cost factor outside bcrypt's range should be rejected."""
        with pytest.raises(ValueError):
            BcryptHasher(rounds=rounds)

    def test_hash_is_not_plaintext(self, hasher):
        """The hash should not contain the password."""
        password_hash = hasher.hash("correct horse battery")
        assert "correct horse battery" not in password_hash
        assert password_hash.startswith("$2")

    def test_hash_records_cost_factor(self, hasher):
        """The hash should embed the configured cost factor."""
        password_hash = hasher.hash("password123")
        assert password_hash.split("$")[2] == "04"

    def test_hash_is_salted(self, hasher):
        """Hashing the same password twice should give different hashes."""
        assert hasher.hash("password123") != hasher.hash("password123")

    def test_verify_correct_password(self, hasher):
        """verify should accept the original password."""
        password_hash = hasher.hash("password123")
        assert hasher.verify("password123", password_hash) is True

    def test_verify_wrong_password(self, hasher):
        """verify should reject a different password."""
        password_hash = hasher.hash("password123")
        assert hasher.verify("password124", password_hash) is False

    def test_verify_unicode_password(self, hasher):
        """Non-ASCII passwords should round-trip."""
        password_hash = hasher.hash("pässwörd✓")
        assert hasher.verify("pässwörd✓", password_hash) is True

    def test_verify_malformed_hash_returns_false(self, hasher):
        """A malformed stored hash should be a mismatch, not an error."""
        assert hasher.verify("password123", "not-a-bcrypt-hash") is False

    def test_hash_failure_raises_hashing_error(self, hasher):
        """Errors from bcrypt should surface as HashingError."""
        with patch("modules.auth.hashing.bcrypt.hashpw", side_effect=ValueError("boom")):
            with pytest.raises(HashingError) as exc_info:
                hasher.hash("password123")

        assert exc_info.value.code == "HASHING_FAILED"
        assert exc_info.value.to_client_dict()["message"] == "Internal server error"
