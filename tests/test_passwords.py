"""Tests for password hashing."""

import pytest

from mywallet.config import SecuritySettings
from mywallet.security import PasswordHasher, hash_password, verify_password


# Lowest cost bcrypt accepts, to keep the tests quick
ROUNDS = 4


class TestPasswords:
    """Tests for hash_password and verify_password."""

    def test_hash_and_verify(self):
        """Test that the right password verifies and a wrong one does not."""
        hashed = hash_password("correct horse", rounds=ROUNDS)
        assert hashed != "correct horse"
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong horse", hashed)

    def test_salted(self):
        """Test that hashing twice gives different hashes."""
        assert hash_password("secret", rounds=ROUNDS) != hash_password("secret", rounds=ROUNDS)

    def test_cost_in_hash(self):
        """Test the cost factor is recorded in the hash."""
        assert hash_password("secret", rounds=ROUNDS).startswith("$2b$04$")

    def test_empty_password_rejected(self):
        """Test that an empty password cannot be hashed."""
        with pytest.raises(ValueError):
            hash_password("", rounds=ROUNDS)

    def test_long_password_rejected(self):
        """Test that passwords over 72 bytes are refused instead of truncated."""
        with pytest.raises(ValueError):
            hash_password("é" * 37, rounds=ROUNDS)

    def test_malformed_hash_never_matches(self):
        """Test that a corrupt stored hash fails verification."""
        assert not verify_password("secret", "plaintext-from-old-version")
        assert not verify_password("", hash_password("secret", rounds=ROUNDS))


class TestPasswordHasher:
    """Tests for the settings-driven PasswordHasher."""

    def test_cost_from_settings(self):
        """Test the hasher uses the configured bcrypt cost."""
        hasher = PasswordHasher.from_settings(SecuritySettings(bcrypt_rounds=5))
        hashed = hasher.hash("secret")
        assert hashed.startswith("$2b$05$")
        assert hasher.verify("secret", hashed)
        assert not hasher.verify("Secret", hashed)
