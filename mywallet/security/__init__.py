"""Security helpers."""

from mywallet.security.passwords import PasswordHasher, hash_password, verify_password

__all__ = ["PasswordHasher", "hash_password", "verify_password"]
