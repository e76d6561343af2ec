"""
Password Hashing

Account passwords are never stored in plain text. bcrypt provides a
per-password salt and an adjustable cost factor.
"""

import bcrypt


# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    if not password:
        raise ValueError("Password cannot be empty")
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    return encoded


def hash_password(password: str, rounds: int = 12) -> str:
    """
    Hash a password for storage.

    Args:
        password: Plain text password
        rounds: bcrypt cost factor (see SecuritySettings.bcrypt_rounds)

    Returns:
        The bcrypt hash as text, salt included

    Raises:
        ValueError: If the password is empty or longer than 72 bytes
    """
    hashed = bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("ascii")


def verify_password(password: str, hashed: str) -> bool:
    """Check a password against a stored hash. A malformed hash never matches."""
    try:
        return bcrypt.checkpw(_encode(password), hashed.encode("ascii"))
    except ValueError:
        return False


class PasswordHasher:
    """Hashes and checks passwords at the configured bcrypt cost."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    @classmethod
    def from_settings(cls, settings) -> "PasswordHasher":
        """Build a hasher from SecuritySettings."""
        return cls(rounds=settings.bcrypt_rounds)

    def hash(self, password: str) -> str:
        return hash_password(password, rounds=self.rounds)

    def verify(self, password: str, hashed: str) -> bool:
        return verify_password(password, hashed)
