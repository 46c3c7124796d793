"""Password Hasher — bcrypt implementation of the CredentialHasher protocol."""

import logging

import bcrypt

logger = logging.getLogger(__name__)


class BcryptHasher:
    """Hash and verify passwords with bcrypt."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash. Malformed hashes never match."""
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8"),
            )
        except ValueError as e:
            logger.warning(f"Unverifiable password hash: {e}")
            return False
