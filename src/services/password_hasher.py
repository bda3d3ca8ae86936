"""Password hashing with bcrypt."""

import logging

import bcrypt

from domain.model.errors import HashingError

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12


class BcryptPasswordHasher:
    """Salted one-way hashing and verification of passwords.

    Usage:
        hasher = BcryptPasswordHasher(rounds=12)
        digest = hasher.hash("my_password")
        hasher.verify(digest, "my_password")  # True
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        if not 4 <= rounds <= 31:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password.

        Raises:
            HashingError: the bcrypt primitive rejected the input
        """
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
        except (ValueError, TypeError) as e:
            # The bcrypt message never echoes the password
            raise HashingError(f"Password hashing failed: {e}") from e

    def verify(self, digest: str, password: str) -> bool:
        """Return True if ``password`` matches ``digest``.

        A malformed stored digest counts as a mismatch.
        """
        if not digest:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), digest.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password digest is malformed")
            return False
