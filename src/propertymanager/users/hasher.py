"""One-way password hashing backed by bcrypt."""

import logging
from dataclasses import dataclass

from bcrypt import checkpw, gensalt, hashpw

LOGGER = logging.getLogger(__name__)


@dataclass
class PasswordHasher:
    """Hash and verify passwords.

    :param int rounds: bcrypt cost factor
    """

    DEFAULT_ROUNDS = 12
    MIN_ROUNDS = 4
    MAX_ROUNDS = 31

    rounds: int = DEFAULT_ROUNDS

    def __post_init__(self) -> None:
        """Reject cost factors bcrypt does not accept."""
        if not self.MIN_ROUNDS <= self.rounds <= self.MAX_ROUNDS:
            msg = (
                f"bcrypt rounds must be between {self.MIN_ROUNDS} and "
                f"{self.MAX_ROUNDS}, got: {self.rounds}"
            )
            raise ValueError(msg)

    def hash(self, plaintext: str) -> str:
        """Hash a plaintext password with a fresh salt.

        :param plaintext: The password to hash
        :return: The encoded bcrypt hash
        """
        return hashpw(plaintext.encode(), gensalt(self.rounds)).decode()

    def verify(self, plaintext: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored hash.

        :param plaintext: The candidate password
        :param password_hash: A hash previously produced by :meth:`hash`
        :return: True if the password matches, False otherwise
        """
        try:
            return checkpw(plaintext.encode(), password_hash.encode())
        except ValueError:
            LOGGER.debug("Stored password hash is malformed")
            return False
