# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Password hashing utilities using bcrypt.

Hashes are salted per call, so hashing the same password twice yields two
different strings; verification uses bcrypt's constant-time comparison.

Example:
    >>> hasher = PasswordHasher(rounds=12)
    >>> hashed = hasher.hash("Abcdefg1")
    >>> hasher.verify("Abcdefg1", hashed)
    True
"""

import logging

import bcrypt

from educasem.core.config.settings import PasswordSettings

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """bcrypt password hasher with a configurable cost factor.

    Attributes:
        _rounds: bcrypt cost factor. 12 takes roughly 250ms per hash on
            current hardware; tests use the minimum of 4.
    """

    def __init__(self, rounds: int = 12) -> None:
        """Initialize the password hasher.

        Args:
            rounds: bcrypt cost factor, between 4 and 31.
        """
        self._rounds = rounds

    @classmethod
    def from_settings(cls, settings: PasswordSettings) -> "PasswordHasher":
        """Build a hasher from the password settings."""
        return cls(rounds=settings.bcrypt_rounds)

    @property
    def rounds(self) -> int:
        """Cost factor used for new hashes."""
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a password.

        Args:
            password: Plain text password.

        Returns:
            bcrypt hash string with the salt embedded.

        Raises:
            ValueError: If password is empty.
        """
        if not password:
            raise ValueError("Password cannot be empty")

        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a plain text candidate against a stored hash.

        Never raises: empty input or a malformed hash verify as False.
        """
        if not password or not password_hash:
            return False

        try:
            return bcrypt.checkpw(
                _encode(password),
                password_hash.encode("utf-8"),
            )
        except ValueError as e:
            logger.warning("Password verification failed: %s", str(e))
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """Check whether a hash was produced with a different cost factor.

        bcrypt hashes look like ``$2b$12$<salt+digest>``; the second field
        is the cost.
        """
        parts = password_hash.split("$") if password_hash else []
        if len(parts) < 4 or not parts[2].isdigit():
            return False
        return int(parts[2]) != self._rounds

