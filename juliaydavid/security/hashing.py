# juliaydavid/security/hashing.py
"""
bcrypt password hashing.

``verify`` never raises: a missing, empty or corrupted stored hash is
treated as a failed login, not as a server error.
"""
import logging
from typing import Optional

from passlib.context import CryptContext

logger = logging.getLogger(__name__)


class PasswordHasher:
    def __init__(self, rounds: int = 12):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, plaintext: Optional[str], hashed: Optional[str]) -> bool:
        if not isinstance(plaintext, str) or not plaintext:
            return False
        if not isinstance(hashed, str) or not hashed:
            return False
        try:
            return self._context.verify(plaintext, hashed)
        except (ValueError, TypeError):
            logger.warning("Stored password hash is not a usable bcrypt hash")
            return False
