"""bcrypt password hashing via passlib."""
from __future__ import annotations

from typing import Optional

from passlib.context import CryptContext

BCRYPT_ROUNDS = 12
MAX_PASSWORD_BYTES = 72


def _exceeds_bcrypt_limit(password: str) -> bool:
    return len(password.encode("utf-8", "surrogatepass")) > MAX_PASSWORD_BYTES


class PasswordHasher:
    """Salted one-way hashing with a fixed bcrypt cost.

    The cost, algorithm identifier and salt are embedded in every hash, so
    :meth:`verify` needs no state beyond the stored string.
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self._rounds = rounds
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash ``password``.

        Raises ``ValueError`` when the UTF-8 encoding is longer than the 72
        bytes bcrypt reads; longer input would otherwise be truncated.
        """

        if _exceeds_bcrypt_limit(password):
            raise ValueError(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
        return self._context.hash(password)

    def verify(self, password: str, hashed: Optional[str]) -> bool:
        """Return ``True`` only when ``password`` matches ``hashed``.

        Missing or malformed hashes, and passwords too long to have been
        hashed, count as a mismatch.
        """

        if not hashed or _exceeds_bcrypt_limit(password):
            return False
        try:
            return self._context.verify(password, hashed)
        except (ValueError, TypeError):
            return False


default_hasher = PasswordHasher()


__all__ = ["BCRYPT_ROUNDS", "MAX_PASSWORD_BYTES", "PasswordHasher", "default_hasher"]
