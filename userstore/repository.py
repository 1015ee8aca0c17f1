"""User credential repository backed by a SQL row backend."""
from __future__ import annotations

import abc
import logging
import sqlite3
from typing import Optional

from .backend import RowBackend, UniqueConstraintViolation
from .errors import UserAlreadyExists, WrongCredentials
from .hashing import PasswordHasher, default_hasher
from .models import PostUserRequestData, User
from .validation import validate_registration

logger = logging.getLogger("userstore.repository")

_INSERT_USER = """
    INSERT INTO users (email, password, first_name, last_name, avatar_url)
    VALUES (?, ?, ?, ?, ?)
    RETURNING id, email, first_name, last_name, avatar_url
"""

_SELECT_USER_BY_ID = (
    "SELECT id, email, first_name, last_name, avatar_url FROM users WHERE id = ? LIMIT 1"
)

_SELECT_CREDENTIALS_BY_EMAIL = "SELECT id, password FROM users WHERE email = ? LIMIT 1"


class UsersRepository(abc.ABC):
    """Create, fetch and authenticate user accounts."""

    @abc.abstractmethod
    def create_user(self, request: PostUserRequestData) -> User:
        """Validate, hash and persist a new account.

        Raises :class:`~userstore.errors.InvalidEmail`,
        :class:`~userstore.errors.PasswordContainsInvalidChars` or
        :class:`~userstore.errors.PasswordTooShort` before anything is stored,
        and :class:`~userstore.errors.UserAlreadyExists` for a taken email.
        """

    @abc.abstractmethod
    def get_user_by_id(self, user_id: int) -> User:
        """Return the public profile; a missing id raises the backend's not-found error."""

    @abc.abstractmethod
    def validate_user(self, email: str, password: str) -> int:
        """Return the user id for matching credentials or raise ``WrongCredentials``."""


class SQLUsersRepository(UsersRepository):
    """Production repository issuing one statement per operation."""

    def __init__(self, backend: RowBackend, *, hasher: Optional[PasswordHasher] = None) -> None:
        self._backend = backend
        self._hasher = hasher or default_hasher

    def create_user(self, request: PostUserRequestData) -> User:
        validate_registration(request.email, request.password)
        password_hash = self._hasher.hash(request.password)

        try:
            row = self._backend.query_row(
                _INSERT_USER,
                (
                    request.email,
                    password_hash,
                    request.first_name,
                    request.last_name,
                    request.avatar_url,
                ),
            )
        except UniqueConstraintViolation as exc:
            if exc.column not in (None, "email"):
                raise
            logger.warning("Rejected duplicate registration for %s", request.email)
            raise UserAlreadyExists() from exc

        user = self._row_to_user(row)
        logger.info("Created user %s", user.id)
        return user

    def get_user_by_id(self, user_id: int) -> User:
        row = self._backend.query_row(_SELECT_USER_BY_ID, (user_id,))
        return self._row_to_user(row)

    def validate_user(self, email: str, password: str) -> int:
        try:
            row = self._backend.query_row(_SELECT_CREDENTIALS_BY_EMAIL, (email,))
        except LookupError:
            logger.info("Failed login attempt for %s", email)
            raise WrongCredentials() from None
        except Exception:
            logger.warning("Credential lookup failed for %s", email, exc_info=True)
            raise WrongCredentials() from None

        if not self._hasher.verify(password, row["password"]):
            logger.info("Failed login attempt for %s", email)
            raise WrongCredentials()

        return int(row["id"])

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> User:
        return User(
            id=int(row["id"]),
            email=str(row["email"]),
            first_name=str(row["first_name"]),
            last_name=str(row["last_name"]),
            avatar_url=row["avatar_url"],
        )


__all__ = ["SQLUsersRepository", "UsersRepository"]
