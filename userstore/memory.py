"""In-process repository used by tests and callers that need no database."""
from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from .backend import NoRowsError
from .errors import UserAlreadyExists, WrongCredentials
from .hashing import PasswordHasher, default_hasher
from .models import PostUserRequestData, User
from .repository import UsersRepository
from .validation import validate_registration

logger = logging.getLogger("userstore.memory")


@dataclass(frozen=True)
class _CredentialRecord:
    user: User
    password_hash: str


class InMemoryUsersRepository(UsersRepository):
    """Dictionary-backed :class:`UsersRepository` with the same error contract."""

    def __init__(self, *, hasher: Optional[PasswordHasher] = None) -> None:
        self._hasher = hasher or default_hasher
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._records: Dict[int, _CredentialRecord] = {}
        self._ids_by_email: Dict[str, int] = {}

    def create_user(self, request: PostUserRequestData) -> User:
        validate_registration(request.email, request.password)
        password_hash = self._hasher.hash(request.password)

        with self._lock:
            if request.email in self._ids_by_email:
                logger.warning("Rejected duplicate registration for %s", request.email)
                raise UserAlreadyExists()
            user = User(
                id=next(self._ids),
                email=request.email,
                first_name=request.first_name,
                last_name=request.last_name,
                avatar_url=request.avatar_url,
            )
            self._records[user.id] = _CredentialRecord(user=user, password_hash=password_hash)
            self._ids_by_email[user.email] = user.id

        logger.info("Created user %s", user.id)
        return user

    def get_user_by_id(self, user_id: int) -> User:
        with self._lock:
            record = self._records.get(user_id)
        if record is None:
            raise NoRowsError()
        return record.user

    def validate_user(self, email: str, password: str) -> int:
        with self._lock:
            user_id = self._ids_by_email.get(email)
            record = self._records.get(user_id) if user_id is not None else None

        if record is None or not self._hasher.verify(password, record.password_hash):
            logger.info("Failed login attempt for %s", email)
            raise WrongCredentials()

        return record.user.id


__all__ = ["InMemoryUsersRepository"]
