"""Credential storage for user accounts."""

from __future__ import annotations

from .backend import NoRowsError, SQLiteBackend, UniqueConstraintViolation, resolve_database_path
from .errors import (
    ErrorKind,
    InvalidEmail,
    PasswordContainsInvalidChars,
    PasswordTooShort,
    UserAlreadyExists,
    UserStoreError,
    WrongCredentials,
)
from .hashing import PasswordHasher
from .memory import InMemoryUsersRepository
from .models import PostUserRequestData, User
from .repository import SQLUsersRepository, UsersRepository
from .validation import validate_email, validate_password

__all__ = [
    "ErrorKind",
    "InMemoryUsersRepository",
    "InvalidEmail",
    "NoRowsError",
    "PasswordContainsInvalidChars",
    "PasswordHasher",
    "PasswordTooShort",
    "PostUserRequestData",
    "SQLUsersRepository",
    "SQLiteBackend",
    "UniqueConstraintViolation",
    "User",
    "UserAlreadyExists",
    "UserStoreError",
    "UsersRepository",
    "WrongCredentials",
    "resolve_database_path",
    "validate_email",
    "validate_password",
]
