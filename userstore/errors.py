"""Domain errors raised by the user store."""
from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    """Closed set of domain failure kinds."""

    INVALID_EMAIL = "invalid_email"
    PASSWORD_CONTAINS_INVALID_CHARS = "password_contains_invalid_chars"
    PASSWORD_TOO_SHORT = "password_too_short"
    USER_ALREADY_EXISTS = "user_already_exists"
    WRONG_CREDENTIALS = "wrong_credentials"


class UserStoreError(Exception):
    """Base class for domain errors; ``kind`` identifies the failure."""

    kind: ErrorKind
    message: str = "user store error"

    def __init__(self) -> None:
        super().__init__(self.message)


class InvalidEmail(UserStoreError):
    kind = ErrorKind.INVALID_EMAIL
    message = "invalid email address"


class PasswordContainsInvalidChars(UserStoreError):
    kind = ErrorKind.PASSWORD_CONTAINS_INVALID_CHARS
    message = "password contains invalid characters"


class PasswordTooShort(UserStoreError):
    kind = ErrorKind.PASSWORD_TOO_SHORT
    message = "password is too short"


class UserAlreadyExists(UserStoreError):
    kind = ErrorKind.USER_ALREADY_EXISTS
    message = "user already exists"


class WrongCredentials(UserStoreError):
    """Raised for unknown emails and wrong passwords alike."""

    kind = ErrorKind.WRONG_CREDENTIALS
    message = "wrong credentials"


__all__ = [
    "ErrorKind",
    "InvalidEmail",
    "PasswordContainsInvalidChars",
    "PasswordTooShort",
    "UserAlreadyExists",
    "UserStoreError",
    "WrongCredentials",
]
