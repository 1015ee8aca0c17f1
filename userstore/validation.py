"""Input policy checks for registration data."""
from __future__ import annotations

import re

from .errors import InvalidEmail, PasswordContainsInvalidChars, PasswordTooShort

MIN_PASSWORD_LENGTH = 8

_LABEL = r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@" + _LABEL + r"(?:\." + _LABEL + r")*"
)


def validate_email(email: str) -> None:
    """Raise :class:`InvalidEmail` unless ``email`` has a plausible shape."""

    if EMAIL_PATTERN.fullmatch(email) is None:
        raise InvalidEmail()


def validate_password(password: str) -> None:
    """Check the character class first and the length second.

    An empty password fails the character check, since it has no printable
    characters at all.

    Length counts code points, so ``"päßwörd1"`` is eight characters long
    even though it encodes to more bytes.
    """

    if not password or not password.isprintable():
        raise PasswordContainsInvalidChars()

    if len(password) < MIN_PASSWORD_LENGTH:
        raise PasswordTooShort()


def validate_registration(email: str, password: str) -> None:
    validate_email(email)
    validate_password(password)


__all__ = [
    "EMAIL_PATTERN",
    "MIN_PASSWORD_LENGTH",
    "validate_email",
    "validate_password",
    "validate_registration",
]
