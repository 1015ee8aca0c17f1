"""Domain models for user accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class User:
    """Public projection of a user account; never carries password data."""

    id: int
    email: str
    first_name: str
    last_name: str
    avatar_url: Optional[str] = None


@dataclass(frozen=True)
class PostUserRequestData:
    """Registration input. The plaintext password is kept out of ``repr``."""

    email: str
    password: str = field(repr=False)
    first_name: str
    last_name: str
    avatar_url: Optional[str] = None


__all__ = ["PostUserRequestData", "User"]
