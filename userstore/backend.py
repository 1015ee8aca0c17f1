"""SQLite-backed storage for user credentials."""
from __future__ import annotations

import re
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Optional, Protocol, Sequence

_UNIQUE_FAILURE = re.compile(r"UNIQUE constraint failed: (?:\w+\.)?(\w+)")


class StorageError(Exception):
    """Base class for failures the backend classifies itself."""


class UniqueConstraintViolation(StorageError):
    """An insert or update would duplicate a unique value."""

    def __init__(self, column: Optional[str] = None) -> None:
        self.column = column
        detail = f" on column '{column}'" if column else ""
        super().__init__(f"Unique constraint violated{detail}")


class NoRowsError(StorageError, LookupError):
    """The statement completed without producing a row."""

    def __init__(self) -> None:
        super().__init__("no rows in result set")


def _ensure_directory(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def resolve_database_path(env_value: Optional[str]) -> Path:
    """Resolve the on-disk path for the credential database."""

    if env_value:
        return Path(env_value).expanduser().resolve(strict=False)
    base_dir = Path(__file__).resolve().parent.parent / "data"
    return (base_dir / "userstore.sqlite3").resolve(strict=False)


def classify_error(exc: sqlite3.Error) -> Exception:
    """Map a driver error onto :class:`StorageError` where one applies.

    Errors without a more specific meaning are returned unchanged.
    """

    if isinstance(exc, sqlite3.IntegrityError):
        match = _UNIQUE_FAILURE.search(str(exc))
        if match is not None:
            return UniqueConstraintViolation(match.group(1))
    return exc


class RowBackend(Protocol):
    """Anything able to run one parameterized statement and return one row."""

    def query_row(self, query: str, params: Sequence[object] = ...) -> sqlite3.Row: ...


class SQLiteBackend:
    """Executes single-row parameterized statements against SQLite."""

    def __init__(self, path: Path) -> None:
        _ensure_directory(path)
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def initialize(self) -> None:
        """Create the required tables if they do not already exist."""

        with closing(self._connect()) as conn, conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    email TEXT NOT NULL UNIQUE,
                    password TEXT NOT NULL,
                    first_name TEXT NOT NULL,
                    last_name TEXT NOT NULL,
                    avatar_url TEXT
                );
                """
            )

    def query_row(self, query: str, params: Sequence[object] = ()) -> sqlite3.Row:
        """Run ``query`` in its own transaction and return the first row.

        Raises :class:`NoRowsError` when nothing is returned and
        :class:`UniqueConstraintViolation` for duplicate values. Any other
        ``sqlite3.Error`` propagates as raised by the driver.
        """

        with closing(self._connect()) as conn:
            try:
                with conn:
                    row = conn.execute(query, tuple(params)).fetchone()
            except sqlite3.Error as exc:
                classified = classify_error(exc)
                if classified is exc:
                    raise
                raise classified from exc

        if row is None:
            raise NoRowsError()
        return row


__all__ = [
    "NoRowsError",
    "RowBackend",
    "SQLiteBackend",
    "StorageError",
    "UniqueConstraintViolation",
    "classify_error",
    "resolve_database_path",
]
