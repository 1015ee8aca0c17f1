from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from userstore.backend import (
    NoRowsError,
    SQLiteBackend,
    UniqueConstraintViolation,
    classify_error,
    resolve_database_path,
)

_INSERT = (
    "INSERT INTO users (email, password, first_name, last_name, avatar_url) "
    "VALUES (?, ?, ?, ?, ?) RETURNING id, email"
)


@pytest.fixture()
def backend(tmp_path: Path) -> SQLiteBackend:
    db = SQLiteBackend(tmp_path / "nested" / "users.sqlite3")
    db.initialize()
    return db


def test_initialize_creates_parent_directory_and_is_idempotent(backend: SQLiteBackend) -> None:
    assert backend.path.parent.is_dir()
    backend.initialize()


def test_query_row_returns_named_and_ordered_columns(backend: SQLiteBackend) -> None:
    row = backend.query_row(_INSERT, ("a@example.com", "hash", "A", "B", None))

    assert row["email"] == "a@example.com"
    assert row[0] == row["id"]
    assert isinstance(row["id"], int)


def test_duplicate_insert_is_classified(backend: SQLiteBackend) -> None:
    backend.query_row(_INSERT, ("a@example.com", "hash", "A", "B", None))

    with pytest.raises(UniqueConstraintViolation) as excinfo:
        backend.query_row(_INSERT, ("a@example.com", "other", "C", "D", None))

    assert excinfo.value.column == "email"
    assert isinstance(excinfo.value.__cause__, sqlite3.IntegrityError)


def test_failed_insert_is_rolled_back(backend: SQLiteBackend) -> None:
    backend.query_row(_INSERT, ("a@example.com", "hash", "A", "B", None))
    with pytest.raises(UniqueConstraintViolation):
        backend.query_row(_INSERT, ("a@example.com", "other", "C", "D", None))

    row = backend.query_row("SELECT COUNT(*) AS total FROM users")
    assert row["total"] == 1


def test_missing_row_raises_no_rows(backend: SQLiteBackend) -> None:
    with pytest.raises(NoRowsError) as excinfo:
        backend.query_row("SELECT id FROM users WHERE id = ?", (99,))
    assert isinstance(excinfo.value, LookupError)


def test_other_integrity_errors_are_not_classified(backend: SQLiteBackend) -> None:
    with pytest.raises(sqlite3.IntegrityError):
        backend.query_row(_INSERT, (None, "hash", "A", "B", None))


def test_syntax_errors_pass_through(backend: SQLiteBackend) -> None:
    with pytest.raises(sqlite3.OperationalError):
        backend.query_row("SELEC id FROM users")


def test_classify_error_leaves_unrelated_errors_alone() -> None:
    error = sqlite3.OperationalError("disk I/O error")
    assert classify_error(error) is error

    classified = classify_error(sqlite3.IntegrityError("UNIQUE constraint failed: users.email"))
    assert isinstance(classified, UniqueConstraintViolation)
    assert classified.column == "email"


def test_resolve_database_path(tmp_path: Path) -> None:
    explicit = resolve_database_path(str(tmp_path / "db.sqlite3"))
    assert explicit == (tmp_path / "db.sqlite3").resolve()

    default = resolve_database_path(None)
    assert default.name == "userstore.sqlite3"
    assert default.parent.name == "data"
