"""Command-line interface for the user credential store."""

from __future__ import annotations
import argparse
import dataclasses
import logging
import os
import sys
from getpass import getpass
from typing import Sequence

from userstore.backend import NoRowsError, SQLiteBackend, resolve_database_path
from userstore.config import StoreConfig, load_store_config, resolve_config_path
from userstore.errors import UserStoreError, WrongCredentials
from userstore.hashing import PasswordHasher
from userstore.models import PostUserRequestData
from userstore.repository import SQLUsersRepository

logger = logging.getLogger("userstore.main")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="User credential store utilities")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the YAML configuration (defaults to USERSTORE_CONFIG or config/userstore.yaml)",
    )
    parser.add_argument(
        "--db",
        dest="db_path",
        default=None,
        help="Path to the SQLite database (overrides the configuration and USERSTORE_DB_PATH)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Initialise the credential database")

    create_parser = subparsers.add_parser("create-user", help="Register a new user")
    create_parser.add_argument("email", help="Unique email address for login")
    create_parser.add_argument("first_name", help="Given name")
    create_parser.add_argument("last_name", help="Family name")
    create_parser.add_argument("--avatar-url", default=None, help="Optional avatar image URL")

    show_parser = subparsers.add_parser("show-user", help="Print a user's public profile")
    show_parser.add_argument("user_id", type=int, help="Numeric user identifier")

    login_parser = subparsers.add_parser("check-login", help="Verify an email/password pair")
    login_parser.add_argument("email", help="Email address to check")

    return parser.parse_args(list(argv) if argv is not None else None)


def _load_config(args: argparse.Namespace) -> StoreConfig:
    config_path = resolve_config_path(args.config or os.getenv("USERSTORE_CONFIG"))
    if config_path.is_file():
        config = load_store_config(config_path)
    else:
        config = StoreConfig(database_path=resolve_database_path(os.getenv("USERSTORE_DB_PATH")))

    if args.db_path:
        config = dataclasses.replace(config, database_path=resolve_database_path(args.db_path))
    return config


def _initialise_backend(config: StoreConfig) -> SQLiteBackend:
    backend = SQLiteBackend(config.database_path)
    backend.initialize()
    logger.info("Database initialised at %s", config.database_path)
    return backend


def _prompt_for_new_password() -> str | None:
    for _ in range(3):
        password = getpass("Password: ")
        confirmation = getpass("Confirm password: ")
        if password != confirmation:
            print("Passwords do not match. Please try again.", file=sys.stderr)
            continue
        return password
    return None


def _create_user(repository: SQLUsersRepository, args: argparse.Namespace) -> int:
    password = _prompt_for_new_password()
    if password is None:
        print("Failed to set password after three attempts.", file=sys.stderr)
        return 1

    request = PostUserRequestData(
        email=args.email.strip(),
        password=password,
        first_name=args.first_name.strip(),
        last_name=args.last_name.strip(),
        avatar_url=args.avatar_url,
    )
    try:
        user = repository.create_user(request)
    except UserStoreError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Created user #{user.id}: {user.first_name} {user.last_name} <{user.email}>")
    return 0


def _show_user(repository: SQLUsersRepository, user_id: int) -> int:
    try:
        user = repository.get_user_by_id(user_id)
    except NoRowsError:
        print(f"User #{user_id} not found", file=sys.stderr)
        return 1

    print(f"ID:         {user.id}")
    print(f"Email:      {user.email}")
    print(f"Name:       {user.first_name} {user.last_name}")
    print(f"Avatar URL: {user.avatar_url or '<none>'}")
    return 0


def _check_login(repository: SQLUsersRepository, email: str) -> int:
    password = getpass("Password: ")
    try:
        user_id = repository.validate_user(email.strip(), password)
    except WrongCredentials:
        print("Wrong credentials", file=sys.stderr)
        return 1

    print(f"Credentials valid for user #{user_id}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for CLI usage."""

    args = _parse_args(argv)
    config = _load_config(args)

    logging.basicConfig(level=config.logging_level, format="%(asctime)s [%(levelname)s] %(message)s")

    backend = _initialise_backend(config)
    repository = SQLUsersRepository(backend, hasher=PasswordHasher(rounds=config.bcrypt_rounds))

    if args.command == "init-db":
        print("Database initialisation complete.")
        return 0
    if args.command == "create-user":
        return _create_user(repository, args)
    if args.command == "show-user":
        return _show_user(repository, args.user_id)
    if args.command == "check-login":
        return _check_login(repository, args.email)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
