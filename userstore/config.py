"""Configuration loading for the user store."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import yaml

from .backend import resolve_database_path
from .hashing import BCRYPT_ROUNDS

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class StoreConfig:
    """Settings shared by the CLI and embedding applications."""

    database_path: Path
    log_level: str = "INFO"
    bcrypt_rounds: int = BCRYPT_ROUNDS

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    @staticmethod
    def from_dict(data: Dict[str, object], base_path: Path | None = None) -> "StoreConfig":
        """Create a :class:`StoreConfig` from raw dictionary data."""

        raw_db_path = data.get("database_path")
        if raw_db_path:
            expanded = Path(str(raw_db_path)).expanduser()
            if not expanded.is_absolute() and base_path is not None:
                expanded = base_path / expanded
            database_path = expanded.resolve(strict=False)
        else:
            database_path = resolve_database_path(None)

        log_level = str(data.get("log_level", "INFO")).upper()
        if log_level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'")

        bcrypt_rounds = int(data.get("bcrypt_rounds", BCRYPT_ROUNDS))
        if bcrypt_rounds < BCRYPT_ROUNDS:
            raise ValueError(f"bcrypt_rounds must be at least {BCRYPT_ROUNDS}")

        return StoreConfig(
            database_path=database_path,
            log_level=log_level,
            bcrypt_rounds=bcrypt_rounds,
        )


def load_store_config(config_path: Path) -> StoreConfig:
    """Load settings from a YAML file."""
    with config_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}

    if not isinstance(raw, dict):
        raise ValueError("Configuration file must contain a mapping at the top level")

    return StoreConfig.from_dict(raw, base_path=config_path.parent)


def resolve_config_path(env_value: Optional[str]) -> Path:
    """Resolve the path to the configuration file."""
    if env_value:
        return Path(env_value).expanduser().resolve(strict=False)
    return (Path(__file__).resolve().parent.parent / "config" / "userstore.yaml").resolve(strict=False)


__all__ = ["StoreConfig", "load_store_config", "resolve_config_path"]
