"""
Configuration Management

Builds the import configuration once, from environment variables and
optional .env files, so it can be passed explicitly to every component.
"""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from sqlalchemy.engine import make_url

from oews_import.lib.exceptions import (
    InvalidConfigurationException,
    MissingConfigurationException,
)

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 3306
DEFAULT_DATABASE = "bls_oews"
DEFAULT_DATA_DIR = Path("bls_oews_data")
DEFAULT_BATCH_SIZE = 1000
DEFAULT_ENV_FILES = (Path(".env"), Path(".env.local"))


def load_env_file(env_file: Optional[str] = None) -> Optional[Path]:
    """
    Load a .env file into the process environment

    Variables already present in the environment are not overridden.

    Args:
        env_file: Explicit .env path. If None, the first existing default
            location (.env, .env.local) is used.

    Returns:
        Path of the file that was loaded, or None
    """
    candidates = [Path(env_file)] if env_file else list(DEFAULT_ENV_FILES)
    for path in candidates:
        if path.exists():
            load_dotenv(path, override=False)
            logger.info("Loaded configuration from %s", path)
            return path
    if env_file:
        logger.warning("Configuration file not found: %s", env_file)
    return None


def _int_setting(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidConfigurationException(
            f"{key} must be an integer, got {raw!r}", {"key": key, "value": raw}
        ) from exc


@dataclass(frozen=True)
class ImportConfig:
    """Connection and input settings for one import run."""

    user: Optional[str]
    password: Optional[str]
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    database: str = DEFAULT_DATABASE
    data_dir: Path = DEFAULT_DATA_DIR
    batch_size: int = DEFAULT_BATCH_SIZE
    database_url: Optional[str] = None

    @classmethod
    def from_env(
        cls,
        env_file: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        validate: bool = True,
    ) -> "ImportConfig":
        """
        Build and validate configuration from the environment

        Args:
            env_file: Optional .env file to load first
            environ: Mapping to read instead of os.environ (no .env loading)
            validate: Skip the credential check when False (commands that
                never open the store)

        Returns:
            Validated configuration

        Raises:
            MissingConfigurationException: If DB_USER or DB_PASSWORD is unset
            InvalidConfigurationException: If a numeric setting is malformed
        """
        if environ is None:
            load_env_file(env_file)
            environ = os.environ

        config = cls(
            user=environ.get("DB_USER") or None,
            password=environ.get("DB_PASSWORD") or None,
            host=environ.get("DB_HOST") or DEFAULT_HOST,
            port=_int_setting(environ, "DB_PORT", DEFAULT_PORT),
            database=environ.get("DB_NAME") or DEFAULT_DATABASE,
            data_dir=Path(environ.get("OEWS_DATA_DIR") or DEFAULT_DATA_DIR),
            batch_size=_int_setting(environ, "BATCH_SIZE", DEFAULT_BATCH_SIZE),
            database_url=environ.get("DATABASE_URL") or None,
        )
        if validate:
            config.validate()
        return config

    def validate(self) -> None:
        """Fail fast on settings the store cannot work without."""
        if self.batch_size <= 0:
            raise InvalidConfigurationException(
                "BATCH_SIZE must be positive", {"value": self.batch_size}
            )
        if self.database_url:
            return
        missing = [
            name
            for name, value in (("DB_USER", self.user), ("DB_PASSWORD", self.password))
            if not value
        ]
        if missing:
            raise MissingConfigurationException(
                f"Please set {' and '.join(missing)} in your environment or .env file",
                {"missing": missing},
            )

    def with_overrides(self, **changes) -> "ImportConfig":
        """Return a copy with CLI overrides applied (None values ignored)."""
        applied = {key: value for key, value in changes.items() if value is not None}
        if not applied:
            return self
        updated = replace(self, **applied)
        updated.validate()
        return updated

    def to_dict(self) -> dict:
        """Settings with the password masked, for display."""
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": "********" if self.password else None,
            "database": self.database,
            "database_url": (
                make_url(self.database_url).render_as_string(hide_password=True)
                if self.database_url
                else None
            ),
            "data_dir": str(self.data_dir),
            "batch_size": self.batch_size,
        }
