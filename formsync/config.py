# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - MySQLConfig (dataclass)
#     host: str          (default "localhost")
#     port: int          (default 3306)
#     user: str          (default "root")
#     password: str      (default "root")
#     database: str      (default "formsync")
#     table: str         (default "usermeta")
#
# - MongoConfig (dataclass)
#     host: str          (default "localhost")
#     port: int          (default 27017)
#     user: str | None   (default None)
#     password: str | None (default None)
#     database: str      (default "formsync")
#     collection: str    (default "user_profiles")
#
# - SyncConfig (dataclass)
#     store_backend: str (memory | mongo | mysql, default "memory")
#     no_override: NoOverridePolicy (default SENTINEL)
#     log_level: str     (default "INFO")
#
# - SourceConfig (dataclass)
#     api_url: str               (default "http://localhost/wp-json/gf/v2")
#     api_timeout_seconds: float (default 10.0)
#     api_user / api_password: str | None (HTTP basic auth)
#
# - AppConfig (dataclass)
#     mysql, mongo, sync, source
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Drop the cached singleton (tests).
#
# - configure_logging(level) -> None
#     Basic stderr logging for the CLI.
#
# USAGE:
# ------
#   from formsync.config import get_config
#   config = get_config()
#   print(config.sync.store_backend)
#
# ==============================================

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from formsync.errors import ConfigurationError
from formsync.policy import NoOverridePolicy

STORE_BACKENDS = ("memory", "mongo", "mysql")


@dataclass
class MySQLConfig:
    """MySQL database configuration."""
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = "root"
    database: str = "formsync"
    table: str = "usermeta"


@dataclass
class MongoConfig:
    """MongoDB database configuration."""
    host: str = "localhost"
    port: int = 27017
    user: Optional[str] = None
    password: Optional[str] = None
    database: str = "formsync"
    collection: str = "user_profiles"


@dataclass
class SyncConfig:
    """Profile sync behaviour."""
    store_backend: str = "memory"
    no_override: NoOverridePolicy = NoOverridePolicy.SENTINEL
    log_level: str = "INFO"


@dataclass
class SourceConfig:
    """Forms REST API used for backfills."""
    api_url: str = "http://localhost/wp-json/gf/v2"
    api_timeout_seconds: float = 10.0
    api_user: Optional[str] = None
    api_password: Optional[str] = None


@dataclass
class AppConfig:
    """Main application configuration."""
    mysql: MySQLConfig = field(default_factory=MySQLConfig)
    mongo: MongoConfig = field(default_factory=MongoConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    source: SourceConfig = field(default_factory=SourceConfig)


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _store_backend_from_env() -> str:
    backend = os.getenv("PROFILE_STORE", "memory").strip().lower()
    if backend not in STORE_BACKENDS:
        raise ConfigurationError(
            f"PROFILE_STORE must be one of {', '.join(STORE_BACKENDS)}, got {backend!r}"
        )
    return backend


def _no_override_from_env() -> NoOverridePolicy:
    raw = os.getenv("NO_OVERRIDE_POLICY", NoOverridePolicy.SENTINEL.value)
    try:
        return NoOverridePolicy(raw.strip().lower())
    except ValueError:
        raise ConfigurationError(
            f"NO_OVERRIDE_POLICY must be 'sentinel' or 'default', got {raw!r}"
        ) from None


def _int_from_env(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration

    Raises:
        ConfigurationError: If an environment value can't be parsed
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    mysql_config = MySQLConfig(
        host=os.getenv("MYSQL_HOST", "localhost"),
        port=_int_from_env("MYSQL_PORT", "3306"),
        user=os.getenv("MYSQL_USER", "root"),
        password=os.getenv("MYSQL_PASSWORD", "root"),
        database=os.getenv("MYSQL_DATABASE", "formsync"),
        table=os.getenv("MYSQL_USERMETA_TABLE", "usermeta"),
    )

    mongo_config = MongoConfig(
        host=os.getenv("MONGO_HOST", "localhost"),
        port=_int_from_env("MONGO_PORT", "27017"),
        user=os.getenv("MONGO_USER") or None,
        password=os.getenv("MONGO_PASSWORD") or None,
        database=os.getenv("MONGO_DATABASE", "formsync"),
        collection=os.getenv("MONGO_PROFILE_COLLECTION", "user_profiles"),
    )

    sync_config = SyncConfig(
        store_backend=_store_backend_from_env(),
        no_override=_no_override_from_env(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )

    try:
        timeout = float(os.getenv("FORMS_API_TIMEOUT", "10.0"))
    except ValueError:
        raise ConfigurationError("FORMS_API_TIMEOUT must be a number") from None

    source_config = SourceConfig(
        api_url=os.getenv("FORMS_API_URL", "http://localhost/wp-json/gf/v2").rstrip("/"),
        api_timeout_seconds=timeout,
        api_user=os.getenv("FORMS_API_USER") or None,
        api_password=os.getenv("FORMS_API_PASSWORD") or None,
    )

    _config_instance = AppConfig(
        mysql=mysql_config,
        mongo=mongo_config,
        sync=sync_config,
        source=source_config,
    )

    return _config_instance


def reset_config() -> None:
    """Forget the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr with a short format (CLI use only)."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
