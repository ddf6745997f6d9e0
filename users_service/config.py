# users_service/config.py

import os
from dataclasses import dataclass
from dotenv import load_dotenv
from sqlalchemy.engine import URL


# -------------------------------
# Environment Defaults
# -------------------------------

DEFAULT_APP_HOST = "0.0.0.0"
DEFAULT_APP_PORT = 8080
DEFAULT_DB_USER = "postgres"
DEFAULT_DB_PASSWORD = ""
DEFAULT_DB_HOST = "localhost"
DEFAULT_DB_PORT = 5432
DEFAULT_DB_NAME = "postgres"

# libpq only accepts whole seconds and treats anything below 2 as 2
DEFAULT_DB_CONNECT_TIMEOUT = 2
DEFAULT_DB_PING_TIMEOUT = 0.5

DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _getenv(key: str, default: str) -> str:
    # An empty variable counts as unset
    value = os.getenv(key)
    return value if value else default


def _getenv_int(key: str, default: int) -> int:
    value = _getenv(key, str(default))
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}") from None


def _getenv_float(key: str, default: float) -> float:
    value = _getenv(key, str(default))
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {value!r}") from None


@dataclass(frozen=True)
class Settings:
    """
    Process configuration read from the environment at startup.
    """
    app_host: str = DEFAULT_APP_HOST
    app_port: int = DEFAULT_APP_PORT
    db_user: str = DEFAULT_DB_USER
    db_password: str = DEFAULT_DB_PASSWORD
    db_host: str = DEFAULT_DB_HOST
    db_port: int = DEFAULT_DB_PORT
    db_name: str = DEFAULT_DB_NAME
    db_connect_timeout: int = DEFAULT_DB_CONNECT_TIMEOUT
    db_ping_timeout: float = DEFAULT_DB_PING_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def database_url(self) -> URL:
        return URL.create(
            "postgresql+psycopg2",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    @property
    def safe_database_target(self) -> str:
        """
        Database location suitable for log lines. Never includes credentials.
        """
        return f"{self.db_host}:{self.db_port}/{self.db_name}"


def load_settings() -> Settings:
    load_dotenv()

    log_level = _getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    return Settings(
        app_host=_getenv("APP_HOST", DEFAULT_APP_HOST),
        app_port=_getenv_int("APP_PORT", DEFAULT_APP_PORT),
        db_user=_getenv("DB_USER", DEFAULT_DB_USER),
        db_password=_getenv("DB_PASSWORD", DEFAULT_DB_PASSWORD),
        db_host=_getenv("DB_HOST", DEFAULT_DB_HOST),
        db_port=_getenv_int("DB_PORT", DEFAULT_DB_PORT),
        db_name=_getenv("DB_NAME", DEFAULT_DB_NAME),
        db_connect_timeout=_getenv_int("DB_CONNECT_TIMEOUT", DEFAULT_DB_CONNECT_TIMEOUT),
        db_ping_timeout=_getenv_float("DB_PING_TIMEOUT", DEFAULT_DB_PING_TIMEOUT),
        log_level=log_level,
    )
