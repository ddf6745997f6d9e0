# tests/test_config.py

import pytest

from users_service import config
from users_service.config import Settings, load_settings


ENV_KEYS = (
    "APP_HOST", "APP_PORT", "DB_USER", "DB_PASSWORD", "DB_HOST", "DB_PORT",
    "DB_NAME", "DB_CONNECT_TIMEOUT", "DB_PING_TIMEOUT", "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    settings = load_settings()

    assert settings == Settings()
    assert settings.app_port == 8080
    assert settings.db_user == "postgres"
    assert settings.db_password == ""
    assert settings.db_host == "localhost"
    assert settings.db_port == 5432
    assert settings.db_name == "postgres"


def test_overrides(monkeypatch):
    monkeypatch.setenv("APP_PORT", "9000")
    monkeypatch.setenv("DB_USER", "app")
    monkeypatch.setenv("DB_PASSWORD", "s3cret")
    monkeypatch.setenv("DB_HOST", "db")
    monkeypatch.setenv("DB_PORT", "6543")
    monkeypatch.setenv("DB_NAME", "users")
    monkeypatch.setenv("DB_PING_TIMEOUT", "0.25")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.app_port == 9000
    assert settings.db_user == "app"
    assert settings.db_password == "s3cret"
    assert settings.db_host == "db"
    assert settings.db_port == 6543
    assert settings.db_name == "users"
    assert settings.db_ping_timeout == 0.25
    assert settings.log_level == "DEBUG"


def test_empty_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("APP_PORT", "")
    monkeypatch.setenv("DB_HOST", "")

    settings = load_settings()

    assert settings.app_port == 8080
    assert settings.db_host == "localhost"


@pytest.mark.parametrize("key", ["APP_PORT", "DB_PORT", "DB_PING_TIMEOUT", "LOG_LEVEL"])
def test_invalid_values_raise(monkeypatch, key):
    monkeypatch.setenv(key, "nope")

    with pytest.raises(ValueError, match=key):
        load_settings()


def test_database_url_escapes_credentials():
    settings = Settings(db_user="app", db_password="p@ss/word", db_host="db", db_port=5433, db_name="users")
    url = settings.database_url

    assert url.drivername == "postgresql+psycopg2"
    assert url.username == "app"
    assert url.password == "p@ss/word"
    assert url.host == "db"
    assert url.port == 5433
    assert url.database == "users"
    assert "p@ss/word" not in str(url)


def test_safe_database_target_has_no_credentials():
    settings = Settings(db_user="app", db_password="s3cret")

    assert settings.safe_database_target == "localhost:5432/postgres"
    assert "s3cret" not in settings.safe_database_target
