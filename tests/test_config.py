import pytest
from pydantic import ValidationError

from app.config import LOCAL_DEV_JWT_SECRET, Settings


def test_database_url_is_composed_from_parts():
    settings = Settings(
        database_url=None,
        db_user="notes",
        db_password="pw",
        db_host="db",
        db_port="5433",
        db_name="notes_db",
    )

    assert settings.async_database_url == "postgresql+asyncpg://notes:pw@db:5433/notes_db"
    assert settings.sync_database_url == "postgresql://notes:pw@db:5433/notes_db"


def test_plain_postgres_url_gets_async_driver():
    settings = Settings(database_url="postgresql://u:p@h:5432/d")

    assert settings.async_database_url == "postgresql+asyncpg://u:p@h:5432/d"
    assert settings.sync_database_url == "postgresql://u:p@h:5432/d"


@pytest.mark.parametrize(
    "overrides",
    [
        {"port": 0},
        {"port": 70000},
        {"log_level": "LOUD"},
        {"bcrypt_rounds": 3},
        {"env": "production", "jwt_secret": ""},
    ],
)
def test_invalid_settings_are_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_local_env_falls_back_to_dev_secret():
    settings = Settings(env="local", jwt_secret="")

    assert settings.effective_jwt_secret == LOCAL_DEV_JWT_SECRET


def test_log_level_is_normalized():
    assert Settings(log_level="debug").log_level == "DEBUG"
