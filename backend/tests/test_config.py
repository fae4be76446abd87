import pytest

from roster.core.config import Settings


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgres://u:p@db/roster", "postgresql+asyncpg://u:p@db/roster"),
        ("postgresql://u:p@db/roster", "postgresql+asyncpg://u:p@db/roster"),
        ("postgresql+asyncpg://u:p@db/roster", "postgresql+asyncpg://u:p@db/roster"),
        ("sqlite:///roster.db", "sqlite+aiosqlite:///roster.db"),
    ],
)
def test_database_url_uses_async_driver(url, expected):
    assert Settings(DATABASE_URL=url).DATABASE_URL == expected


def test_sync_url_for_migrations():
    settings = Settings(DATABASE_URL="postgresql://u:p@db/roster")
    assert settings.DATABASE_URL_SYNC == "postgresql://u:p@db/roster"
    assert not settings.is_sqlite

    sqlite = Settings(DATABASE_URL="sqlite:///roster.db")
    assert sqlite.DATABASE_URL_SYNC == "sqlite:///roster.db"
    assert sqlite.is_sqlite
