"""
Tests for settings resolution and fail-fast configuration checks.
"""

import pytest

from amplify.config import Settings
from amplify.core.errors import ConfigError


def make_settings(**values) -> Settings:
    base = {
        "database_url": "",
        "store_api_key": "",
        "resend_api_key": "",
        "email_from": "",
    }
    base.update(values)
    return Settings(_env_file=None, **base)


class TestRequire:
    """Tests for Settings.require"""

    def test_all_missing_values_are_named(self):
        with pytest.raises(ConfigError) as exc_info:
            make_settings().require()

        assert exc_info.value.details["missing"] == [
            "database_url",
            "store_api_key",
            "resend_api_key",
            "email_from",
        ]

    def test_complete_settings_pass(self):
        settings = make_settings(
            database_url="postgresql://svc@db.example.com:5432/postgres",
            store_api_key="key",
            resend_api_key="re_x",
            email_from="news@example.com",
        )

        assert settings.require() is settings

    def test_sqlite_fallback_waives_store_values(self):
        settings = make_settings(
            allow_sqlite_fallback=True, resend_api_key="re_x", email_from="a@b.c"
        )

        assert settings.missing() == []


class TestEffectiveDatabaseUrl:
    """Tests for Settings.effective_database_url"""

    @pytest.mark.parametrize(
        "configured, expected",
        [
            ("postgres://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
            ("postgresql://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
            ("sqlite+aiosqlite:///x.db", "sqlite+aiosqlite:///x.db"),
        ],
    )
    def test_urls_are_made_async(self, configured, expected):
        assert make_settings(database_url=configured).effective_database_url == expected

    def test_empty_url_falls_back_to_local_sqlite(self, monkeypatch):
        monkeypatch.delenv("VERCEL", raising=False)

        assert make_settings().effective_database_url == "sqlite+aiosqlite:///./amplify.db"
