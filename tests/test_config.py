"""Tests for application config loading."""

import pytest

from folio.config import app_config
from folio.config.app_config import (
    DEFAULT_ALLOWED_ORIGINS,
    DEFAULT_DATABASE_URL,
    clear_config_cache,
    load_app_config,
)


@pytest.fixture
def no_config_file(tmp_path, monkeypatch):
    """Run from an empty directory so only defaults and env apply."""
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    """Tests for built-in defaults."""

    def test_defaults_without_file(self, no_config_file):
        config = load_app_config()
        assert config.environment == "development"
        assert config.database.url == DEFAULT_DATABASE_URL
        assert config.database.is_default
        assert config.allowed_origins == DEFAULT_ALLOWED_ORIGINS
        assert config.server.port == 3000

    def test_auth_disabled_by_default(self, no_config_file):
        assert not load_app_config().auth.enabled


class TestEnvOverrides:
    """Tests for environment variable overrides."""

    def test_database_url(self, no_config_file, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://u:p@db/folio")
        config = load_app_config()
        assert config.database.url == "postgresql+psycopg://u:p@db/folio"
        assert not config.database.is_default

    def test_auth_enabled_with_url_and_key(self, no_config_file, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://x.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
        assert load_app_config().auth.enabled

    def test_auth_needs_both(self, no_config_file, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://x.supabase.co")
        assert not load_app_config().auth.enabled

    def test_port_and_environment(self, no_config_file, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("ENVIRONMENT", "production")
        config = load_app_config()
        assert config.server.port == 8080
        assert config.is_production

    def test_cors_origins_comma_separated(self, no_config_file, monkeypatch):
        monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://a.test, https://b.test,")
        assert load_app_config().allowed_origins == ["https://a.test", "https://b.test"]


class TestConfigFile:
    """Tests for the YAML config file."""

    def test_file_values_merge_over_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "data" / "config" / "app_config_v1.yaml"
        path.parent.mkdir(parents=True)
        path.write_text("environment: production\nserver:\n  port: 4000\n")

        config = load_app_config()
        assert config.is_production
        assert config.server.port == 4000
        assert config.server.site_port == 5173

    def test_env_wins_over_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "data" / "config" / "app_config_v1.yaml"
        path.parent.mkdir(parents=True)
        path.write_text("server:\n  port: 4000\n")
        monkeypatch.setenv("PORT", "5000")

        assert load_app_config().server.port == 5000


class TestCache:
    """Tests for config caching."""

    def test_cached_until_cleared(self, no_config_file, monkeypatch):
        first = load_app_config()
        monkeypatch.setenv("ENVIRONMENT", "production")
        assert load_app_config() is first

        clear_config_cache()
        assert load_app_config().is_production

    def test_force_reload(self, no_config_file, monkeypatch):
        load_app_config()
        monkeypatch.setenv("ENVIRONMENT", "test")
        assert load_app_config(force_reload=True).environment == "test"
        assert app_config._cached_config.environment == "test"
