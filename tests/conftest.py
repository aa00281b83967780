"""Shared fixtures.

Every test gets its own SQLite database under tmp_path, and config is
built in-process so the environment and data/config never leak in.
"""

import pytest
from fastapi.testclient import TestClient

from folio.config import AppConfig, AuthConfig, DatabaseConfig, clear_config_cache
from folio.db import dispose_engine, init_db

ENV_VARS = (
    "ENVIRONMENT",
    "DATABASE_URL",
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "PORT",
    "PUBLIC_SITE_URL",
    "CORS_ALLOWED_ORIGINS",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Drop config env vars and cached config around each test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def db_url(tmp_path):
    """Fresh SQLite database with the schema created."""
    url = f"sqlite:///{tmp_path / 'test.db'}"
    init_db(url)
    yield url
    dispose_engine()


@pytest.fixture
def config(db_url):
    """Config pointing at the test database, identity provider disabled."""
    return AppConfig(environment="test", database=DatabaseConfig(url=db_url))


@pytest.fixture
def auth_config(db_url):
    """Config with an identity provider configured."""
    return AppConfig(
        environment="test",
        database=DatabaseConfig(url=db_url),
        auth=AuthConfig(supabase_url="https://auth.example.test", supabase_anon_key="anon-key"),
    )


@pytest.fixture
def client(config):
    """API client (lifespan not run; the database is already initialized)."""
    from folio.web.api import create_app

    return TestClient(create_app(config))
