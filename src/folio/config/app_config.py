"""Application configuration loader.

Loads centralized configuration from data/config/app_config_v1.yaml,
then applies environment variable overrides (DATABASE_URL, SUPABASE_URL, ...).
Missing file and missing variables fall back to built-in defaults.

Usage:
    from folio.config.app_config import load_app_config

    config = load_app_config()
    config.database.url
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")

DEFAULT_DATABASE_URL = "sqlite:///db/folio.db"

DEFAULT_ALLOWED_ORIGINS = [
    "https://mason.id.vn",
    "https://www.mason.id.vn",
    "http://localhost:5173",
    "http://localhost:3000",
]


@dataclass
class DatabaseConfig:
    """Relational database settings."""

    url: str = DEFAULT_DATABASE_URL
    echo: bool = False

    @property
    def is_default(self) -> bool:
        """True when no database URL was configured."""
        return self.url == DEFAULT_DATABASE_URL


@dataclass
class AuthConfig:
    """External identity provider (Supabase GoTrue) settings."""

    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    timeout_seconds: float = 5.0

    @property
    def enabled(self) -> bool:
        """Auth checks only run when both URL and key are set."""
        return bool(self.supabase_url and self.supabase_anon_key)


@dataclass
class ServerConfig:
    """HTTP server settings for the CMS/API and the public site."""

    host: str = "127.0.0.1"
    port: int = 3000
    site_port: int = 5173
    public_site_url: str = "http://localhost:5173"


@dataclass
class AppConfig:
    """Application-wide configuration."""

    environment: str = "development"
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    allowed_origins: list[str] = field(
        default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS)
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "environment": "development",
        "database": {
            "url": DEFAULT_DATABASE_URL,
            "echo": False,
        },
        "auth": {
            "supabase_url": None,
            "supabase_anon_key": None,
            "timeout_seconds": 5.0,
        },
        "server": {
            "host": "127.0.0.1",
            "port": 3000,
            "site_port": 5173,
            "public_site_url": "http://localhost:5173",
        },
        "cors": {
            "allowed_origins": list(DEFAULT_ALLOWED_ORIGINS),
        },
    }


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge YAML data over defaults, one level deep."""
    result = dict(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = {**result[key], **value}
        else:
            result[key] = value
    return result


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Environment variables win over file and defaults."""
    env = os.environ

    if env.get("ENVIRONMENT"):
        data["environment"] = env["ENVIRONMENT"]
    if env.get("DATABASE_URL"):
        data["database"]["url"] = env["DATABASE_URL"]
    if env.get("SUPABASE_URL"):
        data["auth"]["supabase_url"] = env["SUPABASE_URL"]
    if env.get("SUPABASE_ANON_KEY"):
        data["auth"]["supabase_anon_key"] = env["SUPABASE_ANON_KEY"]
    if env.get("PORT"):
        data["server"]["port"] = int(env["PORT"])
    if env.get("PUBLIC_SITE_URL"):
        data["server"]["public_site_url"] = env["PUBLIC_SITE_URL"]
    if env.get("CORS_ALLOWED_ORIGINS"):
        data["cors"]["allowed_origins"] = [
            origin.strip()
            for origin in env["CORS_ALLOWED_ORIGINS"].split(",")
            if origin.strip()
        ]

    return data


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    db_data = data.get("database", {})
    database = DatabaseConfig(
        url=db_data.get("url") or DEFAULT_DATABASE_URL,
        echo=bool(db_data.get("echo", False)),
    )

    auth_data = data.get("auth", {})
    auth = AuthConfig(
        supabase_url=auth_data.get("supabase_url"),
        supabase_anon_key=auth_data.get("supabase_anon_key"),
        timeout_seconds=float(auth_data.get("timeout_seconds", 5.0)),
    )

    server_data = data.get("server", {})
    server = ServerConfig(
        host=server_data.get("host", "127.0.0.1"),
        port=int(server_data.get("port", 3000)),
        site_port=int(server_data.get("site_port", 5173)),
        public_site_url=server_data.get("public_site_url", "http://localhost:5173"),
    )

    origins = data.get("cors", {}).get("allowed_origins") or list(DEFAULT_ALLOWED_ORIGINS)

    return AppConfig(
        environment=data.get("environment", "development"),
        database=database,
        auth=auth,
        server=server,
        allowed_origins=list(origins),
    )


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config from file, env and defaults.

    Args:
        force_reload: If True, ignore cached config and reload.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data = _get_defaults()

    if CONFIG_FILE.exists():
        logger.debug("loading_app_config", source=str(CONFIG_FILE))
        file_data = yaml.safe_load(CONFIG_FILE.read_text(encoding="utf-8")) or {}
        data = _merge(data, file_data)
    else:
        logger.debug("using_default_config")

    data = _apply_env_overrides(data)

    _cached_config = _parse_config(data)
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when environment is modified at runtime.
    """
    global _cached_config
    _cached_config = None
