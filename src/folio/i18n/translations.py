"""Static string tables for the public site.

Tables live in locales/<lang>.yaml next to this module and are
looked up with dotted keys:

    translate("hero.greeting", "vi")  # "Xin chào!"
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

TRANSLATIONS_DIR = Path(__file__).parent / "locales"

SUPPORTED_LANGUAGES = ("en", "vi")
DEFAULT_LANGUAGE = "en"


@lru_cache(maxsize=len(SUPPORTED_LANGUAGES))
def load_translations(language: str) -> dict[str, Any]:
    """Load the string table for a language.

    Unsupported languages get the default table.
    """
    if language not in SUPPORTED_LANGUAGES:
        language = DEFAULT_LANGUAGE

    path = TRANSLATIONS_DIR / f"{language}.yaml"
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    logger.debug("translations.loaded", language=language, sections=len(data))
    return data


def _lookup(table: dict[str, Any], key: str) -> Any:
    node: Any = table
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def translate(key: str, language: str = DEFAULT_LANGUAGE, default: str | None = None) -> Any:
    """Look up a dotted key, falling back to English, then to default/key."""
    value = _lookup(load_translations(language), key)
    if value is None and language != DEFAULT_LANGUAGE:
        value = _lookup(load_translations(DEFAULT_LANGUAGE), key)
    if value is None:
        return default if default is not None else key
    return value


def clear_translations_cache() -> None:
    """Clear the translations cache."""
    load_translations.cache_clear()
