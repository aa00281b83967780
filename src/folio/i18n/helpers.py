"""Helpers for multi-language text.

Content fields may hold a plain string or an i18n object
{"en": "...", "vi": "..."}. The language of a request comes from
?lang=, then the persisted `language` cookie, then Accept-Language.
"""

from __future__ import annotations

from typing import Any, Union

from starlette.requests import Request

from folio.i18n.translations import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES

LANGUAGE_COOKIE = "language"

I18nText = Union[dict[str, str], str]


def get_language_from_request(request: Request) -> str:
    """Pick the language for a request.

    Priority: ?lang= query param, `language` cookie, Accept-Language header.
    Falls back to "en".
    """
    lang = request.query_params.get("lang")
    if lang in SUPPORTED_LANGUAGES:
        return lang

    lang = request.cookies.get(LANGUAGE_COOKIE)
    if lang in SUPPORTED_LANGUAGES:
        return lang

    accept_language = request.headers.get("accept-language", "")
    if "vi" in accept_language:
        return "vi"
    if "en" in accept_language:
        return "en"

    return DEFAULT_LANGUAGE


def get_i18n_text(
    i18n_text: I18nText | None,
    language: str = DEFAULT_LANGUAGE,
    fallback: str = "",
) -> str:
    """Get text in a language from an i18n object or plain string.

    Order: requested language, "en", "vi", first string value, fallback.
    """
    if not i18n_text:
        return fallback

    if isinstance(i18n_text, str):
        return i18n_text

    for key in (language, "en", "vi"):
        if i18n_text.get(key):
            return i18n_text[key]

    for value in i18n_text.values():
        if isinstance(value, str):
            return value

    return fallback


def text_to_i18n(text: str | None, language: str = DEFAULT_LANGUAGE) -> dict[str, str] | None:
    """Wrap plain text as an i18n object; blank text gives None."""
    if not text or not text.strip():
        return None
    return {language: text.strip()}


def merge_i18n(existing: I18nText | None, updates: dict[str, str]) -> dict[str, str]:
    """Merge language values into an existing i18n object (plain strings count as English)."""
    if isinstance(existing, str):
        base = {"en": existing}
    else:
        base = dict(existing or {})
    return {**base, **updates}


def is_valid_i18n(value: Any) -> bool:
    """True for a dict with at least one supported language key."""
    if not value or not isinstance(value, dict):
        return False
    return any(key in SUPPORTED_LANGUAGES for key in value)
