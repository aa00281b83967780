"""Internationalization: string tables and i18n text helpers."""

from folio.i18n.helpers import (
    LANGUAGE_COOKIE,
    get_i18n_text,
    get_language_from_request,
    is_valid_i18n,
    merge_i18n,
    text_to_i18n,
)
from folio.i18n.translations import (
    DEFAULT_LANGUAGE,
    SUPPORTED_LANGUAGES,
    clear_translations_cache,
    load_translations,
    translate,
)

__all__ = [
    "DEFAULT_LANGUAGE",
    "LANGUAGE_COOKIE",
    "SUPPORTED_LANGUAGES",
    "clear_translations_cache",
    "get_i18n_text",
    "get_language_from_request",
    "is_valid_i18n",
    "load_translations",
    "merge_i18n",
    "text_to_i18n",
    "translate",
]
