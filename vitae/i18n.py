"""Internationalization (i18n) utilities for the CV and portfolio pages.

Loads UI strings from i18n/translations.json and provides the resolver used by
both render engines: active-language resolution, bilingual field lookup and
date formatting.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, List, Optional

from vitae.config import DEFAULT_LANG, OWNER_NAME, SUPPORTED_LANGS

# Cache for translations
_translations_cache: Optional[Dict[str, Any]] = None

PERIOD_SEPARATOR = " – "


def load_translations() -> Dict[str, Any]:
    """Load translations from JSON file (cached).

    Returns:
        Dictionary with language codes as keys (de, en).
    """
    global _translations_cache

    if _translations_cache is not None:
        return _translations_cache

    translations_path = Path(__file__).parent / "i18n" / "translations.json"

    with open(translations_path, "r", encoding="utf-8") as f:
        _translations_cache = json.load(f)
    return _translations_cache


def is_supported(lang: Any) -> bool:
    return isinstance(lang, str) and lang in SUPPORTED_LANGS


def get_translation(language: str, category: str, key: str, default: str = "") -> str:
    """Get a UI string for a specific language, category, and key.

    Unknown languages fall back to the default language. ``{owner}`` placeholders
    are filled with the configured owner name.

    Args:
        language: Language code (de, en).
        category: Translation category (e.g., "sections", "cv", "portfolio").
        key: Translation key within the category.
        default: Default value if translation not found.

    Returns:
        Translated string or default value.
    """
    translations = load_translations()
    lang = str(language).lower().strip()

    if lang not in translations:
        lang = DEFAULT_LANG

    value = translations.get(lang, {}).get(category, {}).get(key, default)
    return value.replace("{owner}", OWNER_NAME)


def resolve_initial_language(
    query_lang: Optional[str] = None,
    stored_lang: Optional[str] = None,
    browser_lang: Optional[str] = None,
) -> str:
    """Pick the active language for a page load.

    Priority: query parameter, persisted preference, browser language (primary
    subtag only), then the hard default. Always returns a supported code.
    """
    if is_supported(query_lang):
        return query_lang
    if is_supported(stored_lang):
        return stored_lang
    browser = (browser_lang or "").lower()[:2]
    if is_supported(browser):
        return browser
    return DEFAULT_LANG


def localize(field: Any, lang: str) -> Any:
    """Resolve a bilingual field.

    Plain strings are language-agnostic and returned verbatim; mappings yield the
    value for ``lang``, then ``de``, then ``""``. Absent fields give ``""``.
    Mapping values may themselves be lists (bullet fields).
    """
    if field is None or field == "":
        return ""
    if isinstance(field, str):
        return field
    if isinstance(field, Mapping):
        return field.get(lang) or field.get(DEFAULT_LANG) or ""
    if isinstance(field, (int, float)) and not isinstance(field, bool):
        return str(field)
    return ""


def localize_list(field: Any, lang: str) -> List[str]:
    """Resolve a bilingual field holding a sequence of strings."""
    if isinstance(field, (list, tuple)):
        return [str(item) for item in field]
    value = localize(field, lang)
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return []


def format_date(value: Any, lang: str) -> str:
    """Format "YYYY-MM" as a short month + year; "YYYY" stays as is; absent means present."""
    if value is None or str(value).strip() == "":
        return get_translation(lang, "common", "present")

    text = str(value).strip()
    year, _, month = text.partition("-")
    if not month:
        return year
    try:
        month_index = int(month)
    except ValueError:
        return text
    if not 1 <= month_index <= 12:
        return text

    lang = lang if is_supported(lang) else DEFAULT_LANG
    months = load_translations()[lang]["months"]
    return f"{months[month_index - 1]} {year}"


def format_period(start: Any, end: Any, lang: str) -> str:
    return f"{format_date(start, lang)}{PERIOD_SEPARATOR}{format_date(end, lang)}"
