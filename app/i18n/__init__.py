"""
i18n (Internationalization) package

Locale model, per-operation locale context and language metadata helpers.
"""

from .context import LocaleContext, get_locale_context, locale_context_var
from .locale import (
    LANGUAGE_NAMES,
    RTL_LOCALES,
    Locale,
    get_language_info,
    is_rtl_locale,
)

__all__ = [
    "LANGUAGE_NAMES",
    "RTL_LOCALES",
    "Locale",
    "LocaleContext",
    "get_language_info",
    "get_locale_context",
    "is_rtl_locale",
    "locale_context_var",
]
