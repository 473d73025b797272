"""
Locale helpers

- Locale: one configured locale (slug + configuration code + label)
- RTL (right-to-left) language detection
- Language metadata lookup for the locale listing endpoint
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# ── Constants ─────────────────────────────────────────────────────────────────

# Base language codes whose scripts read right-to-left
RTL_LOCALES: frozenset[str] = frozenset({"ar", "he", "fa", "ur", "yi", "ku"})

# Human-readable names for common locale slugs
LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "fr": "Français",
    "de": "Deutsch",
    "es": "Español",
    "ar": "العربية",
    "zh": "中文",
    "ja": "日本語",
    "pt": "Português",
    "it": "Italiano",
    "nl": "Nederlands",
}


class Locale(BaseModel):
    """A configured locale.

    ``slug`` is what appears in URLs and in side-slot column names
    (``<slug>_data``, ``<slug>_slug``). ``code`` is the key the locale is
    configured under (e.g. ``fr_FR``) and works as an alternate lookup key.
    """

    model_config = ConfigDict(frozen=True)

    slug: str = Field(..., min_length=1, pattern=r"^[A-Za-z][A-Za-z0-9_]*$")
    code: str | None = None
    label: str | None = None

    @property
    def data_slot(self) -> str:
        return f"{self.slug}_data"

    @property
    def slug_slot(self) -> str:
        return f"{self.slug}_slug"

    def matches(self, identifier: str | None) -> bool:
        """Return True if ``identifier`` is this locale's slug or code."""
        if not identifier:
            return False
        return identifier == self.slug or (self.code is not None and identifier == self.code)


# ── Public helpers ────────────────────────────────────────────────────────────


def is_rtl_locale(locale: str) -> bool:
    """Return True when the given locale is right-to-left.

    Compares only the base language tag (before the first hyphen or
    underscore), so "ar", "ar-SA" and "ar_SA" are all identified as RTL.
    """
    base = locale.replace("_", "-").split("-")[0].lower()
    return base in RTL_LOCALES


def get_language_info(locale: Locale) -> dict[str, str | bool | None]:
    """Return a metadata dict describing the given configured locale.

    Returns:
        Dict with keys: ``slug``, ``code``, ``name`` and ``is_rtl``.
    """
    return {
        "slug": locale.slug,
        "code": locale.code,
        "name": locale.label or LANGUAGE_NAMES.get(locale.slug, locale.slug),
        "is_rtl": is_rtl_locale(locale.code or locale.slug),
    }
