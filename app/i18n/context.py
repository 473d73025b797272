"""
Active-locale context

One LocaleContext exists per in-flight operation (normally an HTTP request).
LanguageMiddleware creates it, binds it to ``locale_context_var`` for the
lifetime of the request and stores it on ``request.state.locale_context``.
Nothing here is process-wide mutable state.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from contextvars import ContextVar

from app.exceptions import LocaleConfigurationError
from app.i18n.locale import Locale

logger = logging.getLogger(__name__)


class LocaleContext:
    """Resolves and holds the active locale for a single operation."""

    def __init__(self, locales: Sequence[Locale]) -> None:
        if not locales:
            raise LocaleConfigurationError("At least one locale must be configured")
        self._locales: tuple[Locale, ...] = tuple(locales)
        self._current: Locale | None = None

    @property
    def locales(self) -> tuple[Locale, ...]:
        return self._locales

    @property
    def default(self) -> Locale:
        """The first configured locale; its values live in the primary slots."""
        return self._locales[0]

    def resolve(self, requested_slug: str | None) -> Locale:
        """Resolve ``requested_slug`` against the configured locales.

        The configuration code is checked first, then the slug. A value that
        matches nothing leaves the held locale unchanged; with nothing held
        yet, the default locale is used.
        """
        match = self.find(requested_slug)
        if match is not None:
            self._current = match
        elif self._current is None:
            if requested_slug:
                logger.debug("Unknown locale %r requested, using default %s", requested_slug, self.default.slug)
            self._current = self.default
        return self._current

    def current(self) -> Locale:
        """Return the last resolved locale, or the default if none was resolved."""
        return self._current if self._current is not None else self.default

    def is_default(self, locale: Locale | None = None) -> bool:
        return (locale or self.current()) == self.default

    def find(self, identifier: str | None) -> Locale | None:
        """Look up a configured locale by code, then by slug."""
        if not identifier:
            return None
        for locale in self._locales:
            if locale.code is not None and locale.code == identifier:
                return locale
        for locale in self._locales:
            if locale.slug == identifier:
                return locale
        return None


locale_context_var: ContextVar[LocaleContext | None] = ContextVar("locale_context", default=None)


def get_locale_context() -> LocaleContext:
    """Return the context bound to the current operation.

    Outside a request (scripts, error pages served before LanguageMiddleware
    runs) a fresh context holding the default locale is returned.
    """
    context = locale_context_var.get()
    if context is None:
        from app.config import settings

        context = LocaleContext(settings.locales)
    return context
