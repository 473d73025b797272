"""
Locale Resolution Middleware

Creates one LocaleContext per request, resolves it from the ``_locale``
query parameter and exposes it as ``request.state.locale_context`` and via
``locale_context_var`` for code that has no access to the request. Route
handlers resolve the ``_locale`` path parameter on top of it (see
app.dependencies.get_active_locale).

No DB lookups and no header sniffing: an unknown or missing value keeps the
default locale.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from app.config import settings
from app.i18n.context import LocaleContext, locale_context_var
from app.i18n.locale import Locale

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class LanguageMiddleware(BaseHTTPMiddleware):
    """Bind a fresh LocaleContext to every request."""

    def __init__(self, app: ASGIApp, locales: Sequence[Locale] | None = None) -> None:
        super().__init__(app)
        self.locales = tuple(locales or settings.locales)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        context = LocaleContext(self.locales)
        locale = context.resolve(request.query_params.get("_locale"))
        request.state.locale_context = context

        token = locale_context_var.set(context)
        try:
            response = await call_next(request)
        finally:
            locale_context_var.reset(token)

        response.headers["Content-Language"] = context.current().slug
        logger.debug("Request %s served in locale %s", request.url.path, locale.slug)
        return response
