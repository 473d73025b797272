"""
FastAPI dependencies for the overlay stack

The schema registry, overlay engine and hydrator are built once from
settings; the active locale and repository are per request.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from app.config import settings
from app.database import get_db
from app.i18n.context import LocaleContext, get_locale_context
from app.i18n.locale import Locale
from app.services.content_repository import ContentRepository
from app.translate.hydration import ContentHydrator
from app.translate.overlay import OverlayEngine
from app.translate.schema import SchemaRegistry

# Name of the route/query parameter that selects the locale
LOCALE_PARAM = "_locale"


@lru_cache
def get_schema_registry() -> SchemaRegistry:
    return SchemaRegistry(settings.content_types)


@lru_cache
def get_hydrator() -> ContentHydrator:
    engine = OverlayEngine(settings.default_locale)
    return ContentHydrator(get_schema_registry(), engine, settings.locales)


def get_request_locale_context(request: Request) -> LocaleContext:
    """Return the LocaleContext LanguageMiddleware bound to this request."""
    context = getattr(request.state, "locale_context", None)
    return context if context is not None else get_locale_context()


def get_active_locale(
    request: Request,
    context: LocaleContext = Depends(get_request_locale_context),
) -> Locale:
    """Resolve the ``_locale`` route parameter, falling back to the query string."""
    requested = request.path_params.get(LOCALE_PARAM) or request.query_params.get(LOCALE_PARAM)
    return context.resolve(requested)


def get_content_repository(
    db: AsyncSession = Depends(get_db),
    hydrator: ContentHydrator = Depends(get_hydrator),
) -> ContentRepository:
    return ContentRepository(db, hydrator)
