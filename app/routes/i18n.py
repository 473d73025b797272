"""
Internationalization Routes

    GET /api/v1/i18n/locales   → configured locales with the active one flagged (public)
"""

import logging

from fastapi import Depends

from app.api import create_api_router
from app.dependencies import get_active_locale, get_request_locale_context
from app.i18n.context import LocaleContext
from app.i18n.locale import Locale, get_language_info
from app.schemas.content import LocaleResponse

router = create_api_router(prefix="/i18n", tags=["Internationalization"])
logger = logging.getLogger(__name__)


@router.get("/locales", response_model=list[LocaleResponse])
async def list_locales_route(
    active: Locale = Depends(get_active_locale),
    context: LocaleContext = Depends(get_request_locale_context),
) -> list[LocaleResponse]:
    """List configured locales in configuration order; the first is the default."""
    return [
        LocaleResponse(
            **get_language_info(locale),
            is_default=locale == context.default,
            active=locale == active,
        )
        for locale in context.locales
    ]
