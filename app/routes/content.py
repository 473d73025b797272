"""
Localized Content Routes

Every route is prefixed with the locale slug; the record is read and
written as seen in that locale.

    GET  /api/v1/{_locale}/content/{contenttype}                 → list records
    GET  /api/v1/{_locale}/content/{contenttype}/{id}            → get record
    GET  /api/v1/{_locale}/content/{contenttype}/{id}/slugs      → slug per locale
    GET  /api/v1/{_locale}/content/{contenttype}/slug/{slug}     → get record by slug
    POST /api/v1/{_locale}/content/{contenttype}                 → create record
    PUT  /api/v1/{_locale}/content/{contenttype}/{id}            → update record

``?no_locale_hydrate=true`` on reads returns the stored default-locale values.
"""

import logging

from fastapi import Depends, Query, status

from app.api import create_api_router
from app.config import settings
from app.dependencies import get_active_locale, get_content_repository, get_schema_registry
from app.exceptions import ContentNotFoundError
from app.i18n.locale import Locale
from app.schemas.content import ContentCreate, ContentResponse, ContentUpdate
from app.services.content_repository import ContentRepository
from app.services.content_service import create_content, update_content
from app.translate.schema import SchemaRegistry

router = create_api_router(prefix="/{_locale}/content", tags=["Content"])
logger = logging.getLogger(__name__)


def known_contenttype(
    contenttype: str,
    registry: SchemaRegistry = Depends(get_schema_registry),
) -> str:
    """Reject content types that are not configured (404)."""
    registry.get_schema(contenttype)
    return contenttype


@router.get("/{contenttype}", response_model=list[ContentResponse])
async def list_content_route(
    contenttype: str = Depends(known_contenttype),
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    no_locale_hydrate: bool = Query(False),
    locale: Locale = Depends(get_active_locale),
    repo: ContentRepository = Depends(get_content_repository),
) -> list[ContentResponse]:
    records = await repo.list_records(contenttype, locale, skip=skip, limit=limit, skip_overlay=no_locale_hydrate)
    return [ContentResponse.from_record(record) for record in records]


@router.get("/{contenttype}/slug/{slug}", response_model=ContentResponse)
async def get_content_by_slug_route(
    slug: str,
    contenttype: str = Depends(known_contenttype),
    no_locale_hydrate: bool = Query(False),
    locale: Locale = Depends(get_active_locale),
    repo: ContentRepository = Depends(get_content_repository),
) -> ContentResponse:
    record = await repo.get_by_slug(
        contenttype,
        slug,
        locale,
        translate_slugs=settings.translate_slugs,
        skip_overlay=no_locale_hydrate,
    )
    if record is None:
        raise ContentNotFoundError(slug)
    return ContentResponse.from_record(record)


@router.get("/{contenttype}/{record_id}", response_model=ContentResponse)
async def get_content_route(
    record_id: int,
    contenttype: str = Depends(known_contenttype),
    no_locale_hydrate: bool = Query(False),
    locale: Locale = Depends(get_active_locale),
    repo: ContentRepository = Depends(get_content_repository),
) -> ContentResponse:
    record = await repo.get(contenttype, record_id, locale, skip_overlay=no_locale_hydrate)
    if record is None:
        raise ContentNotFoundError(record_id)
    return ContentResponse.from_record(record)


@router.get("/{contenttype}/{record_id}/slugs", response_model=dict[str, str | None])
async def get_localized_slugs_route(
    record_id: int,
    contenttype: str = Depends(known_contenttype),
    repo: ContentRepository = Depends(get_content_repository),
) -> dict[str, str | None]:
    """Slug of the record in every configured locale (locale switcher data)."""
    return await repo.localized_slugs(contenttype, record_id)


@router.post("/{contenttype}", response_model=ContentResponse, status_code=status.HTTP_201_CREATED)
async def create_content_route(
    payload: ContentCreate,
    contenttype: str = Depends(known_contenttype),
    locale: Locale = Depends(get_active_locale),
    repo: ContentRepository = Depends(get_content_repository),
) -> ContentResponse:
    record = await create_content(repo, contenttype, payload, locale)
    return ContentResponse.from_record(record)


@router.put("/{contenttype}/{record_id}", response_model=ContentResponse)
async def update_content_route(
    record_id: int,
    payload: ContentUpdate,
    contenttype: str = Depends(known_contenttype),
    locale: Locale = Depends(get_active_locale),
    repo: ContentRepository = Depends(get_content_repository),
) -> ContentResponse:
    record = await update_content(repo, contenttype, record_id, payload, locale)
    return ContentResponse.from_record(record)
