"""
Content Service

Create and update content under the active locale. Field values written
while a non-default locale is active end up in that locale's overlay; the
primary columns keep the default-locale values.
"""

from __future__ import annotations

import logging
from typing import Any

from app.exceptions import ContentNotFoundError, UnknownFieldError
from app.i18n.locale import Locale
from app.schemas.content import ContentCreate, ContentUpdate
from app.services.content_repository import ContentRepository
from app.translate.record import ContentRecord
from app.utils.slugify import slugify

logger = logging.getLogger(__name__)


def _apply_fields(record: ContentRecord, fields: dict[str, Any]) -> None:
    """Write payload values into the record's field slots only.

    Reserved columns and locale side-slots are not writable through ``fields``.
    """
    unknown = [key for key in fields if not record.has_field(key)]
    if unknown:
        raise UnknownFieldError(unknown[0], record.contenttype)
    for key, value in fields.items():
        record.set(key, value)


async def create_content(
    repo: ContentRepository,
    contenttype: str,
    content_data: ContentCreate,
    locale: Locale,
) -> ContentRecord:
    """
    Creates a new content record.

    Args:
        repo (ContentRepository): Repository bound to the request's session.
        contenttype (str): Name of the content type.
        content_data (ContentCreate): Slug, locale, status and field values.
        locale (Locale): The active locale.

    Returns:
        ContentRecord: The saved record, showing the active locale's values.
    """
    record = repo.hydrator.new_record(contenttype)
    _apply_fields(record, content_data.fields)
    record.locale = content_data.locale or locale.slug
    record.status = content_data.status
    record.slug = content_data.slug or slugify(record.get("title")) or None

    record = await repo.save(record, locale)
    logger.info(f"Content created successfully: {record.contenttype}#{record.id}")
    return record


async def update_content(
    repo: ContentRepository,
    contenttype: str,
    record_id: int,
    data: ContentUpdate,
    locale: Locale,
) -> ContentRecord:
    """Apply ``data`` to the record as seen under ``locale`` and save it.

    Raises:
        ContentNotFoundError: no record with this id and content type.
    """
    record = await repo.get(contenttype, record_id, locale)
    if record is None:
        raise ContentNotFoundError(record_id)

    _apply_fields(record, data.fields)
    record.locale = data.locale or locale.slug
    if data.status is not None:
        record.status = data.status
    if data.slug is not None:
        record.slug = data.slug

    return await repo.save(record, locale)
