"""
Content Repository

Reads and writes ContentRecords in the content table and drives the locale
overlay around each operation:

    get / get_by_slug / list_records   hydration pipeline (overlay phases 1 and 2)
    save                               persistence pipeline (overlay phases 3 and 4)

Phase 3 needs a synchronous point read of the stored default-locale record,
so it runs inside ``AsyncSession.run_sync`` against the same connection.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Table, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002
from sqlalchemy.orm import Session  # noqa: TC002

from app.exceptions import ContentNotFoundError, DatabaseError
from app.i18n.locale import Locale
from app.models.content import content_table
from app.translate.hydration import ContentHydrator
from app.translate.record import ContentRecord

logger = logging.getLogger(__name__)


class SessionRecordLookup:
    """RecordLookup reading the stored default-locale record through a sync Session."""

    def __init__(self, session: Session, table: Table, hydrator: ContentHydrator) -> None:
        self.session = session
        self.table = table
        self.hydrator = hydrator

    def get_by_identity(self, contenttype: str, record_id: int) -> ContentRecord | None:
        row = (
            self.session.execute(
                select(self.table).where(
                    self.table.c.id == record_id,
                    self.table.c.contenttype == contenttype,
                )
            )
            .mappings()
            .first()
        )
        if row is None:
            return None
        return self.hydrator.hydrate(row, self.hydrator.engine.default_locale, skip_overlay=True)


class ContentRepository:
    """Content table access for one database session."""

    def __init__(self, db: AsyncSession, hydrator: ContentHydrator, table: Table = content_table) -> None:
        self.db = db
        self.hydrator = hydrator
        self.table = table

    @property
    def default_locale(self) -> Locale:
        return self.hydrator.engine.default_locale

    # ── Reads ─────────────────────────────────────────────────────────────────

    async def get(
        self,
        contenttype: str,
        record_id: int,
        locale: Locale,
        *,
        skip_overlay: bool = False,
    ) -> ContentRecord | None:
        """Fetch a record by id as seen under ``locale``. Returns None if not found."""
        row = await self._fetch_one(self.table.c.contenttype == contenttype, self.table.c.id == record_id)
        if row is None:
            return None
        return self.hydrator.hydrate(row, locale, skip_overlay=skip_overlay)

    async def get_by_slug(
        self,
        contenttype: str,
        slug: str,
        locale: Locale,
        *,
        translate_slugs: bool = True,
        skip_overlay: bool = False,
    ) -> ContentRecord | None:
        """Fetch a record by slug.

        With ``translate_slugs`` and a non-default locale, the locale's own
        slug column is tried before the primary slug.
        """
        row = None
        if translate_slugs and locale.slug != self.default_locale.slug:
            row = await self._fetch_one(
                self.table.c.contenttype == contenttype,
                self.table.c[locale.slug_slot] == slug,
            )
        if row is None:
            row = await self._fetch_one(self.table.c.contenttype == contenttype, self.table.c.slug == slug)
        if row is None:
            return None
        return self.hydrator.hydrate(row, locale, skip_overlay=skip_overlay)

    async def list_records(
        self,
        contenttype: str,
        locale: Locale,
        *,
        skip: int = 0,
        limit: int = 10,
        skip_overlay: bool = False,
    ) -> list[ContentRecord]:
        query = (
            select(self.table)
            .where(self.table.c.contenttype == contenttype)
            .order_by(self.table.c.id)
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return [self.hydrator.hydrate(row, locale, skip_overlay=skip_overlay) for row in result.mappings().all()]

    async def localized_slugs(self, contenttype: str, record_id: int) -> dict[str, str | None]:
        """Return the record's slug in every configured locale.

        Locales without a slug of their own fall back to the primary slug.
        """
        row = await self._fetch_one(self.table.c.contenttype == contenttype, self.table.c.id == record_id)
        if row is None:
            raise ContentNotFoundError(record_id)

        slugs: dict[str, str | None] = {}
        for locale in self.hydrator.locales:
            if locale.slug == self.default_locale.slug:
                slugs[locale.slug] = row["slug"]
            else:
                slugs[locale.slug] = row.get(locale.slug_slot) or row["slug"]
        return slugs

    async def _fetch_one(self, *criteria: Any):
        result = await self.db.execute(select(self.table).where(*criteria).limit(1))
        return result.mappings().first()

    # ── Writes ────────────────────────────────────────────────────────────────

    async def save(self, record: ContentRecord, locale: Locale) -> ContentRecord:
        """Persist ``record`` edited under ``locale`` and return it.

        Afterwards the record shows the ``locale`` values again, even though
        the primary columns were written with default-locale values.
        """
        schema = self.hydrator.registry.get_schema(record.contenttype)
        await self.db.run_sync(self._extract_overlay, record, schema, locale)

        now = datetime.now(timezone.utc)
        record.datechanged = now
        if record.datecreated is None:
            record.datecreated = now
        values = self.hydrator.dehydrate(record)

        try:
            if record.id:
                result = await self.db.execute(
                    update(self.table)
                    .where(
                        self.table.c.id == record.id,
                        self.table.c.contenttype == record.contenttype,
                    )
                    .values(**values)
                )
                if result.rowcount == 0:
                    raise ContentNotFoundError(record.id)
            else:
                result = await self.db.execute(insert(self.table).values(**values))
                record.id = result.inserted_primary_key[0]
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Error saving {record.contenttype} record: {str(e)}")
            raise DatabaseError(f"Failed to save content: {str(e)}", operation="save") from e
        except ContentNotFoundError:
            await self.db.rollback()
            raise

        logger.info("Content saved: contenttype=%s id=%s locale=%s", record.contenttype, record.id, locale.slug)
        self.hydrator.engine.reapply_after_save(record, locale)
        return record

    def _extract_overlay(self, session: Session, record, schema, locale: Locale) -> None:
        lookup = SessionRecordLookup(session, self.table, self.hydrator)
        self.hydrator.engine.extract_before_save(record, schema, locale, lookup)
