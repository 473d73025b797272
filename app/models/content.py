"""
Content table

All content types share one table. The primary field slots are stored as a
JSON object in ``fields``; every non-default locale adds two columns,
``<slug>_data`` (JSON overlay) and ``<slug>_slug`` (locale-specific slug).
The default locale has no side columns.
"""

from collections.abc import Sequence
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, MetaData, String, Table, Text

from app.config import settings
from app.database import Base
from app.i18n.locale import Locale


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_content_table(metadata: MetaData, locales: Sequence[Locale], name: str = "content") -> Table:
    """Define the content table for the given locale set on ``metadata``."""
    columns = [
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("contenttype", String(64), nullable=False),
        Column("slug", String(255), nullable=True),
        Column("locale", String(16), nullable=True),
        Column("status", String(20), nullable=True, default="draft"),
        Column("fields", Text, nullable=False, default="{}"),
        Column("datecreated", DateTime, nullable=False, default=_utcnow),
        Column("datechanged", DateTime, nullable=False, default=_utcnow, onupdate=_utcnow),
    ]
    for locale in locales[1:]:
        columns.append(Column(locale.data_slot, Text, nullable=True))
        columns.append(Column(locale.slug_slot, String(255), nullable=True))

    return Table(
        name,
        metadata,
        *columns,
        Index(f"idx_{name}_contenttype_slug", "contenttype", "slug"),
    )


content_table = build_content_table(Base.metadata, settings.locales)
