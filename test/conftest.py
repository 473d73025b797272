"""
Pytest configuration and fixtures

Overlay tests run against a two-locale setup (en default, fr) and a
``pages`` content type with scalar, repeater and template-selector fields.
Database tests use an in-memory SQLite database per test.
"""

import os
import sys
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from app.i18n.locale import Locale  # noqa: E402
from app.models.content import build_content_table  # noqa: E402
from app.schemas.content_type import ContentTypeDefinition  # noqa: E402
from app.services.content_repository import ContentRepository  # noqa: E402
from app.translate.hydration import ContentHydrator  # noqa: E402
from app.translate.overlay import OverlayEngine  # noqa: E402
from app.translate.record import ContentRecord  # noqa: E402
from app.translate.schema import SchemaRegistry  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

EN = Locale(code="en_GB", slug="en", label="English")
FR = Locale(code="fr_FR", slug="fr", label="Français")

CONTENT_TYPES = {
    "pages": ContentTypeDefinition.model_validate(
        {
            "fields": {
                "title": {"type": "text", "is_translatable": True},
                "body": {"type": "html", "is_translatable": True},
                "image": {"type": "image"},
                "blocks": {"type": "repeater", "is_translatable": True, "fields": {"text": {"type": "text"}}},
                "template": {"type": "templateselect", "is_translatable": True},
            }
        }
    ),
    "settings": ContentTypeDefinition.model_validate(
        {
            "fields": {
                "name": {"type": "text"},
                "value": {"type": "textarea"},
            }
        }
    ),
}


class InMemoryLookup:
    """RecordLookup over a dict of stored default-locale records."""

    def __init__(self, records: dict[int, ContentRecord] | None = None):
        self.records = records or {}
        self.calls: list[tuple[str, int]] = []

    def get_by_identity(self, contenttype: str, record_id: int) -> ContentRecord | None:
        self.calls.append((contenttype, record_id))
        return self.records.get(record_id)


@pytest.fixture
def locales() -> list[Locale]:
    return [EN, FR]


@pytest.fixture
def registry() -> SchemaRegistry:
    return SchemaRegistry(CONTENT_TYPES)


@pytest.fixture
def pages_schema(registry):
    return registry.get_schema("pages")


@pytest.fixture
def overlay_engine(locales) -> OverlayEngine:
    return OverlayEngine(locales[0])


@pytest.fixture
def hydrator(registry, overlay_engine, locales) -> ContentHydrator:
    return ContentHydrator(registry, overlay_engine, locales)


@pytest.fixture
def lookup() -> InMemoryLookup:
    return InMemoryLookup()


@pytest.fixture
def make_page(pages_schema, locales):
    """Build a pages record with the given slots set."""

    def _make(**values) -> ContentRecord:
        record = ContentRecord(pages_schema, locales)
        for key, value in values.items():
            record.set(key, value)
        return record

    return _make


@pytest.fixture
def content_table(locales):
    return build_content_table(MetaData(), locales)


@pytest.fixture(scope="function")
async def test_db(content_table) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session on a fresh in-memory database holding the content table."""
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(content_table.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def repository(test_db, hydrator, content_table) -> ContentRepository:
    return ContentRepository(test_db, hydrator, content_table)


@pytest.fixture
def lookup_factory():
    return InMemoryLookup
