"""
Hydration pipeline

Turns stored content rows into ContentRecords and back. The overlay engine
is invoked on the flat row before the record is built (phase 1) and on the
record once its repeater collections exist (phase 2).

Stored row:  id, contenttype, slug, locale, status, datecreated, datechanged,
             fields (JSON object of the primary slots), <slug>_data, <slug>_slug
Flat row:    the same, with ``fields`` spread into one key per field and
             compound values held as JSON text
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from app.i18n.locale import Locale
from app.schemas.content_type import ContentTypeSchema
from app.translate.fields import from_flat_value, to_flat_value
from app.translate.overlay import OverlayEngine
from app.translate.record import RESERVED_FIELDS, ContentRecord
from app.translate.schema import SchemaRegistry

logger = logging.getLogger(__name__)


class ContentHydrator:
    """Builds records from stored rows with the locale overlay applied."""

    def __init__(self, registry: SchemaRegistry, engine: OverlayEngine, locales: Sequence[Locale]) -> None:
        self.registry = registry
        self.engine = engine
        self.locales = tuple(locales)

    def new_record(self, contenttype: str) -> ContentRecord:
        return ContentRecord(self.registry.get_schema(contenttype), self.locales)

    def hydrate(
        self,
        stored: Mapping[str, Any],
        locale: Locale,
        *,
        skip_overlay: bool = False,
    ) -> ContentRecord:
        """Hydrate a stored row as seen under ``locale``.

        ``skip_overlay`` returns the primary (default-locale) values untouched.
        """
        schema = self.registry.get_schema(stored["contenttype"])
        row = self.flatten(stored, schema)

        if not skip_overlay:
            self.engine.apply_before_hydration(row, locale, schema)

        record = self.build_record(row, schema)

        if not skip_overlay:
            self.engine.expand_after_hydration(record, locale, schema)
        return record

    def flatten(self, stored: Mapping[str, Any], schema: ContentTypeSchema) -> dict[str, Any]:
        row = {key: value for key, value in stored.items() if key != "fields"}
        values = json.loads(stored["fields"]) if stored.get("fields") else {}
        for key, value in values.items():
            row[key] = to_flat_value(schema, key, value)
        return row

    def build_record(self, row: Mapping[str, Any], schema: ContentTypeSchema) -> ContentRecord:
        record = ContentRecord(schema, self.locales)
        for key, value in row.items():
            record.set(key, from_flat_value(schema, key, value))
        return record

    def dehydrate(self, record: ContentRecord) -> dict[str, Any]:
        """Column values for persisting ``record`` (without ``id``)."""
        values: dict[str, Any] = {key: record.get(key) for key in RESERVED_FIELDS if key != "id"}
        values["fields"] = json.dumps(record.field_values())
        values.update(record.side_slots)
        return values
