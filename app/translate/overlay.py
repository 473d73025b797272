"""
Locale overlay engine

A content row keeps the default locale's values in its primary field slots
and, for every other configured locale, the translatable values in a JSON
side-slot ``<slug>_data``. The storage pipelines call the engine at four
points of a record's lifecycle:

    1. apply_before_hydration   raw row -> row with the locale's scalar values
    2. expand_after_hydration   record -> repeaters replaced by the locale's items
    3. extract_before_save      record -> locale values moved into the side-slot,
                                          primary slots reset to default values
    4. reapply_after_save       record -> locale values restored for the caller

Phases 1 and 2 are no-ops under the default locale. The overlay replaces
whole field values; nothing is merged.
"""

from __future__ import annotations

import json
import logging
from collections.abc import MutableMapping
from typing import Any, Protocol

from app.exceptions import LocaleMismatchError, MalformedOverlayError
from app.i18n.locale import Locale
from app.schemas.content_type import ContentTypeSchema
from app.translate.fields import is_repeating, to_flat_value, translatable_fields
from app.translate.record import ContentRecord

logger = logging.getLogger(__name__)

# Written to the side-slot when a record is saved as the default locale.
# Kept as a JSON array for compatibility with rows stored by earlier releases.
EMPTY_OVERLAY = "[]"


class RecordLookup(Protocol):
    """Point read of the persisted default-locale version of a record."""

    def get_by_identity(self, contenttype: str, record_id: int) -> ContentRecord | None: ...


def decode_overlay(raw: str | None, slot: str) -> dict[str, Any]:
    """Decode a ``<slug>_data`` side-slot into a key -> value map.

    Empty slots and the legacy empty-array encoding decode to ``{}``.

    Raises:
        MalformedOverlayError: the slot is not JSON or not a JSON object.
    """
    if raw is None or raw == "":
        return {}
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedOverlayError(slot, str(exc)) from exc
    if decoded == []:
        return {}
    if not isinstance(decoded, dict):
        raise MalformedOverlayError(slot, f"expected an object, got {type(decoded).__name__}")
    return decoded


def encode_overlay(delta: dict[str, Any]) -> str:
    return json.dumps(delta)


class OverlayEngine:
    """Moves translatable values between primary slots and locale side-slots."""

    def __init__(self, default_locale: Locale) -> None:
        self.default_locale = default_locale

    def is_default(self, locale: Locale) -> bool:
        return locale.slug == self.default_locale.slug

    # ── Phase 1 ───────────────────────────────────────────────────────────────

    def apply_before_hydration(
        self,
        row: MutableMapping[str, Any],
        locale: Locale,
        schema: ContentTypeSchema,
    ) -> None:
        """Copy the locale's non-repeating values into the flat storage row.

        Repeaters are left for :meth:`expand_after_hydration`, once their
        collections exist.
        """
        if self.is_default(locale) or not row.get(locale.data_slot):
            return

        overlay = decode_overlay(row[locale.data_slot], locale.data_slot)
        for key, value in overlay.items():
            if is_repeating(schema, key):
                continue
            row[key] = to_flat_value(schema, key, value)
        logger.debug("Applied %s overlay to %s row %s", locale.slug, schema.name, row.get("id"))

    # ── Phase 2 ───────────────────────────────────────────────────────────────

    def expand_after_hydration(
        self,
        record: ContentRecord,
        locale: Locale,
        schema: ContentTypeSchema,
    ) -> None:
        """Replace each repeater's items with the locale's items, in order."""
        if self.is_default(locale) or not record.get(locale.data_slot):
            return

        overlay = decode_overlay(record.get(locale.data_slot), locale.data_slot)
        for key, items in overlay.items():
            if not is_repeating(schema, key):
                continue
            collection = record.get(key)
            collection.clear()
            for item in items or []:
                collection.add_from_mapping(item)

    # ── Phase 3 ───────────────────────────────────────────────────────────────

    def extract_before_save(
        self,
        record: ContentRecord,
        schema: ContentTypeSchema,
        locale: Locale,
        lookup: RecordLookup,
    ) -> None:
        """Move the record's translatable values into the active locale's side-slot.

        Primary slots are reset to the persisted default-locale values (or to
        empty values for a new record), so they never hold another locale's
        content at rest.

        Raises:
            LocaleMismatchError: the default locale is active but the record
                is tagged with another locale.
        """
        fields = translatable_fields(schema)
        if not fields:
            return

        if self.is_default(locale):
            # The default locale has no side-slots; primary slots are canonical
            if record.locale and not self.default_locale.matches(record.locale):
                raise LocaleMismatchError(record.locale, locale.slug)
            return

        record.set(locale.slug_slot, record.slug)

        if self.default_locale.matches(record.locale):
            record.set(locale.data_slot, EMPTY_OVERLAY)
            return

        prior: ContentRecord | None = None
        if record.id:
            prior = lookup.get_by_identity(record.contenttype, record.id)
            if prior is None:
                logger.warning(
                    "No stored %s record with id %s, treating it as new",
                    record.contenttype,
                    record.id,
                )

        values = record.field_values()
        prior_values = prior.field_values() if prior is not None else None
        delta: dict[str, Any] = {}
        for field in fields:
            delta[field] = values.get(field)
            if prior_values is not None:
                record.set(field, prior_values.get(field))
            else:
                record.reset(field)

        record.set(locale.data_slot, encode_overlay(delta))
        logger.info(
            "Stored %s overlay for %s record %s (%d fields)",
            locale.slug,
            record.contenttype,
            record.id,
            len(delta),
        )

    # ── Phase 4 ───────────────────────────────────────────────────────────────

    def reapply_after_save(self, entity: object, locale: Locale) -> None:
        """Restore the locale's values on a just-saved record.

        Repeaters get fresh collections built from the stored items; the
        in-place expansion of phase 2 is not repeated.
        """
        if type(entity) is not ContentRecord:
            return
        if not entity.get(locale.data_slot):
            return

        overlay = decode_overlay(entity.get(locale.data_slot), locale.data_slot)
        for key, value in overlay.items():
            entity.set(key, value)
