"""
ContentRecord: one content item with typed field slots

Slot layout:
    reserved     id, contenttype, slug, locale, status, datecreated, datechanged
    fields       one slot per schema field (repeaters hold a RepeatingFieldCollection)
    templatefields  nested field set of the selected template (mapping)
    side-slots   <slug>_data / <slug>_slug for every non-default locale

Writes to keys the schema does not know are kept aside and never read back
by anything but ``get``; writes of the wrong shape into a known slot raise
FieldTypeError.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from app.exceptions import FieldTypeError
from app.i18n.locale import Locale
from app.schemas.content_type import COMPOUND_KINDS, ContentTypeSchema, FieldKind
from app.translate.fields import TEMPLATE_FIELDS_KEY

logger = logging.getLogger(__name__)

RESERVED_FIELDS: tuple[str, ...] = ("id", "contenttype", "slug", "locale", "status", "datecreated", "datechanged")


class RepeatingFieldCollection:
    """Ordered sub-records of one repeater field."""

    def __init__(self, name: str, items: Iterable[Mapping[str, Any]] = ()) -> None:
        self.name = name
        self._items: list[dict[str, Any]] = []
        for item in items:
            self.add_from_mapping(item)

    def add_from_mapping(self, values: Mapping[str, Any]) -> None:
        if not isinstance(values, Mapping):
            raise FieldTypeError(self.name, "a mapping per repeated item", values)
        self._items.append(dict(values))

    def clear(self) -> None:
        self._items.clear()

    def serialize(self) -> list[dict[str, Any]]:
        return [dict(item) for item in self._items]

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> dict[str, Any]:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RepeatingFieldCollection):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"RepeatingFieldCollection({self.name!r}, {self._items!r})"


class ContentRecord:
    """A content item of one content type."""

    def __init__(self, schema: ContentTypeSchema, locales: Sequence[Locale] = ()) -> None:
        self.schema = schema
        self.id: int | None = None
        self.contenttype: str = schema.name
        self.slug: str | None = None
        self.locale: str | None = None
        self.status: str | None = None
        self.datecreated: Any = None
        self.datechanged: Any = None

        self._fields: dict[str, Any] = {name: self.empty_value(name) for name in schema.fields}
        if any(definition.type == FieldKind.TEMPLATESELECT for definition in schema.fields.values()):
            self._fields[TEMPLATE_FIELDS_KEY] = {}

        # No side-slots for the default locale
        self._side_slots: dict[str, str | None] = {}
        for locale in locales[1:]:
            self._side_slots[locale.data_slot] = None
            self._side_slots[locale.slug_slot] = None

        self._unknown: dict[str, Any] = {}

    # ── Slot access ───────────────────────────────────────────────────────────

    def get(self, key: str, default: Any = None) -> Any:
        if key in RESERVED_FIELDS:
            return getattr(self, key)
        if key in self._fields:
            return self._fields[key]
        if key in self._side_slots:
            return self._side_slots[key]
        return self._unknown.get(key, default)

    def set(self, key: str, value: Any) -> None:
        if key in RESERVED_FIELDS:
            setattr(self, key, value)
        elif key in self._fields:
            self._fields[key] = self._coerce(key, value)
        elif key in self._side_slots:
            if value is not None and not isinstance(value, str):
                raise FieldTypeError(key, "encoded text", value)
            self._side_slots[key] = value
        else:
            logger.debug("Ignoring write to unknown field %r on %s", key, self.contenttype)
            self._unknown[key] = value

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def has_field(self, key: str) -> bool:
        return key in self._fields

    @property
    def side_slots(self) -> dict[str, str | None]:
        return dict(self._side_slots)

    # ── Values ────────────────────────────────────────────────────────────────

    def empty_value(self, key: str) -> Any:
        """Value a slot holds when nothing was entered for it."""
        if key == TEMPLATE_FIELDS_KEY:
            return {}
        definition = self.schema.field(key)
        if definition is None:
            return None
        if definition.type == FieldKind.REPEATER:
            return RepeatingFieldCollection(key)
        if definition.type in COMPOUND_KINDS:
            return None
        return ""

    def reset(self, key: str) -> None:
        self.set(key, self.empty_value(key))

    def field_values(self) -> dict[str, Any]:
        """Field and templatefields slots in plain (JSON-ready) form."""
        return {key: _plain(value) for key, value in self._fields.items()}

    def serialize(self) -> dict[str, Any]:
        values: dict[str, Any] = {key: getattr(self, key) for key in RESERVED_FIELDS}
        values.update(self.field_values())
        values.update(self._side_slots)
        return values

    def _coerce(self, key: str, value: Any) -> Any:
        if key == TEMPLATE_FIELDS_KEY:
            if value is None or value == "" or value == []:
                return {}
            if not isinstance(value, Mapping):
                raise FieldTypeError(key, "a mapping of template fields", value)
            return dict(value)

        kind = self.schema.fields[key].type
        if kind == FieldKind.REPEATER:
            if value is None or value == "":
                return RepeatingFieldCollection(key)
            if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
                raise FieldTypeError(key, "a list of repeated items", value)
            return RepeatingFieldCollection(key, value)
        if kind in COMPOUND_KINDS:
            return value
        if isinstance(value, (Mapping, list, tuple, RepeatingFieldCollection)):
            raise FieldTypeError(key, f"a {kind.value} value", value)
        return value

    def __repr__(self) -> str:
        return f"<ContentRecord {self.contenttype}#{self.id} locale={self.locale!r}>"


def _plain(value: Any) -> Any:
    if isinstance(value, RepeatingFieldCollection):
        return value.serialize()
    return value
