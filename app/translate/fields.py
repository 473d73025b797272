"""
Field classification

Pure functions over a ContentTypeSchema answering which fields take part in
the locale overlay and which of them are repeaters. The flat-row helpers
encode the values of JSON-holding fields.
"""

from __future__ import annotations

import json
from typing import Any

from app.schemas.content_type import COMPOUND_KINDS, ContentTypeSchema, FieldKind

# Overlay key used for every translatable template selector. The selected
# template's own field set is stored in this one slot.
TEMPLATE_FIELDS_KEY = "templatefields"


def translatable_fields(schema: ContentTypeSchema) -> list[str]:
    """Return the overlay keys of ``schema`` in schema order.

    Translatable ``templateselect`` fields contribute ``templatefields``
    instead of their own name, once at most.
    """
    keys: list[str] = []
    for name, definition in schema.fields.items():
        if not definition.is_translatable:
            continue
        key = TEMPLATE_FIELDS_KEY if definition.type == FieldKind.TEMPLATESELECT else name
        if key not in keys:
            keys.append(key)
    return keys


def field_kind(schema: ContentTypeSchema, key: str) -> FieldKind | None:
    """Return the kind of ``key``, or None for keys the schema does not define."""
    definition = schema.field(key)
    return definition.type if definition is not None else None


def is_repeating(schema: ContentTypeSchema, key: str) -> bool:
    return field_kind(schema, key) == FieldKind.REPEATER


def holds_json(schema: ContentTypeSchema, key: str) -> bool:
    """True for keys whose flat-row value is always JSON text."""
    kind = field_kind(schema, key)
    return key == TEMPLATE_FIELDS_KEY or kind == FieldKind.REPEATER or kind in COMPOUND_KINDS


def to_flat_value(schema: ContentTypeSchema, key: str, value: Any) -> Any:
    """Encode a stored value for the flat row.

    Values of JSON-holding keys are encoded whatever their shape, so a plain
    string such as ``"[none]"`` survives the trip back through
    :func:`from_flat_value`.
    """
    if value is None:
        return None
    if holds_json(schema, key) or isinstance(value, (dict, list)):
        return json.dumps(value)
    return value


def from_flat_value(schema: ContentTypeSchema, key: str, value: Any) -> Any:
    if holds_json(schema, key) and isinstance(value, str):
        return json.loads(value)
    return value
