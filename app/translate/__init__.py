"""
Locale overlay package

Keeps every locale's values of a content record in one storage row: the
default locale in the primary field slots, every other locale in a JSON
side-slot, swapped in and out by OverlayEngine around hydration and saving.
"""

from .fields import TEMPLATE_FIELDS_KEY, field_kind, is_repeating, translatable_fields
from .hydration import ContentHydrator
from .overlay import EMPTY_OVERLAY, OverlayEngine, RecordLookup, decode_overlay, encode_overlay
from .record import ContentRecord, RepeatingFieldCollection
from .schema import SchemaRegistry

__all__ = [
    "EMPTY_OVERLAY",
    "TEMPLATE_FIELDS_KEY",
    "ContentHydrator",
    "ContentRecord",
    "OverlayEngine",
    "RecordLookup",
    "RepeatingFieldCollection",
    "SchemaRegistry",
    "decode_overlay",
    "encode_overlay",
    "field_kind",
    "is_repeating",
    "translatable_fields",
]
