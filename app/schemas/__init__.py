from .content import ContentCreate, ContentResponse, ContentUpdate, LocaleResponse
from .content_type import ContentTypeDefinition, ContentTypeSchema, FieldDefinition, FieldKind

# Define the public API of this module
__all__ = [
    "ContentCreate",
    "ContentUpdate",
    "ContentResponse",
    "LocaleResponse",
    "ContentTypeDefinition",
    "ContentTypeSchema",
    "FieldDefinition",
    "FieldKind",
]
