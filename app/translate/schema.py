"""Schema provider over the configured content types."""

from __future__ import annotations

from collections.abc import Mapping

from app.exceptions import ContentTypeNotFoundError
from app.schemas.content_type import ContentTypeDefinition, ContentTypeSchema


class SchemaRegistry:
    """Named ContentTypeSchemas, built once from configuration."""

    def __init__(self, content_types: Mapping[str, ContentTypeDefinition]) -> None:
        self._schemas: dict[str, ContentTypeSchema] = {
            name: ContentTypeSchema(name=name, label=definition.label, fields=definition.fields)
            for name, definition in content_types.items()
        }

    def get_schema(self, contenttype: str) -> ContentTypeSchema:
        try:
            return self._schemas[contenttype]
        except KeyError:
            raise ContentTypeNotFoundError(contenttype) from None

    def names(self) -> list[str]:
        return list(self._schemas)

    def __contains__(self, contenttype: object) -> bool:
        return contenttype in self._schemas
