"""Content type definitions: which fields a content type has and how they translate."""

import enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class FieldKind(str, enum.Enum):
    """Types of content type fields."""

    TEXT = "text"
    TEXTAREA = "textarea"
    HTML = "html"
    MARKDOWN = "markdown"
    SLUG = "slug"
    NUMBER = "number"
    INTEGER = "integer"
    FLOAT = "float"
    DATE = "date"
    DATETIME = "datetime"
    CHECKBOX = "checkbox"
    SELECT = "select"
    IMAGE = "image"
    FILE = "file"
    IMAGELIST = "imagelist"
    FILELIST = "filelist"
    GEOLOCATION = "geolocation"
    VIDEO = "video"
    JSON = "json"
    TEMPLATESELECT = "templateselect"
    REPEATER = "repeater"


# Kinds stored as JSON text in a flat storage row and held as list/dict on a record
COMPOUND_KINDS: frozenset[FieldKind] = frozenset(
    {
        FieldKind.SELECT,
        FieldKind.IMAGE,
        FieldKind.FILE,
        FieldKind.IMAGELIST,
        FieldKind.FILELIST,
        FieldKind.GEOLOCATION,
        FieldKind.VIDEO,
        FieldKind.JSON,
    }
)


class FieldDefinition(BaseModel):
    """One field of a content type."""

    model_config = ConfigDict(populate_by_name=True)

    type: FieldKind
    label: str | None = None
    # "is_translateable" is the spelling used by older configuration files
    is_translatable: bool = Field(
        False,
        validation_alias=AliasChoices("is_translatable", "is_translateable"),
    )
    # Sub-field definitions, only meaningful for repeaters
    fields: dict[str, "FieldDefinition"] = Field(default_factory=dict)


class ContentTypeDefinition(BaseModel):
    """Content type as written in configuration, keyed by its name."""

    label: str | None = None
    fields: dict[str, FieldDefinition] = Field(default_factory=dict)


class ContentTypeSchema(ContentTypeDefinition):
    """Ordered field schema of a named content type."""

    name: str

    def field(self, key: str) -> FieldDefinition | None:
        return self.fields.get(key)
