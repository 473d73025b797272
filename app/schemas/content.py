from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from app.translate.record import ContentRecord


class ContentCreate(BaseModel):
    slug: Optional[str] = Field(None, title="Slug", description="Slug for the content; generated from the title when empty.")
    locale: Optional[str] = Field(None, title="Locale", description="Locale the field values are written in. Defaults to the active locale.")
    status: str = Field("draft", title="Content Status")
    fields: dict[str, Any] = Field(default_factory=dict, title="Fields", description="Field values keyed by field name.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "slug": "about-us",
                "locale": "fr",
                "status": "published",
                "fields": {"title": "À propos", "blocks": [{"text": "Bonjour"}]},
            }
        }
    )


class ContentUpdate(BaseModel):
    slug: Optional[str] = Field(None, title="Slug")
    locale: Optional[str] = Field(None, title="Locale", description="Locale the field values are written in. Defaults to the active locale.")
    status: Optional[str] = Field(None, title="Content Status")
    fields: dict[str, Any] = Field(default_factory=dict, title="Fields", description="Field values to replace, keyed by field name.")


class ContentResponse(BaseModel):
    id: int = Field(..., title="Content ID")
    contenttype: str = Field(..., title="Content Type")
    slug: Optional[str] = Field(None, title="Slug")
    locale: Optional[str] = Field(None, title="Locale", description="Locale of the stored primary values.")
    status: Optional[str] = Field(None, title="Content Status")
    fields: dict[str, Any] = Field(default_factory=dict, title="Fields")
    datecreated: Optional[datetime] = None
    datechanged: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: "ContentRecord") -> "ContentResponse":
        return cls(
            id=record.id,
            contenttype=record.contenttype,
            slug=record.slug,
            locale=record.locale,
            status=record.status,
            fields=record.field_values(),
            datecreated=record.datecreated,
            datechanged=record.datechanged,
        )


class LocaleResponse(BaseModel):
    slug: str
    code: Optional[str] = None
    name: str
    is_rtl: bool
    is_default: bool = False
    active: bool = False
