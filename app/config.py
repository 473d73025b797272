from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

from app.i18n.locale import Locale
from app.schemas.content_type import ContentTypeDefinition

load_dotenv()


DEFAULT_LOCALES = [
    Locale(code="en_GB", slug="en", label="English"),
    Locale(code="fr_FR", slug="fr", label="Français"),
    Locale(code="de_DE", slug="de", label="Deutsch"),
]

DEFAULT_CONTENT_TYPES = {
    "pages": ContentTypeDefinition.model_validate(
        {
            "label": "Pages",
            "fields": {
                "title": {"type": "text", "is_translatable": True},
                "body": {"type": "html", "is_translatable": True},
                "image": {"type": "image"},
                "blocks": {
                    "type": "repeater",
                    "is_translatable": True,
                    "fields": {"text": {"type": "textarea"}},
                },
                "template": {"type": "templateselect", "is_translatable": True},
            },
        }
    ),
}


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Translate"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Database settings
    database_url: str = "sqlite+aiosqlite:///./translate.db"

    # Logging settings
    log_level: str = "INFO"
    log_json: bool = True

    # Localization settings; the first locale is the default one
    locales: list[Locale] = DEFAULT_LOCALES
    translate_slugs: bool = True

    # Content types, keyed by name
    content_types: dict[str, ContentTypeDefinition] = DEFAULT_CONTENT_TYPES

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("locales")
    @classmethod
    def validate_locales(cls, locales: list[Locale]) -> list[Locale]:
        if not locales:
            raise ValueError("at least one locale must be configured")
        slugs = [locale.slug for locale in locales]
        if len(set(slugs)) != len(slugs):
            raise ValueError("locale slugs must be unique")
        codes = [locale.code for locale in locales if locale.code is not None]
        if len(set(codes)) != len(codes):
            raise ValueError("locale codes must be unique")
        return locales

    @property
    def default_locale(self) -> Locale:
        return self.locales[0]


settings = Settings()
