import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.config import settings
from app.database import init_models
from app.exception_handlers import register_exception_handlers
from app.middleware.language import LanguageMiddleware
from app.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from app.routes import content, i18n

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    logger.info(
        "Locales configured: %s (default %s)",
        ", ".join(locale.slug for locale in settings.locales),
        settings.default_locale.slug,
    )
    yield


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    setup_structured_logging(log_level=settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title=settings.app_name,
        description="Multilingual content stored one row per record",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # Starlette runs middleware in reverse order of registration
    app.add_middleware(LanguageMiddleware, locales=settings.locales)
    app.add_middleware(StructuredLoggingMiddleware)

    register_exception_handlers(app)

    # i18n must be matched before the "/{_locale}/content" routes
    app.include_router(i18n.router)
    app.include_router(content.router)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)  # Logs SQL statements

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
