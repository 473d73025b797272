"""
API Versioning Module

Routers are mounted below ``/api/<version>``; locale-scoped routers add the
``{_locale}`` segment right after the version.
"""

from fastapi import APIRouter


def create_api_router(
    *,
    prefix: str = "",
    tags: list[str] | None = None,
    version: str = "v1",
    include_in_schema: bool = True,
) -> APIRouter:
    """
    Create a versioned API router.

    Example:
        >>> router = create_api_router(prefix="/{_locale}/content", tags=["Content"])
        >>> # Routes land under /api/v1/{_locale}/content
    """
    full_prefix = f"/api/{version}{prefix}"
    return APIRouter(prefix=full_prefix, tags=tags or [], include_in_schema=include_in_schema)
