from .content import build_content_table, content_table

__all__ = [
    "build_content_table",
    "content_table",
]
