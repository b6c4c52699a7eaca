"""Server-side HTML rendering helpers."""

from fastapi_mvc_extensions.rendering.attributes import AttributeDictionary
from fastapi_mvc_extensions.rendering.encoding import (
    DEFAULT_HTML_ENCODER,
    HtmlEncoder,
    MarkupSafeHtmlEncoder,
)
from fastapi_mvc_extensions.rendering.tag_builder import (
    TagBuilder,
    TagRenderMode,
    create_sanitized_id,
)

__all__ = [
    "DEFAULT_HTML_ENCODER",
    "AttributeDictionary",
    "HtmlEncoder",
    "MarkupSafeHtmlEncoder",
    "TagBuilder",
    "TagRenderMode",
    "create_sanitized_id",
]
