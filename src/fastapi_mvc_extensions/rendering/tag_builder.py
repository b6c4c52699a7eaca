"""TagBuilder — build a single HTML element with escaped attributes."""

from __future__ import annotations

import io
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from markupsafe import Markup

from fastapi_mvc_extensions.exceptions import (
    ArgumentError,
    argument_cannot_be_null_or_empty,
)
from fastapi_mvc_extensions.rendering.attributes import AttributeDictionary
from fastapi_mvc_extensions.rendering.encoding import DEFAULT_HTML_ENCODER, HtmlEncoder
from fastapi_mvc_extensions.settings import get_settings

# '.' is a valid HTML 4.01 id character but clashes with CSS class selectors.
_ALLOWED_SPECIAL_ID_CHARS = frozenset("-_:")


class TagRenderMode(Enum):
    """Which part of the element ``TagBuilder.to_string`` emits."""

    NORMAL = "normal"
    START_TAG = "start_tag"
    END_TAG = "end_tag"
    SELF_CLOSING = "self_closing"


def _is_ascii_letter(char: str) -> bool:
    return ("A" <= char <= "Z") or ("a" <= char <= "z")


def _is_valid_id_char(char: str) -> bool:
    return _is_ascii_letter(char) or ("0" <= char <= "9") or (
        char in _ALLOWED_SPECIAL_ID_CHARS
    )


def create_sanitized_id(name: str | None, invalid_char_replacement: str) -> str:
    """Return a valid HTML 4.01 ``id`` for an element named ``name``.

    A leading non-letter becomes ``z``; every later character outside
    ``[A-Za-z0-9_:-]`` becomes ``invalid_char_replacement``.
    See http://www.w3.org/TR/html401/types.html#type-id
    """
    if invalid_char_replacement is None:
        raise ArgumentError(
            "Value cannot be null.", param_name="invalid_char_replacement"
        )
    if not name:
        return ""

    first = name[0] if _is_ascii_letter(name[0]) else "z"
    rest = (
        char if _is_valid_id_char(char) else invalid_char_replacement
        for char in name[1:]
    )
    return first + "".join(rest)


def _to_invariant_string(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class TagBuilder:
    """Mutable representation of one HTML element."""

    create_sanitized_id = staticmethod(create_sanitized_id)

    def __init__(self, tag_name: str, html_encoder: HtmlEncoder | None = None) -> None:
        if not tag_name:
            raise argument_cannot_be_null_or_empty("tag_name")
        if html_encoder is not None and not isinstance(html_encoder, HtmlEncoder):
            raise ArgumentError(
                "html_encoder must provide an encode() method.",
                param_name="html_encoder",
            )

        self._tag_name = tag_name
        self._html_encoder: HtmlEncoder = html_encoder or DEFAULT_HTML_ENCODER
        self._inner_html: str | None = None
        self.attributes = AttributeDictionary()

    @property
    def tag_name(self) -> str:
        return self._tag_name

    @property
    def inner_html(self) -> str:
        return self._inner_html or ""

    @inner_html.setter
    def inner_html(self, value: str | None) -> None:
        self._inner_html = value

    def add_css_class(self, value: str) -> None:
        """Prepend ``value`` to the ``class`` attribute."""
        if "class" in self.attributes:
            current = self.attributes["class"]
            self.attributes["class"] = f"{value or ''} {current or ''}"
        else:
            self.attributes["class"] = value

    def generate_id(
        self, name: str | None, id_attribute_dot_replacement: str | None = None
    ) -> None:
        """Set ``id`` from ``name`` unless an ``id`` key is already present.

        Presence of the key is what counts: an existing empty ``id`` is kept.
        """
        if "id" in self.attributes:
            return
        if id_attribute_dot_replacement is None:
            id_attribute_dot_replacement = get_settings().id_attribute_dot_replacement

        sanitized = create_sanitized_id(name, id_attribute_dot_replacement)
        if sanitized:
            self.attributes["id"] = sanitized

    def merge_attribute(
        self, key: str, value: str | None, replace_existing: bool = False
    ) -> None:
        if not key:
            raise argument_cannot_be_null_or_empty("key")
        if replace_existing or key not in self.attributes:
            self.attributes[key] = value

    def merge_attributes(
        self,
        attributes: Mapping[Any, Any] | Iterable[tuple[Any, Any]] | None,
        replace_existing: bool = False,
    ) -> None:
        if attributes is None:
            return
        items = attributes.items() if isinstance(attributes, Mapping) else attributes
        for key, value in items:
            self.merge_attribute(
                _to_invariant_string(key),
                _to_invariant_string(value),
                replace_existing,
            )

    def set_inner_text(self, inner_text: str | None) -> None:
        """Set the content to the HTML-encoded form of ``inner_text``."""
        self._inner_html = self._html_encoder.encode(inner_text)

    def to_string(self, render_mode: TagRenderMode = TagRenderMode.NORMAL) -> str:
        with io.StringIO() as writer:
            if render_mode is TagRenderMode.START_TAG:
                writer.write("<")
                writer.write(self._tag_name)
                self._append_attributes(writer)
                writer.write(">")
            elif render_mode is TagRenderMode.END_TAG:
                writer.write("</")
                writer.write(self._tag_name)
                writer.write(">")
            elif render_mode is TagRenderMode.SELF_CLOSING:
                writer.write("<")
                writer.write(self._tag_name)
                self._append_attributes(writer)
                writer.write(" />")
            else:
                writer.write("<")
                writer.write(self._tag_name)
                self._append_attributes(writer)
                writer.write(">")
                writer.write(self.inner_html)
                writer.write("</")
                writer.write(self._tag_name)
                writer.write(">")
            return writer.getvalue()

    def to_html_string(
        self, render_mode: TagRenderMode = TagRenderMode.NORMAL
    ) -> Markup:
        return Markup(self.to_string(render_mode))

    def __str__(self) -> str:
        return self.to_string(TagRenderMode.NORMAL)

    def __html__(self) -> str:
        return self.to_string(TagRenderMode.NORMAL)

    def __repr__(self) -> str:
        return f"TagBuilder({self._tag_name!r}, attributes={self.attributes!r})"

    def _append_attributes(self, writer: io.StringIO) -> None:
        for key, value in self.attributes.items():
            if key.upper() == "ID" and not value:
                continue
            writer.write(" ")
            writer.write(key)
            writer.write('="')
            writer.write(self._html_encoder.encode(value))
            writer.write('"')
