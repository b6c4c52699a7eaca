"""HtmlEncoder protocol and the markupsafe-backed default encoder."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from markupsafe import escape


@runtime_checkable
class HtmlEncoder(Protocol):
    """Escapes text for HTML content and attribute-value contexts."""

    def encode(self, value: str | None) -> str: ...


class MarkupSafeHtmlEncoder:
    """Default encoder. Escapes ``& < > " '``; ``None`` encodes to ``""``.

    ``markupsafe.Markup`` input is escaped like any other string.
    """

    def encode(self, value: str | None) -> str:
        if value is None:
            return ""
        return str(escape(str.__str__(value)))


DEFAULT_HTML_ENCODER: HtmlEncoder = MarkupSafeHtmlEncoder()
