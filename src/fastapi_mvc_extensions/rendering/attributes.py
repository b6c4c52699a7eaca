"""AttributeDictionary — case-insensitive, key-sorted attribute map."""

from __future__ import annotations

from collections.abc import Iterator, MutableMapping


def _fold(key: str) -> str:
    # Ordinal ignore-case maps one character at a time; "ß" stays "ß".
    return "".join(_fold_char(c) for c in key)


def _fold_char(char: str) -> str:
    upper = char.upper()
    return upper if len(upper) == 1 else char


class AttributeDictionary(MutableMapping[str, "str | None"]):
    """Mapping of HTML attribute names to values.

    Keys compare case-insensitively and iterate in case-insensitive sorted
    order. Writing an existing key with different casing updates the value and
    keeps the casing of the first insertion.
    """

    def __init__(self) -> None:
        self._entries: dict[str, tuple[str, str | None]] = {}

    def __getitem__(self, key: str) -> str | None:
        return self._entries[_fold(key)][1]

    def __setitem__(self, key: str, value: str | None) -> None:
        folded = _fold(key)
        existing = self._entries.get(folded)
        original = existing[0] if existing is not None else key
        self._entries[folded] = (original, value)

    def __delitem__(self, key: str) -> None:
        del self._entries[_fold(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and _fold(key) in self._entries

    def __iter__(self) -> Iterator[str]:
        for folded in sorted(self._entries):
            yield self._entries[folded][0]

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"
