"""Immutable query string parameters.

Implements ``Mapping[str, str]`` plus ``get_list`` for repeated keys.

Parsing is strict: a query string that a browser could not have produced
(broken percent-escapes, bytes outside the charset, ``;`` separators)
raises ``RequestParseError`` instead of being decoded on a best-effort basis.
"""

import re
from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs

from warble.errors import RequestParseError

# "%" not followed by two hex digits
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def parse_urlencoded(raw: bytes, *, charset: str = "utf-8") -> dict[str, list[str]]:
    """Parse ``application/x-www-form-urlencoded`` bytes.

    Keys keep every value in submission order, so the first occurrence
    is ``values[0]``. Blank values are kept.

    Raises:
        RequestParseError: If *raw* is not decodable or not well formed.
    """
    try:
        text = raw.decode(charset)
    except UnicodeDecodeError as exc:
        msg = f"Submitted data is not valid {charset}"
        raise RequestParseError(msg) from exc
    except LookupError as exc:
        msg = f"Unknown charset: {charset!r}"
        raise RequestParseError(msg) from exc

    bad = _BAD_ESCAPE.search(text)
    if bad is not None:
        msg = f"Invalid percent-escape at offset {bad.start()}: {text[bad.start() : bad.start() + 3]!r}"
        raise RequestParseError(msg)
    if ";" in text:
        msg = "Invalid semicolon separator in submitted data"
        raise RequestParseError(msg)

    try:
        return parse_qs(text, keep_blank_values=True, encoding=charset, errors="strict")
    except (UnicodeDecodeError, ValueError) as exc:
        msg = f"Malformed submitted data: {exc}"
        raise RequestParseError(msg) from exc


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    Attributes:
        _data: Parsed query string as field name -> list of values.
        _raw: Raw query string bytes.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    """

    _data: dict[str, list[str]]
    _raw: bytes

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: bytes = b"", *, charset: str = "utf-8") -> None:
        object.__setattr__(self, "_raw", query_string)
        object.__setattr__(self, "_data", parse_urlencoded(query_string, charset=charset))

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))
