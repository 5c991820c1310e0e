"""Form body parsing — URL-encoded and multipart.

``FormData`` reads like ``QueryParams``: first value per key, ``get_list``
for every value.

``python-multipart`` is an optional dependency (``pip install warble[multipart]``).
URL-encoded forms use stdlib ``urllib.parse`` — no extra dependency.
File parts of a multipart body are skipped; only text fields are bound.
"""

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from warble.errors import ConfigurationError, RequestParseError
from warble.http.query import parse_urlencoded

logger = logging.getLogger("warble.http")


class FormData(Mapping[str, str]):
    """Immutable parsed form body.

    Implements ``Mapping[str, str]`` plus ``get_list`` for repeated keys.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.

    Usage::

        form = parse_form_data(body, "application/x-www-form-urlencoded")
        username = form["username"]
    """

    __slots__ = ("_data",)

    def __init__(self, data: dict[str, list[str]] | None = None) -> None:
        object.__setattr__(self, "_data", data or {})

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
        return f"FormData({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))


def parse_form_data(
    body: bytes,
    content_type: str,
    *,
    charset: str = "utf-8",
    max_length: int | None = None,
) -> FormData:
    """Parse form body into FormData.

    Supports:
    - ``application/x-www-form-urlencoded`` (stdlib, no extra dependency)
    - ``multipart/form-data`` (requires ``python-multipart``)

    Args:
        body: Raw request body bytes.
        content_type: The Content-Type header value.
        charset: Encoding of the submitted text.
        max_length: Reject bodies larger than this many bytes.

    Returns:
        Parsed FormData instance.

    Raises:
        RequestParseError: If the body is too large, malformed, or not a
            supported form encoding.
        ConfigurationError: If multipart parsing is needed but
            ``python-multipart`` is not installed.
    """
    if max_length is not None and len(body) > max_length:
        msg = f"Form body of {len(body)} bytes exceeds the {max_length} byte limit"
        raise RequestParseError(msg)

    ct_lower = content_type.lower().split(";")[0].strip()

    if ct_lower == "application/x-www-form-urlencoded":
        return FormData(parse_urlencoded(body, charset=charset))

    if ct_lower == "multipart/form-data":
        return _parse_multipart(body, content_type, charset)

    msg = f"Unsupported form content type: {content_type!r}"
    raise RequestParseError(msg)


def _parse_multipart(body: bytes, content_type: str, charset: str) -> FormData:
    """Parse the text fields of a multipart body using python-multipart.

    Raises ``ConfigurationError`` if ``python-multipart`` is not installed.
    """
    try:
        from python_multipart.exceptions import MultipartParseError
        from python_multipart.multipart import MultipartParser, parse_options_header
    except ImportError:
        msg = (
            "Multipart form parsing requires the 'python-multipart' package. "
            "Install it with: pip install warble[multipart]"
        )
        raise ConfigurationError(msg) from None

    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise RequestParseError(msg)

    data: dict[str, list[str]] = {}

    # Current part state
    pending_header = ""
    current_data = bytearray()
    current_field_name: str | None = None
    is_file = False

    def on_part_begin() -> None:
        nonlocal current_data, current_field_name, is_file
        current_data = bytearray()
        current_field_name = None
        is_file = False

    def on_part_data(chunk: bytes, start: int, end: int) -> None:
        current_data.extend(chunk[start:end])

    def on_part_end() -> None:
        if current_field_name is None:
            return
        if is_file:
            logger.debug("Skipping file part %r", current_field_name)
            return
        try:
            value = bytes(current_data).decode(charset)
        except UnicodeDecodeError as exc:
            msg = f"Multipart field {current_field_name!r} is not valid {charset}"
            raise RequestParseError(msg) from exc
        data.setdefault(current_field_name, []).append(value)

    def on_header_field(hdata: bytes, start: int, end: int) -> None:
        nonlocal pending_header
        pending_header = hdata[start:end].decode("latin-1").lower()

    def on_header_value(hdata: bytes, start: int, end: int) -> None:
        nonlocal current_field_name, is_file
        if pending_header != "content-disposition":
            return
        _, params = parse_options_header(hdata[start:end])
        name = params.get(b"name")
        if name is not None:
            current_field_name = name.decode(charset, errors="replace")
        is_file = b"filename" in params

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
    }

    parser = MultipartParser(boundary, callbacks)
    try:
        parser.write(body)
        parser.finalize()
    except MultipartParseError as exc:
        msg = f"Malformed multipart body: {exc}"
        raise RequestParseError(msg) from exc

    return FormData(data)
