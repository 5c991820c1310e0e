"""Submitted request data — the parameter sources ``Form.load()`` binds from.

``RequestSource`` is the structural protocol ``Form.load()`` accepts: an
HTTP method plus two lookups, query parameters and body parameters. Any
object with that shape works. ``Submission`` is the bundled implementation:
a frozen snapshot of the raw bytes with WSGI and ASGI factories.

Parsing happens lazily in ``query_params()`` / ``form_params()`` so a
malformed submission surfaces as ``RequestParseError`` at bind time.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from warble.config import FormConfig
from warble.errors import RequestParseError
from warble.http.forms import FormData, parse_form_data
from warble.http.query import QueryParams

_DEFAULT_CONTENT_TYPE = "application/x-www-form-urlencoded"


@runtime_checkable
class RequestSource(Protocol):
    """What ``Form.load()`` needs from a request.

    ``query_params()`` and ``form_params()`` return first-value mappings and
    raise ``RequestParseError`` when the underlying data is malformed.
    The query is parsed on every load; ``form_params()`` is only consulted
    when the form's own method is not GET.

    ``method`` is informational: the form's method, not the request's,
    decides which source is bound.
    """

    @property
    def method(self) -> str: ...
    def query_params(self) -> Mapping[str, str]: ...
    def form_params(self) -> Mapping[str, str]: ...


@dataclass(frozen=True, slots=True)
class Submission:
    """An immutable snapshot of a submitted request.

    Usage::

        submission = Submission("POST", body=b"age=25")
        form.load(submission)

    Or from a WSGI app::

        form.load(Submission.from_environ(environ))
    """

    method: str = "GET"
    query_string: bytes = b""
    body: bytes = b""
    content_type: str | None = None
    charset: str = "utf-8"
    max_content_length: int | None = None

    def query_params(self) -> QueryParams:
        """Parse the query string."""
        return QueryParams(self.query_string, charset=self.charset)

    def form_params(self) -> FormData:
        """Parse the body as URL-encoded or multipart form data."""
        if not self.body:
            return FormData()
        return parse_form_data(
            self.body,
            self.content_type or _DEFAULT_CONTENT_TYPE,
            charset=self.charset,
            max_length=self.max_content_length,
        )

    # -- Factories --

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, Any],
        config: FormConfig | None = None,
    ) -> Submission:
        """Create a Submission from a WSGI environ.

        Reads at most ``CONTENT_LENGTH`` bytes from ``wsgi.input``. A body
        larger than ``config.max_content_length`` raises
        ``RequestParseError`` before anything is read.
        """
        cfg = config or FormConfig()
        method = environ.get("REQUEST_METHOD", "GET")
        # PEP 3333: native strings hold the raw bytes as latin-1
        query_string = environ.get("QUERY_STRING", "").encode("latin-1")

        body = b""
        raw_length = environ.get("CONTENT_LENGTH") or "0"
        try:
            length = int(raw_length)
        except ValueError:
            msg = f"Invalid Content-Length: {raw_length!r}"
            raise RequestParseError(msg) from None
        if length > cfg.max_content_length:
            msg = f"Form body of {length} bytes exceeds the {cfg.max_content_length} byte limit"
            raise RequestParseError(msg)
        stream = environ.get("wsgi.input")
        if length > 0 and stream is not None:
            body = stream.read(length)

        return cls(
            method=method,
            query_string=query_string,
            body=body,
            content_type=environ.get("CONTENT_TYPE") or None,
            charset=cfg.charset,
            max_content_length=cfg.max_content_length,
        )

    @classmethod
    async def from_asgi(
        cls,
        scope: Mapping[str, Any],
        receive: Callable[[], Awaitable[dict[str, Any]]],
        config: FormConfig | None = None,
    ) -> Submission:
        """Create a Submission from an ASGI HTTP scope, draining the body."""
        cfg = config or FormConfig()
        content_type: str | None = None
        for key, value in scope.get("headers", ()):
            if key.lower() == b"content-type":
                content_type = value.decode("latin-1")
                break

        chunks: list[bytes] = []
        size = 0
        while True:
            message = await receive()
            chunk = message.get("body", b"")
            if chunk:
                size += len(chunk)
                if size > cfg.max_content_length:
                    msg = f"Form body exceeds the {cfg.max_content_length} byte limit"
                    raise RequestParseError(msg)
                chunks.append(chunk)
            if not message.get("more_body", False):
                break

        return cls(
            method=scope["method"],
            query_string=scope.get("query_string", b""),
            body=b"".join(chunks),
            content_type=content_type,
            charset=cfg.charset,
            max_content_length=cfg.max_content_length,
        )
