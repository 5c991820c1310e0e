"""Form orchestration — bind, validate, render.

Usage::

    from warble import Form, IntegerInput, Submission

    form = (
        Form(action="/profile", method="POST")
        .add_input(IntegerInput("age", min_value=0, max_value=130))
    )
    form.load(Submission.from_environ(environ))
    errors = form.validate()
    if errors:
        return render("profile.html", form=form.html(), errors=errors.messages())
    save(form.values())

Fields keep insertion order, so ``html()`` and ``validate()`` are
deterministic. A Form carries no locks; it belongs to a single
request-handling cycle and must not be mutated from several threads.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Iterator, Mapping
from typing import Any, Self

from kida.utils.html import Markup

from warble.config import FormConfig
from warble.errors import RequestParseError
from warble.fields.input import Field, FieldError
from warble.http.submission import RequestSource

logger = logging.getLogger("warble.forms")


class FormErrors(Mapping[str, FieldError]):
    """Validation failures keyed by field name, in field order.

    Only failing fields appear. ``messages()`` flattens the errors into
    the ``{field: [messages]}`` shape template helpers expect::

        {"age": ["age is more than 130"]}
    """

    __slots__ = ("_errors",)

    def __init__(self, errors: dict[str, FieldError]) -> None:
        self._errors = dict(errors)

    def __getitem__(self, name: str) -> FieldError:
        return self._errors[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v.message!r}" for k, v in self._errors.items())
        return f"FormErrors({{{items}}})"

    def __str__(self) -> str:
        return "; ".join(str(error) for error in self._errors.values())

    def messages(self) -> dict[str, list[str]]:
        """Return ``{field: [message]}`` for template re-rendering."""
        return {name: [error.message] for name, error in self._errors.items()}


class Form:
    """A named collection of fields with an action and a method."""

    __slots__ = ("_action", "_config", "_fields", "_method")

    def __init__(
        self,
        action: str | None = None,
        method: str | None = None,
        *,
        config: FormConfig | None = None,
    ) -> None:
        self._config = config or FormConfig()
        self._action = self._config.default_action if action is None else action
        self._method = self._config.default_method if method is None else method
        self._fields: dict[str, Field] = {}

    def __repr__(self) -> str:
        return f"Form(action={self._action!r}, method={self._method!r}, fields={list(self._fields)!r})"

    # -- Field access --

    def __getitem__(self, name: str) -> Field:
        return self._fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    @property
    def config(self) -> FormConfig:
        return self._config

    @property
    def fields(self) -> dict[str, Field]:
        """A copy of the fields by name, in render order."""
        return dict(self._fields)

    def add_input(self, field: Field) -> Self:
        """Add *field* under its current name.

        A field already registered under that name is replaced, and the
        new one moves to the end of the render order.
        """
        self._fields.pop(field.name, None)
        self._fields[field.name] = field
        return self

    # -- Action / method --

    @property
    def action(self) -> str:
        return self._action

    def set_action(self, action: str) -> Self:
        self._action = action
        return self

    @property
    def method(self) -> str:
        return self._method

    def set_method(self, method: str) -> Self:
        """Set the method. Any string is accepted; only ``"GET"`` binds from the query."""
        self._method = method
        return self

    # -- Binding --

    def load(self, request: RequestSource | None, *, lenient: bool | None = None) -> Self:
        """Bind submitted values into every field.

        GET forms bind from the query string, every other method from the
        body. The query string is parsed for every method, so a malformed
        one fails the load even when the body is used. Binding is total: a
        field missing from the submission is set to ``""``. ``None`` means
        nothing was submitted and changes nothing.

        Args:
            request: The submission to bind from, or ``None``.
            lenient: Log and ignore a malformed submission instead of
                raising. Defaults to ``config.lenient_load``.

        Raises:
            RequestParseError: If the submission is malformed. No field is
                modified in that case.
        """
        if request is None:
            return self
        try:
            query = request.query_params()
            params: Mapping[str, str] = query if self._method == "GET" else request.form_params()
        except RequestParseError as exc:
            return self._recover(exc, lenient)
        self._bind(params)
        return self

    async def load_async(self, request: Any, *, lenient: bool | None = None) -> Self:
        """Bind from an async request object.

        *request* needs a ``query`` mapping and an awaitable ``form()``
        method, the shape of ASGI framework requests. A ``ValueError``
        from ``form()`` (e.g. an unsupported content type) is reported as
        ``RequestParseError``.
        """
        if request is None:
            return self
        try:
            if self._method == "GET":
                params: Mapping[str, str] = request.query
            else:
                try:
                    params = await request.form()
                except ValueError as exc:
                    raise RequestParseError(str(exc)) from exc
        except RequestParseError as exc:
            return self._recover(exc, lenient)
        self._bind(params)
        return self

    def _recover(self, exc: RequestParseError, lenient: bool | None) -> Self:
        if lenient is None:
            lenient = self._config.lenient_load
        if not lenient:
            raise exc
        logger.warning("Ignoring malformed %s submission: %s", self._method, exc)
        return self

    def _bind(self, params: Mapping[str, str]) -> None:
        for name, field in self._fields.items():
            field.value = params.get(name) or ""
        logger.debug("Bound %d field(s) from %s submission", len(self._fields), self._method)

    # -- Validation --

    def validate(self) -> FormErrors | None:
        """Validate every field and collect the failures.

        All fields are checked; a failure in one does not stop the others.

        Returns:
            ``None`` when every field passes, otherwise ``FormErrors``
            keyed by exactly the failing fields.
        """
        errors: dict[str, FieldError] = {}
        for name, field in self._fields.items():
            error = field.validate()
            if error is not None:
                errors[name] = error
        if not errors:
            return None
        logger.debug("Validation failed for: %s", ", ".join(errors))
        return FormErrors(errors)

    # -- Output --

    def html(self) -> Markup:
        """Render the form and its fields as pre-escaped markup."""
        action = html.escape(self._action, quote=True)
        method = html.escape(self._method, quote=True)
        parts = [f"<form action='{action}' method='{method}'>"]
        parts.extend(str(field.render()) for field in self._fields.values())
        parts.append("</form>")
        return Markup("".join(parts))

    def __html__(self) -> str:
        return str(self.html())

    def values(self) -> dict[str, str]:
        """Current value of every field, whether or not it validated."""
        return {name: field.value for name, field in self._fields.items()}
