"""The field capability and its base implementation.

``Field`` is a structural protocol: anything with a name, a value, a
validator pipeline and a render method can be added to a ``Form``.
``Input`` is the implementation every bundled field kind builds on.

Values are stored raw. ``render()`` is the only place escaping happens,
and it returns ``Markup`` so template layers embed it without escaping
it a second time.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Protocol, Self, runtime_checkable

from kida.utils.html import Markup

from warble.errors import ConfigurationError
from warble.validation.rules import INT32_MAX, INT32_MIN, Validator

# Anything HTML allows in an attribute name except the quoting/closing characters
_ATTR_NAME_RE = re.compile(r"[^\s\"'<>/=\x00-\x1f\x7f]+")

# Rendered from dedicated state; add_attr() cannot override them
_RESERVED_ATTRS = frozenset({"type", "name", "value", "class", "required"})


def _esc(value: str) -> str:
    return html.escape(value, quote=True)


@dataclass(frozen=True, slots=True)
class FieldError:
    """A validation failure: the field's name and the validator's cause."""

    name: str
    cause: Exception

    @property
    def message(self) -> str:
        return str(self.cause)

    def __str__(self) -> str:
        return f"{self.name}: {self.message}"


@runtime_checkable
class Field(Protocol):
    """What a ``Form`` needs from a field."""

    name: str
    value: str

    def add_validator(self, validator: Validator) -> Self: ...
    def validate(self) -> FieldError | None: ...
    def render(self) -> Markup: ...


class Input:
    """A single ``<input>`` element with an ordered validator pipeline.

    Setters are fluent so a field can be configured in one expression::

        age = (
            Input("age", kind="number")
            .add_class("narrow")
            .add_attr("placeholder", "Your age")
            .add_validator(required)
        )

    Not thread-safe: a field belongs to one form for one request cycle.
    """

    __slots__ = (
        "_attrs",
        "_classes",
        "_kind",
        "_max",
        "_min",
        "_name",
        "_required",
        "_validators",
        "_value",
    )

    def __init__(
        self,
        name: str = "",
        value: str = "",
        *,
        kind: str = "text",
        min_value: int = INT32_MIN,
        max_value: int = INT32_MAX,
    ) -> None:
        self._kind = kind
        self._name = name
        self._value = value
        self._classes: list[str] = []
        self._attrs: dict[str, str] = {}
        self._required = False
        self._validators: list[Validator] = []
        self._min = INT32_MIN
        self._max = INT32_MAX
        self.set_bounds(min_value, max_value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, value={self._value!r})"

    # -- Accessors --

    @property
    def kind(self) -> str:
        """The ``type`` attribute of the rendered element."""
        return self._kind

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = name

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        self._value = value

    @property
    def min(self) -> int:
        return self._min

    @property
    def max(self) -> int:
        return self._max

    @property
    def required(self) -> bool:
        return self._required

    @property
    def classes(self) -> tuple[str, ...]:
        return tuple(self._classes)

    @property
    def attrs(self) -> dict[str, str]:
        """A copy of the extra attributes, sorted by name."""
        return {key: self._attrs[key] for key in sorted(self._attrs)}

    @property
    def validators(self) -> tuple[Validator, ...]:
        return tuple(self._validators)

    # -- Fluent configuration --

    def add_class(self, cls: str) -> Self:
        """Append a CSS class. Adding an existing class is a no-op."""
        if cls not in self._classes:
            self._classes.append(cls)
        return self

    def add_attr(self, key: str, value: str) -> Self:
        """Set an extra attribute, replacing any previous value for *key*.

        Raises:
            ConfigurationError: If *key* is not a valid HTML attribute name
                or is one of the attributes rendered from field state.
        """
        if _ATTR_NAME_RE.fullmatch(key) is None:
            msg = f"Invalid attribute name: {key!r}"
            raise ConfigurationError(msg)
        if key.lower() in _RESERVED_ATTRS:
            msg = f"Attribute {key!r} is managed by the field; use its dedicated setter"
            raise ConfigurationError(msg)
        self._attrs[key] = value
        return self

    def add_validator(self, validator: Validator) -> Self:
        """Append *validator* to the end of the pipeline."""
        self._validators.append(validator)
        return self

    def set_bounds(self, min_value: int, max_value: int) -> Self:
        """Set the inclusive bounds checked by ``integer_bound``."""
        if min_value > max_value:
            msg = f"Lower bound {min_value} is greater than upper bound {max_value}"
            raise ConfigurationError(msg)
        self._min = min_value
        self._max = max_value
        return self

    def set_required(self, required: bool = True) -> Self:
        """Toggle the ``required`` flag on the rendered element.

        The flag is a browser hint only; add the ``required`` rule to
        enforce it server-side.
        """
        self._required = required
        return self

    # -- Validation --

    def validate(self) -> FieldError | None:
        """Run the pipeline in order and stop at the first failure."""
        for validator in self._validators:
            cause = validator(self)
            if cause is not None:
                return FieldError(self._name, cause)
        return None

    # -- Rendering --

    def _render_value(self) -> str:
        return self._value

    def render(self) -> Markup:
        """Render the element with every interpolated value escaped."""
        parts = [
            f"type='{_esc(self._kind)}'",
            f"name='{_esc(self._name)}'",
            f"value='{_esc(self._render_value())}'",
        ]
        if self._classes:
            parts.append(f"class='{_esc(' '.join(self._classes))}'")
        parts.extend(f"{key}='{_esc(self._attrs[key])}'" for key in sorted(self._attrs))
        if self._required:
            parts.append("required")
        return Markup(f"<input {' '.join(parts)}>")

    def __str__(self) -> str:
        return str(self.render())

    def __html__(self) -> str:
        return str(self.render())
