"""Warble exception hierarchy.

Shared across fields, forms, and request parsing so every module raises
and catches the same types.

Validator causes (``ParseError``, ``BoundsError``, ``RuleError``) are
*returned* by validators, not raised: ``Input.validate()`` wraps the first
one in a ``FieldError``. ``RequestParseError`` is raised.
"""

from dataclasses import dataclass


class WarbleError(Exception):
    """Base for all warble-specific errors."""


class ConfigurationError(WarbleError):
    """Raised when a field or form is set up with invalid values.

    Typically raised at construction time, e.g. an attribute name that
    cannot appear in HTML or a lower bound above the upper bound.
    """


class FieldValidationError(WarbleError):
    """Base for the causes returned by field validators."""


class ParseError(FieldValidationError):
    """The submitted value could not be converted to the field's type."""


@dataclass(frozen=True, slots=True)
class BoundsError(FieldValidationError):
    """The submitted value is outside the field's inclusive ``[min, max]``.

    ``limit`` is ``"min"`` or ``"max"`` — whichever bound was crossed.
    """

    name: str
    limit: str
    bound: int

    def __str__(self) -> str:
        side = "less" if self.limit == "min" else "more"
        return f"{self.name} is {side} than {self.bound}"


class RuleError(FieldValidationError):
    """A reusable rule (``required``, ``max_length``, ...) rejected the value."""


class RequestParseError(WarbleError):
    """The submitted query string or body is malformed.

    Raised by the parameter sources and propagated by ``Form.load()`` so
    callers can tell an empty submission from a broken one.
    """
