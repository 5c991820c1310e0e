"""Built-in validation rules for warble fields.

Each validator is a callable with the signature::

    def rule(field: Input) -> Exception | None:
        '''Return the cause of failure, or None if valid.'''

The whole field is passed, so a rule can read ``value`` as well as
``name``, ``min`` and ``max``. Parameterized validators are factory
functions that return a validator::

    def max_length(n: int) -> Validator:
        def check(field: Input) -> RuleError | None:
            if len(field.value) > n:
                return RuleError(f"Must be at most {n} characters")
            return None
        return check

Custom validators follow the same protocol — any callable matching
``(Input) -> Exception | None`` works with ``Input.add_validator()``.
Validators return their cause; they do not raise it.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from warble.errors import BoundsError, ParseError, RuleError

if TYPE_CHECKING:
    from warble.fields.input import Input

# Type alias for a validator function
type Validator = Callable[[Input], Exception | None]

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(field: Input) -> RuleError | None:
    """Field must be present and non-empty."""
    if not field.value or not field.value.strip():
        return RuleError("This field is required")
    return None


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def max_length(n: int) -> Validator:
    """Value must be at most *n* characters."""

    def check(field: Input) -> RuleError | None:
        if len(field.value) > n:
            return RuleError(f"Must be at most {n} characters")
        return None

    return check


def min_length(n: int) -> Validator:
    """Value must be at least *n* characters."""

    def check(field: Input) -> RuleError | None:
        if len(field.value) < n:
            return RuleError(f"Must be at least {n} characters")
        return None

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Basic email pattern — checks structure, not deliverability
_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}")


def email(field: Input) -> RuleError | None:
    """Value must be a valid email address (basic format check)."""
    if not _EMAIL_RE.fullmatch(field.value):
        return RuleError("Must be a valid email address")
    return None


# Basic URL pattern — checks scheme + host structure
_URL_RE = re.compile(r"https?://[^\s/$.?#].\S*", re.IGNORECASE)


def url(field: Input) -> RuleError | None:
    """Value must be a valid URL (http/https)."""
    if not _URL_RE.fullmatch(field.value):
        return RuleError("Must be a valid URL")
    return None


def matches(pattern: str, message: str | None = None) -> Validator:
    """The whole value must match the given regex pattern.

    Patterns are applied with ``re.fullmatch``: ``matches("[0-9]+")`` rejects
    ``"12abc"``, and no trailing newline slips past an end anchor.
    """
    compiled = re.compile(pattern)

    def check(field: Input) -> RuleError | None:
        if not compiled.fullmatch(field.value):
            return RuleError(message or f"Must match pattern: {pattern}")
        return None

    return check


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def one_of(*choices: str) -> Validator:
    """Value must be one of the given choices."""
    allowed = frozenset(choices)

    def check(field: Input) -> RuleError | None:
        if field.value not in allowed:
            options = ", ".join(sorted(allowed))
            return RuleError(f"Must be one of: {options}")
        return None

    return check


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------

# Optional sign, ASCII digits only: no whitespace, underscores or other scripts
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_int32(value: str) -> int | None:
    """Parse a base-10 signed 32-bit integer, or return None."""
    if _INTEGER_RE.fullmatch(value) is None:
        return None
    number = int(value)
    if number < INT32_MIN or number > INT32_MAX:
        return None
    return number


def is_integer(field: Input) -> ParseError | None:
    """Value must be a base-10 integer that fits in 32 bits."""
    if parse_int32(field.value) is None:
        return ParseError("not a valid integer")
    return None


def integer_bound(field: Input) -> BoundsError | None:
    """Value must lie within the field's inclusive ``[min, max]``.

    Unparseable values pass here; ``is_integer`` runs first and reports them.
    """
    number = parse_int32(field.value)
    if number is None:
        return None
    if number < field.min:
        return BoundsError(field.name, "min", field.min)
    if number > field.max:
        return BoundsError(field.name, "max", field.max)
    return None
