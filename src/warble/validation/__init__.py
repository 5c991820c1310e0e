"""Field validation — composable rules run as an ordered pipeline.

Usage::

    from warble import TextInput
    from warble.validation import required, max_length

    title = TextInput("title").add_validator(required).add_validator(max_length(200))
    error = title.validate()
    if error is not None:
        print(error.name, error.message)

The first rule that returns a cause stops the pipeline for that field.
"""

from warble.validation.rules import (
    INT32_MAX,
    INT32_MIN,
    Validator,
    email,
    integer_bound,
    is_integer,
    matches,
    max_length,
    min_length,
    one_of,
    parse_int32,
    required,
    url,
)

__all__ = [
    "INT32_MAX",
    "INT32_MIN",
    "Validator",
    "email",
    "integer_bound",
    "is_integer",
    "matches",
    "max_length",
    "min_length",
    "one_of",
    "parse_int32",
    "required",
    "url",
]
