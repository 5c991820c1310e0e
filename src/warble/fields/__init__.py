"""Form fields — the ``Field`` protocol, ``Input``, and typed variants."""

from warble.fields.input import Field, FieldError, Input
from warble.fields.types import EmailInput, HiddenInput, IntegerInput, PasswordInput, TextInput

__all__ = [
    "EmailInput",
    "Field",
    "FieldError",
    "HiddenInput",
    "Input",
    "IntegerInput",
    "PasswordInput",
    "TextInput",
]
