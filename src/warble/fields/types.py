"""Typed field variants.

Each variant is an ``Input`` with a fixed ``type`` and a preset validator
pipeline installed by its constructor. Presets are added per instance, so
two fields never share a pipeline.
"""

from warble.fields.input import Input
from warble.validation.rules import INT32_MAX, INT32_MIN, email, integer_bound, is_integer


class TextInput(Input):
    """A plain text input. No preset validators."""

    __slots__ = ()

    def __init__(self, name: str = "", value: str = "") -> None:
        super().__init__(name, value, kind="text")


class IntegerInput(Input):
    """A text input that only accepts base-10 32-bit integers in ``[min, max]``.

    Runs ``is_integer`` then ``integer_bound``; the bound check never sees
    a value that failed to parse. Caller validators run after both::

        age = IntegerInput("age", min_value=0, max_value=130)
    """

    __slots__ = ()

    def __init__(
        self,
        name: str = "",
        value: str = "",
        *,
        min_value: int = INT32_MIN,
        max_value: int = INT32_MAX,
    ) -> None:
        super().__init__(name, value, min_value=min_value, max_value=max_value)
        self.add_validator(is_integer).add_validator(integer_bound)


class EmailInput(Input):
    """An ``type='email'`` input checked with the ``email`` rule."""

    __slots__ = ()

    def __init__(self, name: str = "", value: str = "") -> None:
        super().__init__(name, value, kind="email")
        self.add_validator(email)


class PasswordInput(Input):
    """A password input. The submitted value is never written back into markup."""

    __slots__ = ()

    def __init__(self, name: str = "", value: str = "") -> None:
        super().__init__(name, value, kind="password")

    def _render_value(self) -> str:
        return ""


class HiddenInput(Input):
    __slots__ = ()

    def __init__(self, name: str = "", value: str = "") -> None:
        super().__init__(name, value, kind="hidden")
