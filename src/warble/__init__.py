"""Warble — declarative HTML form fields for server-rendered apps.

Build fields, attach validators, bind a submission, validate, render.

Basic usage::

    from warble import Form, IntegerInput, Submission, TextInput

    form = (
        Form(action="/signup", method="POST")
        .add_input(TextInput("name"))
        .add_input(IntegerInput("age", min_value=0, max_value=130))
    )
    form.load(Submission("POST", body=b"name=Alice&age=25"))
    if (errors := form.validate()) is None:
        print(form.values())  # {'name': 'Alice', 'age': '25'}

``Form.html()`` returns kida ``Markup``: every value is escaped once,
at render time, and templates embed the result as-is.
"""

__version__ = "0.1.0-dev"
__all__ = [
    "BoundsError",
    "ConfigurationError",
    "EmailInput",
    "Field",
    "FieldError",
    "Form",
    "FormConfig",
    "FormErrors",
    "HiddenInput",
    "Input",
    "IntegerInput",
    "ParseError",
    "PasswordInput",
    "RequestParseError",
    "RequestSource",
    "RuleError",
    "Submission",
    "TextInput",
    "WarbleError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import warble`` fast while providing a clean top-level API.
    """
    if name in ("Form", "FormErrors"):
        from warble import form as _form

        return getattr(_form, name)

    if name == "FormConfig":
        from warble.config import FormConfig

        return FormConfig

    if name in (
        "EmailInput",
        "Field",
        "FieldError",
        "HiddenInput",
        "Input",
        "IntegerInput",
        "PasswordInput",
        "TextInput",
    ):
        from warble import fields as _fields

        return getattr(_fields, name)

    if name in ("RequestSource", "Submission"):
        from warble.http import submission as _submission

        return getattr(_submission, name)

    if name in (
        "BoundsError",
        "ConfigurationError",
        "ParseError",
        "RequestParseError",
        "RuleError",
        "WarbleError",
    ):
        from warble import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
