"""Form configuration.

FormConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FormConfig:
    """Form defaults. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = FormConfig(default_method="POST", lenient_load=True)
    """

    # Markup
    default_method: str = "GET"
    default_action: str = ""

    # Request parsing
    charset: str = "utf-8"
    max_content_length: int = 16 * 1024 * 1024  # 16 MB

    # Log and ignore malformed submissions instead of raising RequestParseError
    lenient_load: bool = False
