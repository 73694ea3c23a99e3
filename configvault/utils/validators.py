"""
Validation Utilities
====================

Input validation for string-typed command arguments.
"""

from __future__ import annotations

import os
from pathlib import Path


class ValidationError(ValueError):
    """Raised when validation fails."""
    pass


def validate_path_argument(value: str, field_name: str = "path") -> Path:
    """
    Validate a file path received as a string.

    Args:
        value: The raw argument
        field_name: Name of the field for error messages

    Returns:
        The argument as a Path (not resolved)

    Raises:
        ValidationError: If the value is not a usable path string
    """
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")

    if not value.strip():
        raise ValidationError(f"{field_name} cannot be empty")

    # Null bytes are rejected by the OS with a confusing error
    if "\x00" in value:
        raise ValidationError(f"{field_name} contains invalid characters")

    try:
        os.fsencode(value)
    except UnicodeEncodeError:
        raise ValidationError(f"{field_name} is not a valid filesystem path") from None

    return Path(value).expanduser()


def validate_text_argument(
    value: str,
    field_name: str = "value",
    allow_empty: bool = True,
) -> str:
    """
    Validate a text argument such as a JSON payload or password.

    The value must be encodable as UTF-8; JSON decoders accept escaped
    lone surrogates that no UTF-8 file can hold.

    Raises:
        ValidationError: If validation fails
    """
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")

    if not allow_empty and not value:
        raise ValidationError(f"{field_name} cannot be empty")

    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        # The value may be a password; never echo it
        raise ValidationError(f"{field_name} is not valid Unicode text") from None

    return value
