"""Request validation helpers.

ID conventions:
- projects, experience, portfolio: UUID v4 strings
- skills, specializations: positive integers

Functions:
- validate_required_fields(data, fields) -> list[str]: Names of missing fields
- parse_integer_id(raw) -> int: Parse a positive integer id
- is_valid_uuid(value) -> bool / validate_uuid(value) -> str
"""

import re
from typing import Any

UUID_REGEX = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Largest value of a PostgreSQL integer column
MAX_INTEGER_ID = 2_147_483_647


class InvalidIdError(ValueError):
    """Raised when a path id is malformed."""

    def __init__(self, message: str, raw: Any = None):
        self.raw = raw
        super().__init__(message)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, dict):
        # i18n object {"en": "...", "vi": "..."}: needs one non-blank string
        return not any(isinstance(v, str) and v.strip() for v in value.values())
    # Lists count as present even when empty (e.g. tags_text)
    return False


def validate_required_fields(data: dict[str, Any], required_fields: list[str]) -> list[str]:
    """Return the required fields that are missing from data.

    A field is missing when absent, None, a blank string, or an i18n
    dict without any non-blank language value.

    Args:
        data: Parsed request body
        required_fields: Field names that must be present

    Returns:
        Missing field names, in the order given (empty when valid)
    """
    return [name for name in required_fields if _is_missing(data.get(name))]


def parse_integer_id(raw: str) -> int:
    """Parse a positive integer id from a path segment.

    Leading digits are enough ("12abc" -> 12), like parseInt.

    Raises:
        InvalidIdError: If no integer can be read, it is not positive,
            or it is larger than an integer column holds
    """
    match = _LEADING_INT.match(str(raw))
    if match is None:
        raise InvalidIdError("Invalid ID format. Expected integer.", raw)

    value = int(match.group(1))
    if value <= 0:
        raise InvalidIdError("ID must be a positive integer.", raw)
    if value > MAX_INTEGER_ID:
        raise InvalidIdError("ID is out of range.", raw)

    return value


def is_valid_uuid(value: Any) -> bool:
    """Check that value is a UUID v4 string (case-insensitive)."""
    if not value or not isinstance(value, str):
        return False
    return UUID_REGEX.match(value) is not None


def validate_uuid(value: Any, field_name: str = "id") -> str:
    """Return value if it is a UUID v4.

    Raises:
        InvalidIdError: If value is not a UUID v4
    """
    if not is_valid_uuid(value):
        raise InvalidIdError(f"Invalid {field_name} format. Expected UUID.", value)
    return value
