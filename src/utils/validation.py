"""Data validation utilities."""
import re
from typing import Any, Dict, List, Optional

from src.models.registration import (
    REQUIRED_FIELDS,
    RegistrationStatus,
)
from src.utils.exceptions import InvalidStatusError, ValidationError

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def is_blank(value: Any) -> bool:
    """
    Check whether a payload value counts as missing.

    None, empty or whitespace-only strings, zero and False are all blank,
    mirroring how the web form treats falsy inputs.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (int, float)) and value == 0:
        return True
    return False


def validate_required_fields(payload: Dict[str, Any], required: Optional[List[str]] = None) -> None:
    """
    Validate that every required client field is present and non-empty.

    Args:
        payload: Raw key/value payload from the request body
        required: Ordered field names (defaults to REQUIRED_FIELDS)

    Raises:
        ValidationError: Naming the first missing field
    """
    if not isinstance(payload, dict):
        raise ValidationError("body", "Request body must be a JSON object")

    for field in required or REQUIRED_FIELDS:
        if is_blank(payload.get(field)):
            raise ValidationError(field)


def parse_age(value: Any) -> int:
    """
    Coerce an age value to an integer.

    Accepts ints and strings with a leading integer ("20", " 20 ", "20yo").
    No range check is applied.

    Raises:
        ValidationError: If no integer can be read
    """
    if isinstance(value, bool):
        raise ValidationError("age", "Age must be a whole number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)

    match = _LEADING_INT.match(str(value))
    if not match:
        raise ValidationError("age", "Age must be a whole number")
    return int(match.group(1))


def optional_value(value: Any) -> Optional[Any]:
    """Return None for omitted or blank optional values."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value


def validate_status(status: Any) -> RegistrationStatus:
    """
    Validate a registration status value.

    Args:
        status: Candidate status (string or RegistrationStatus)

    Returns:
        The matching RegistrationStatus

    Raises:
        InvalidStatusError: If the value isn't pending, approved or rejected
    """
    if isinstance(status, RegistrationStatus):
        return status
    try:
        return RegistrationStatus(status)
    except ValueError as e:
        raise InvalidStatusError(status) from e


def normalize_search_term(term: Optional[str]) -> str:
    """
    Normalize search input for case-insensitive matching.

    Behavior:
        - None becomes ""
        - Converts to lowercase
        - Surrounding whitespace is kept so that searches behave like the raw input
    """
    return (term or "").lower()
