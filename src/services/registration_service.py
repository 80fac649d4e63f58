"""Registration service for handling delegate submissions."""
import logging
from typing import Any, Callable, Dict, Optional

from src.models.registration import (
    CLIENT_TO_STORED_FIELDS,
    DEFAULT_DIETARY_PREFERENCE,
    OPTIONAL_FIELDS,
    REQUIRED_FIELDS,
    Registration,
    RegistrationStatus,
)
from src.utils.config import DEFAULT_PREFIX
from src.utils.date_utils import current_millis
from src.utils.exceptions import DuplicateRegistrationError
from src.utils.validation import optional_value, parse_age, validate_required_fields

logger = logging.getLogger(__name__)

MAX_INSERT_ATTEMPTS = 3
ID_SUFFIX_DIGITS = 8

RegistrationHook = Callable[[Registration], Any]


def generate_registration_id(prefix: str = DEFAULT_PREFIX, now_ms: Optional[int] = None) -> str:
    """
    Generate a registration ID.

    Args:
        prefix: Event prefix (e.g. "NRYLI2025")
        now_ms: Millisecond epoch to derive from (defaults to now)

    Returns:
        "<prefix>-<last 8 digits of the millisecond epoch>", e.g. "NRYLI2025-12345678"
    """
    millis = current_millis() if now_ms is None else now_ms
    suffix = str(millis)[-ID_SUFFIX_DIGITS:].zfill(ID_SUFFIX_DIGITS)
    return f"{prefix}-{suffix}"


def build_registration_record(payload: Dict[str, Any], registration_id: str) -> Dict[str, Any]:
    """
    Map a validated client payload to a stored row.

    Args:
        payload: Client payload with camelCase keys (already validated)
        registration_id: Identifier assigned to this submission

    Returns:
        dict keyed by stored column names, with status "pending"

    Raises:
        ValidationError: If age cannot be read as an integer
    """
    record: Dict[str, Any] = {}

    for field in REQUIRED_FIELDS:
        value = payload[field]
        record[CLIENT_TO_STORED_FIELDS[field]] = value.strip() if isinstance(value, str) else value

    for field in OPTIONAL_FIELDS:
        value = optional_value(payload.get(field))
        record[CLIENT_TO_STORED_FIELDS[field]] = value.strip() if isinstance(value, str) else value

    record["age"] = parse_age(payload["age"])
    record["dietary_preferences"] = (
        optional_value(payload.get("dietaryPreferences")) or DEFAULT_DIETARY_PREFERENCE
    )
    record["registration_id"] = registration_id
    record["status"] = RegistrationStatus.PENDING.value
    return record


def submit_registration(
    payload: Dict[str, Any],
    store,
    *,
    prefix: str = DEFAULT_PREFIX,
    on_registered: Optional[RegistrationHook] = None,
    id_factory: Optional[Callable[[], str]] = None,
) -> Registration:
    """
    Validate and persist one registration.

    Args:
        payload: Raw key/value payload using client field names
        store: Record store adapter providing insert()
        prefix: Registration ID prefix
        on_registered: Optional hook invoked after the record is stored
            (e.g. the confirmation notifier)
        id_factory: Optional ID generator, defaults to generate_registration_id

    Returns:
        The stored Registration

    Raises:
        ValidationError: On the first missing or malformed field, before any write
        StoreError: If the store insert fails

    Behavior:
        - An ID collision is retried with a fresh ID, up to MAX_INSERT_ATTEMPTS
        - Hook failures are logged and never undo or fail the registration
    """
    validate_required_fields(payload)

    make_id = id_factory or (lambda: generate_registration_id(prefix))
    # Built once so a malformed age is rejected before the store is touched
    record = build_registration_record(payload, make_id())

    for attempt in range(1, MAX_INSERT_ATTEMPTS + 1):
        try:
            stored = store.insert(record)
            break
        except DuplicateRegistrationError:
            if attempt == MAX_INSERT_ATTEMPTS:
                logger.error(
                    f"Giving up after {attempt} registration ID collisions "
                    f"(last tried {record['registration_id']})"
                )
                raise
            logger.warning(f"Registration ID {record['registration_id']} already taken, retrying")
            new_id = make_id()
            if new_id == record["registration_id"]:
                new_id = generate_registration_id(prefix, current_millis() + attempt)
            record["registration_id"] = new_id

    registration = Registration.from_record(stored)
    logger.info(f"Stored registration {registration.registration_id}")

    if on_registered is not None:
        try:
            on_registered(registration)
        except Exception:
            logger.exception(f"Post-registration hook failed for {registration.registration_id}")

    return registration
