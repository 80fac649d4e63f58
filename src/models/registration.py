"""Registration data model for NRYLI delegate sign-ups."""
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional

from src.utils.date_utils import parse_timestamp


class RegistrationStatus(str, Enum):
    """Lifecycle status of a registration."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RegionCluster(str, Enum):
    """Region cluster a delegate belongs to."""

    NCR = "NCR"
    LUZON = "Luzon"
    VISAYAS = "Visayas"
    MINDANAO = "Mindanao"


class DelegateType(str, Enum):
    """Attendee categories offered on the registration form."""

    STUDENT = "Student"
    FACULTY_ADVISER = "Faculty Adviser"
    YOUTH_LEADER = "Youth Leader"
    OBSERVER = "Observer"


class TshirtSize(str, Enum):
    """T-shirt sizes offered on the registration form."""

    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"


# Client-facing (camelCase) name -> stored (snake_case) column
CLIENT_TO_STORED_FIELDS: Dict[str, str] = {
    "delegateType": "delegate_type",
    "surname": "surname",
    "firstName": "first_name",
    "middleInitial": "middle_initial",
    "institution": "institution",
    "institutionAddress": "institution_address",
    "institutionContact": "institution_contact",
    "institutionEmail": "institution_email",
    "regionCluster": "region_cluster",
    "delegateContact": "delegate_contact",
    "delegateEmail": "delegate_email",
    "age": "age",
    "tshirtSize": "tshirt_size",
    "dietaryPreferences": "dietary_preferences",
    "dietaryComments": "dietary_comments",
    "paymentOption": "payment_option",
    "paymentProofUrl": "payment_proof_url",
    "transactionRef": "transaction_ref",
}

# Order matters: validation reports the first missing one
REQUIRED_FIELDS = [
    "delegateType", "surname", "firstName", "institution",
    "institutionAddress", "institutionContact", "institutionEmail",
    "regionCluster", "delegateContact", "delegateEmail",
    "age", "tshirtSize", "paymentOption",
]

OPTIONAL_FIELDS = [
    "middleInitial", "dietaryComments", "paymentProofUrl", "transactionRef",
]

DEFAULT_DIETARY_PREFERENCE = "None"


@dataclass
class Registration:
    """A delegate registration as persisted in the record store."""

    registration_id: str
    delegate_type: str
    surname: str
    first_name: str
    institution: str
    institution_address: str
    institution_contact: str
    institution_email: str
    region_cluster: str
    delegate_contact: str
    delegate_email: str
    age: int
    tshirt_size: str
    payment_option: str
    middle_initial: Optional[str] = None
    dietary_preferences: str = DEFAULT_DIETARY_PREFERENCE
    dietary_comments: Optional[str] = None
    payment_proof_url: Optional[str] = None
    transaction_ref: Optional[str] = None
    status: RegistrationStatus = RegistrationStatus.PENDING
    id: Optional[int] = None
    created_at: Optional[str] = None  # ISO 8601, assigned by the store

    def __post_init__(self):
        """Coerce status into the enum and check the timestamp."""
        if not self.registration_id or not self.registration_id.strip():
            raise ValueError("Registration ID cannot be empty")

        # Raises ValueError for anything outside the enum
        self.status = RegistrationStatus(self.status)

        if self.created_at is not None:
            try:
                parse_timestamp(self.created_at)
            except ValueError as e:
                raise ValueError(f"Invalid timestamp format: {self.created_at}") from e

    @property
    def full_name(self) -> str:
        """Name as searched on the dashboard ("First Surname")."""
        return f"{self.first_name} {self.surname}"

    @property
    def display_name(self) -> str:
        """Name as listed in the table and export ("Surname, First")."""
        return f"{self.surname}, {self.first_name}"

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Registration":
        """Build a Registration from a stored row, ignoring unknown columns."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in record.items() if key in known})

    def to_record(self) -> Dict[str, Any]:
        """
        Convert to a stored row.

        Store-managed columns (id, created_at) are left out when unset.
        """
        record = {f.name: getattr(self, f.name) for f in fields(self)}
        record["status"] = self.status.value
        for managed in ("id", "created_at"):
            if record[managed] is None:
                del record[managed]
        return record
