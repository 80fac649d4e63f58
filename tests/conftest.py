"""Shared fixtures: an in-memory record store and sample payloads."""
from datetime import datetime, timedelta, timezone

import pytest

from src.utils.exceptions import DuplicateRegistrationError, RegistrationNotFoundError

BASE_TIME = datetime(2025, 5, 1, 8, 0, tzinfo=timezone.utc)


class FakeStore:
    """In-memory stand-in for SupabaseStore with the same method contract."""

    def __init__(self):
        self.rows = []
        self.insert_calls = 0
        self._next_id = 1

    def insert(self, record):
        self.insert_calls += 1
        if any(row["registration_id"] == record["registration_id"] for row in self.rows):
            raise DuplicateRegistrationError(f"duplicate {record['registration_id']}")

        row = dict(record)
        row["id"] = self._next_id
        row["created_at"] = (BASE_TIME + timedelta(minutes=self._next_id)).isoformat()
        self._next_id += 1
        self.rows.append(row)
        return dict(row)

    def list_all(self):
        ordered = sorted(self.rows, key=lambda row: row["created_at"], reverse=True)
        return [dict(row) for row in ordered]

    def update_status(self, record_id, new_status):
        for row in self.rows:
            if row["id"] == record_id:
                row["status"] = new_status
                return dict(row)
        raise RegistrationNotFoundError(f"No registration with id {record_id}")

    def count_all(self):
        return len(self.rows)

    def list_field(self, field_name):
        return [row.get(field_name) for row in self.rows]

    def list_fields(self, field_names):
        return [{name: row.get(name) for name in field_names} for row in self.rows]


@pytest.fixture
def fake_store():
    """Empty in-memory record store."""
    return FakeStore()


@pytest.fixture
def valid_payload():
    """A complete registration payload using client field names."""
    return {
        "delegateType": "Student",
        "surname": "Rizal",
        "firstName": "Jose",
        "institution": "UP",
        "institutionAddress": "Manila",
        "institutionContact": "123",
        "institutionEmail": "a@b.com",
        "regionCluster": "NCR",
        "delegateContact": "09171234567",
        "delegateEmail": "jose@x.com",
        "age": "20",
        "tshirtSize": "M",
        "paymentOption": "cash",
    }


@pytest.fixture
def make_payload(valid_payload):
    """Build payload variants from the valid one."""
    def _make(**overrides):
        payload = dict(valid_payload)
        payload.update(overrides)
        return payload
    return _make


@pytest.fixture
def seeded_store(fake_store, make_payload):
    """Store holding five registrations across regions and institutions."""
    from src.services.registration_service import submit_registration

    people = [
        ("Rizal", "Jose", "University of the Philippines", "NCR", "Student"),
        ("Bonifacio", "Andres", "Ateneo de Manila", "NCR", "Youth Leader"),
        ("Silang", "Gabriela", "Mariano Marcos State University", "Luzon", "Student"),
        ("Lapu-Lapu", "Datu", "University of San Carlos", "Visayas", "Faculty Adviser"),
        ("Kudarat", "Sultan", "Mindanao State University", "Mindanao", "Student"),
    ]
    for index, (surname, first, institution, region, delegate_type) in enumerate(people, 1):
        submit_registration(
            make_payload(
                surname=surname,
                firstName=first,
                institution=institution,
                regionCluster=region,
                delegateType=delegate_type,
            ),
            fake_store,
            id_factory=lambda index=index: f"NRYLI2025-{index:08d}",
        )
    return fake_store
