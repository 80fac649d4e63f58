"""Admin service for listing, aggregating and status-managing registrations."""
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from src.models.registration import RegionCluster, Registration
from src.utils.exceptions import StoreError
from src.utils.validation import normalize_search_term, validate_status

logger = logging.getLogger(__name__)


@dataclass
class RegistrationStats:
    """Aggregate counts shown on the dashboard."""

    total: int = 0
    by_region: Dict[str, int] = field(default_factory=dict)
    by_delegate_type: Dict[str, int] = field(default_factory=dict)

    def region_count(self, region: str) -> int:
        return self.by_region.get(region, 0)


def fetch_all(store) -> List[Registration]:
    """
    Fetch every registration, newest first.

    Returns:
        List[Registration]: ordered by created_at descending

    Raises:
        StoreError: If the store read fails or a row cannot be mapped
    """
    return [_to_registration(row) for row in store.list_all()]


def _to_registration(row: Dict[str, Any]) -> Registration:
    """Map a stored row, reporting malformed rows as a store error."""
    try:
        return Registration.from_record(row)
    except (TypeError, ValueError) as e:
        logger.error(f"Malformed registration row {row.get('id')}: {e}")
        raise StoreError(f"Malformed registration row {row.get('id')}") from e


def compute_stats(store) -> RegistrationStats:
    """
    Compute total, per-region and per-delegate-type counts.

    One read of the two grouping columns replaces separate count and
    per-column reads; the output shape is unchanged.

    Raises:
        StoreError: If the store read fails
    """
    rows = store.list_fields(["region_cluster", "delegate_type"])
    return RegistrationStats(
        total=len(rows),
        by_region=dict(Counter(row.get("region_cluster") for row in rows)),
        by_delegate_type=dict(Counter(row.get("delegate_type") for row in rows)),
    )


def visayas_mindanao_count(stats: RegistrationStats) -> int:
    """Combined Visayas and Mindanao count for the dashboard card."""
    return (
        stats.region_count(RegionCluster.VISAYAS.value)
        + stats.region_count(RegionCluster.MINDANAO.value)
    )


def matches_search(registration: Registration, search_term: Optional[str]) -> bool:
    """
    Check a registration against a search term.

    Case-insensitive substring match on registration ID, "first surname"
    or institution. An empty term matches everything.
    """
    term = normalize_search_term(search_term)
    if not term:
        return True
    return (
        term in (registration.registration_id or "").lower()
        or term in registration.full_name.lower()
        or term in (registration.institution or "").lower()
    )


def matches_region(registration: Registration, region: Optional[str]) -> bool:
    """Exact region match; no region selected matches everything."""
    return not region or registration.region_cluster == region


def filter_registrations(
    registrations: Iterable[Registration],
    search_term: Optional[str] = "",
    region: Optional[str] = "",
) -> List[Registration]:
    """
    Filter already-fetched registrations by search term AND region.

    The input order is preserved.
    """
    return [
        reg for reg in registrations
        if matches_search(reg, search_term) and matches_region(reg, region)
    ]


def update_registration_status(store, record_id, new_status) -> Registration:
    """
    Change the status of one registration.

    Args:
        store: Record store adapter
        record_id: Store primary key of the registration
        new_status: "pending", "approved" or "rejected"

    Returns:
        The updated Registration

    Raises:
        InvalidStatusError: If new_status is not an allowed value (no write is made)
        RegistrationNotFoundError: If no record has that id
        StoreError: If the store write fails

    Callers should reload both the list and the stats afterwards.
    """
    status = validate_status(new_status)
    row = store.update_status(record_id, status.value)
    logger.info(f"Registration {record_id} status set to {status.value}")
    return _to_registration(row)


def load_dashboard(store) -> Tuple[List[Registration], RegistrationStats]:
    """Fetch the record list and the aggregate stats together."""
    return fetch_all(store), compute_stats(store)
