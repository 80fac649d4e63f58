"""CSV export of the registrations currently shown on the dashboard."""
import csv
import io
from datetime import date
from typing import Iterable, List, Optional

from src.models.registration import Registration
from src.utils.date_utils import format_locale_date, today_iso

EXPORT_HEADERS = [
    "Registration ID", "Date", "Name", "Delegate Type", "Institution",
    "Region", "Contact", "Email", "Age", "T-shirt Size", "Status",
]


def registration_row(registration: Registration) -> List[str]:
    """Build one export row in EXPORT_HEADERS order."""
    return [
        registration.registration_id,
        format_locale_date(registration.created_at),
        registration.display_name,
        registration.delegate_type,
        registration.institution,
        registration.region_cluster,
        registration.delegate_contact,
        registration.delegate_email,
        registration.age,
        registration.tshirt_size,
        registration.status.value,
    ]


def export_to_csv(registrations: Iterable[Registration]) -> str:
    """
    Serialize registrations to CSV text.

    Args:
        registrations: The filtered/visible registrations, in display order

    Returns:
        CSV text: header row first, every field double-quoted, one row per
        registration, each row terminated by a newline
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for registration in registrations:
        writer.writerow(registration_row(registration))
    return output.getvalue()


def export_filename(today: Optional[date] = None) -> str:
    """Download filename, e.g. nryli_registrations_2025-05-01.csv."""
    return f"nryli_registrations_{today_iso(today)}.csv"
