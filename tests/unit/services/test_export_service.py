"""Unit tests for export_service."""
import csv
import io
from datetime import date

from src.services.admin_service import fetch_all, filter_registrations
from src.services.export_service import (
    EXPORT_HEADERS,
    export_filename,
    export_to_csv,
    registration_row,
)
from src.utils.date_utils import format_locale_date


def _parse(csv_text):
    return list(csv.reader(io.StringIO(csv_text)))


class TestExportToCsv:
    """Test export_to_csv function."""

    def test_header_row_is_fixed(self, seeded_store):
        rows = _parse(export_to_csv(fetch_all(seeded_store)))

        assert rows[0] == [
            "Registration ID", "Date", "Name", "Delegate Type", "Institution",
            "Region", "Contact", "Email", "Age", "T-shirt Size", "Status",
        ]
        assert len(rows[0]) == 11

    def test_every_field_quoted(self, seeded_store):
        csv_text = export_to_csv(fetch_all(seeded_store))

        first_line = csv_text.splitlines()[0]
        assert first_line == ",".join(f'"{header}"' for header in EXPORT_HEADERS)
        for line in csv_text.splitlines():
            assert line.startswith('"') and line.endswith('"')

    def test_rows_newline_terminated(self, seeded_store):
        csv_text = export_to_csv(fetch_all(seeded_store))

        assert csv_text.endswith("\n")
        assert "\r" not in csv_text

    def test_one_row_per_visible_registration(self, seeded_store):
        visible = filter_registrations(fetch_all(seeded_store), region="NCR")

        rows = _parse(export_to_csv(visible))

        assert len(rows) == len(visible) + 1
        assert [row[0] for row in rows[1:]] == [r.registration_id for r in visible]

    def test_row_contents(self, seeded_store):
        registration = [r for r in fetch_all(seeded_store) if r.surname == "Rizal"][0]

        row = _parse(export_to_csv([registration]))[1]

        assert row == [
            registration.registration_id,
            format_locale_date(registration.created_at),
            "Rizal, Jose",
            "Student",
            "University of the Philippines",
            "NCR",
            "09171234567",
            "jose@x.com",
            "20",
            "M",
            "pending",
        ]

    def test_embedded_quotes_escaped(self, seeded_store):
        registration = fetch_all(seeded_store)[0]
        registration.institution = 'The "Best" School, Inc.'

        row = _parse(export_to_csv([registration]))[1]
        assert row[4] == 'The "Best" School, Inc.'

    def test_empty_selection_only_header(self):
        rows = _parse(export_to_csv([]))
        assert rows == [EXPORT_HEADERS]

    def test_row_helper_matches_header_width(self, seeded_store):
        assert len(registration_row(fetch_all(seeded_store)[0])) == len(EXPORT_HEADERS)


class TestExportFilename:
    """Test export_filename function."""

    def test_embeds_given_date(self):
        assert export_filename(date(2025, 5, 1)) == "nryli_registrations_2025-05-01.csv"

    def test_defaults_to_today(self):
        assert export_filename() == f"nryli_registrations_{date.today().isoformat()}.csv"
