"""Tests for admin dashboard UI components."""
from unittest.mock import MagicMock, patch

from src.models.registration import RegistrationStatus
from src.services.admin_service import fetch_all
from src.ui.admin_dashboard import (
    DASHBOARD_DATA,
    STATUS_ERROR,
    _on_status_change,
    _status_select_key,
    render_admin_dashboard,
)
from src.ui.html_utils import html_block, stat_card, status_badge
from src.utils.exceptions import StoreError


class TestHtmlHelpers:
    """Tests for HTML snippets used by the dashboard."""

    def test_html_block_strips_indentation(self):
        html = html_block("""
            <div>
                <p>Hi</p>
            </div>
        """)

        assert html == "<div>\n<p>Hi</p>\n</div>"

    def test_stat_card_shows_title_and_value(self):
        html = stat_card("Total Registrations", 42, "#3b82f6")

        assert "Total Registrations" in html
        assert "42" in html
        assert "background: #3b82f6" in html

    def test_stat_card_escapes_title(self):
        html = stat_card("<b>NCR</b>", 1, "#000")

        assert "<b>" not in html
        assert "&lt;b&gt;NCR&lt;/b&gt;" in html

    def test_status_badge_colors(self):
        assert "#dcfce7" in status_badge("approved")
        assert "#fee2e2" in status_badge("rejected")
        assert "#fef9c3" in status_badge("pending")

    def test_unknown_status_uses_pending_colors(self):
        html = status_badge("archived")

        assert "#fef9c3" in html
        assert "archived" in html


class TestStatusChange:
    """Tests for the status select callback."""

    def test_status_key_includes_current_status(self, seeded_store):
        registration = fetch_all(seeded_store)[0]

        assert _status_select_key(registration) == f"admin_status_{registration.id}_pending"

    def test_successful_change_refreshes_view(self, seeded_store):
        registration = [r for r in fetch_all(seeded_store) if r.id == 2][0]
        mock_st = MagicMock()
        mock_st.session_state = {
            _status_select_key(registration): "approved",
            DASHBOARD_DATA: ("cached", "stats"),
        }

        with patch("src.ui.admin_dashboard.st", mock_st), \
                patch("src.ui.admin_dashboard.get_store", return_value=seeded_store):
            _on_status_change(registration)

        assert DASHBOARD_DATA not in mock_st.session_state
        assert STATUS_ERROR not in mock_st.session_state
        statuses = {r.id: r.status for r in fetch_all(seeded_store)}
        assert statuses[2] is RegistrationStatus.APPROVED

    def test_store_failure_sets_error(self, seeded_store):
        registration = fetch_all(seeded_store)[0]
        key = _status_select_key(registration)
        mock_st = MagicMock()
        mock_st.session_state = {key: "approved", DASHBOARD_DATA: ("cached", "stats")}
        store = MagicMock()
        store.update_status.side_effect = StoreError("down")

        with patch("src.ui.admin_dashboard.st", mock_st), \
                patch("src.ui.admin_dashboard.get_store", return_value=store):
            _on_status_change(registration)

        assert registration.registration_id in mock_st.session_state[STATUS_ERROR]
        assert key not in mock_st.session_state
        assert DASHBOARD_DATA in mock_st.session_state


class TestDashboardLoadFailure:
    """Tests for the dashboard when the registration list cannot be loaded."""

    def test_malformed_row_shows_retry(self, seeded_store):
        seeded_store.rows[0]["status"] = "archived"
        mock_st = MagicMock()
        mock_st.session_state = {}
        mock_st.button.return_value = False

        with patch("src.ui.admin_dashboard.st", mock_st), \
                patch("src.ui.admin_dashboard.get_store", return_value=seeded_store):
            render_admin_dashboard()

        mock_st.error.assert_called_once_with("❌ Unable to load registrations. Please try again later.")
        assert mock_st.button.call_args.args[0] == "🔄 Retry"
        assert DASHBOARD_DATA not in mock_st.session_state
