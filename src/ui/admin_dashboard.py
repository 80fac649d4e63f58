"""Admin dashboard UI component for reviewing registrations."""
import logging
from typing import List

import streamlit as st

from src.models.registration import RegionCluster, Registration, RegistrationStatus
from src.services.admin_service import (
    RegistrationStats,
    filter_registrations,
    load_dashboard,
    update_registration_status,
    visayas_mindanao_count,
)
from src.services.export_service import export_filename, export_to_csv
from src.ui.html_utils import html_block, stat_card, status_badge
from src.ui.resources import get_store
from src.utils.date_utils import format_locale_date
from src.utils.exceptions import InvalidStatusError, StoreError

logger = logging.getLogger(__name__)

DASHBOARD_DATA = "admin_dashboard_data"
SEARCH_KEY = "admin_dashboard_search"
REGION_KEY = "admin_dashboard_region"
STATUS_ERROR = "admin_dashboard_status_error"

ALL_REGIONS = ""
STATUS_LABELS = {
    RegistrationStatus.PENDING.value: "Pending",
    RegistrationStatus.APPROVED.value: "Approved",
    RegistrationStatus.REJECTED.value: "Rejected",
}


def _refresh_dashboard() -> None:
    """Drop the cached view so the next run re-fetches list and stats."""
    st.session_state.pop(DASHBOARD_DATA, None)


def _get_dashboard_data():
    """Return (registrations, stats), fetching them once per refresh."""
    if DASHBOARD_DATA not in st.session_state:
        with st.spinner("Loading registrations..."):
            st.session_state[DASHBOARD_DATA] = load_dashboard(get_store())
    return st.session_state[DASHBOARD_DATA]


def _status_select_key(registration: Registration) -> str:
    return f"admin_status_{registration.id}_{registration.status.value}"


def _on_status_change(registration: Registration) -> None:
    """Persist a status chosen in the table, then refresh list and stats."""
    new_status = st.session_state.get(_status_select_key(registration))
    try:
        update_registration_status(get_store(), registration.id, new_status)
    except (InvalidStatusError, StoreError) as e:
        logger.error(f"Error updating status for {registration.registration_id}: {e}")
        st.session_state[STATUS_ERROR] = f"Error updating status for {registration.registration_id}"
        # Drop the pending choice so the select shows the stored value again
        st.session_state.pop(_status_select_key(registration), None)
        return

    _refresh_dashboard()


def _render_header() -> None:
    st.markdown(html_block("""
        <div style="background: white; border-radius: 12px; padding: 24px; margin-bottom: 24px;">
            <h1 style="color: #1f2937; margin: 0 0 8px;">NRYLI Registration Dashboard</h1>
            <p style="color: #4b5563; margin: 0;">Manage and monitor registration submissions</p>
        </div>
    """), unsafe_allow_html=True)


def _render_stats(stats: RegistrationStats) -> None:
    cards = [
        ("Total Registrations", stats.total, "#3b82f6"),
        ("NCR", stats.region_count(RegionCluster.NCR.value), "#22c55e"),
        ("Luzon", stats.region_count(RegionCluster.LUZON.value), "#a855f7"),
        ("Visayas/Mindanao", visayas_mindanao_count(stats), "#f97316"),
    ]
    for column, (title, value, color) in zip(st.columns(4, gap="small"), cards):
        with column:
            st.markdown(stat_card(title, value, color), unsafe_allow_html=True)

    if stats.by_delegate_type:
        with st.expander("By delegate type"):
            for delegate_type, count in sorted(stats.by_delegate_type.items(), key=lambda kv: str(kv[0])):
                st.write(f"**{delegate_type}**: {count}")


def _render_filters(registrations: List[Registration]) -> List[Registration]:
    """Render search/region inputs and the export button; return the visible rows."""
    filter_cols = st.columns([3, 1.2, 1], gap="small")
    with filter_cols[0]:
        search_term = st.text_input(
            "Search",
            key=SEARCH_KEY,
            placeholder="Search by name, registration ID, or institution...",
            label_visibility="collapsed",
        )
    with filter_cols[1]:
        region = st.selectbox(
            "Region",
            options=[ALL_REGIONS] + [r.value for r in RegionCluster],
            format_func=lambda value: value or "All Regions",
            key=REGION_KEY,
            label_visibility="collapsed",
        )

    visible = filter_registrations(registrations, search_term, region)

    with filter_cols[2]:
        st.download_button(
            "📥 Export CSV",
            data=export_to_csv(visible).encode("utf-8"),
            file_name=export_filename(),
            mime="text/csv",
            use_container_width=True,
            key="admin_export_csv",
        )

    return visible


def _render_row(registration: Registration) -> None:
    cols = st.columns([1.4, 1.4, 1.6, 1.6, 0.9, 0.9, 1.1])
    with cols[0]:
        st.markdown(f"**{registration.registration_id}**")
        st.caption(format_locale_date(registration.created_at))
    with cols[1]:
        st.markdown(f"**{registration.display_name}**")
        st.caption(registration.delegate_type)
    with cols[2]:
        st.write(registration.institution)
        st.caption(registration.region_cluster)
    with cols[3]:
        st.write(registration.delegate_contact)
        st.caption(registration.delegate_email)
    with cols[4]:
        st.write(f"Age: {registration.age}")
        st.caption(f"Size: {registration.tshirt_size}")
    with cols[5]:
        st.markdown(status_badge(registration.status.value), unsafe_allow_html=True)
    with cols[6]:
        options = [s.value for s in RegistrationStatus]
        st.selectbox(
            "Status",
            options=options,
            index=options.index(registration.status.value),
            format_func=lambda value: STATUS_LABELS[value],
            key=_status_select_key(registration),
            on_change=_on_status_change,
            args=(registration,),
            label_visibility="collapsed",
        )


def _render_table(visible: List[Registration]) -> None:
    header = st.columns([1.4, 1.4, 1.6, 1.6, 0.9, 0.9, 1.1])
    for column, title in zip(
        header,
        ["Registration", "Delegate", "Institution", "Contact", "Details", "Status", "Actions"],
    ):
        column.caption(title.upper())

    if not visible:
        st.info("No registrations found matching your criteria.")
        return

    for registration in visible:
        _render_row(registration)
        st.divider()


def render_admin_dashboard():
    """Render the admin dashboard page."""
    _render_header()

    status_error = st.session_state.pop(STATUS_ERROR, None)
    if status_error:
        st.error(f"❌ {status_error}")

    try:
        registrations, stats = _get_dashboard_data()
    except StoreError:
        logger.exception("Error fetching registrations")
        st.error("❌ Unable to load registrations. Please try again later.")
        if st.button("🔄 Retry", key="admin_dashboard_retry"):
            _refresh_dashboard()
            st.rerun()
        return

    _render_stats(stats)
    st.markdown("<div style='margin-bottom: 16px;'></div>", unsafe_allow_html=True)

    visible = _render_filters(registrations)

    refresh_col, count_col = st.columns([1, 4])
    with refresh_col:
        if st.button("🔄 Refresh", key="admin_dashboard_refresh", use_container_width=True):
            _refresh_dashboard()
            st.rerun()
    with count_col:
        st.caption(f"Showing {len(visible)} of {len(registrations)} registrations")

    _render_table(visible)
