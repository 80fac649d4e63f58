"""Public registration form UI component."""
import logging
from typing import Any, Dict

import streamlit as st

from src.models.registration import DelegateType, RegionCluster, TshirtSize
from src.services.registration_service import submit_registration
from src.ui.html_utils import html_block
from src.ui.resources import get_registration_hook, get_settings, get_store
from src.utils.exceptions import StoreError, ValidationError

logger = logging.getLogger(__name__)

FORM_FEEDBACK = "registration_form_feedback"

PAYMENT_OPTIONS = ["Bank Transfer", "GCash", "Cash"]
DIETARY_OPTIONS = ["None", "Vegetarian", "Vegan", "Halal", "Others"]

FIELD_LABELS = {
    "delegateType": "Delegate type",
    "surname": "Surname",
    "firstName": "First name",
    "institution": "Institution",
    "institutionAddress": "Institution address",
    "institutionContact": "Institution contact number",
    "institutionEmail": "Institution email",
    "regionCluster": "Region cluster",
    "delegateContact": "Contact number",
    "delegateEmail": "Email",
    "age": "Age",
    "tshirtSize": "T-shirt size",
    "paymentOption": "Payment option",
}


def _render_header() -> None:
    st.markdown(html_block("""
        <div style="background: linear-gradient(135deg, #1e3c72 0%, #2a5298 100%);
        color: white; padding: 28px; border-radius: 12px; text-align: center; margin-bottom: 24px;">
            <h1 style="margin: 0;">63rd National Rizal Youth Leadership Institute</h1>
            <p style="margin: 8px 0 0;">Delegate Registration</p>
        </div>
    """), unsafe_allow_html=True)


def _collect_form() -> Dict[str, Any]:
    """Render form inputs and return the payload with client field names."""
    payload: Dict[str, Any] = {}

    st.markdown("#### Delegate")
    payload["delegateType"] = st.selectbox(
        "Delegate type *", options=[d.value for d in DelegateType]
    )
    name_cols = st.columns([2, 2, 1])
    with name_cols[0]:
        payload["surname"] = st.text_input("Surname *")
    with name_cols[1]:
        payload["firstName"] = st.text_input("First name *")
    with name_cols[2]:
        payload["middleInitial"] = st.text_input("M.I.", max_chars=2)

    detail_cols = st.columns(3)
    with detail_cols[0]:
        payload["age"] = st.number_input("Age *", min_value=0, max_value=120, value=0, step=1)
    with detail_cols[1]:
        payload["delegateContact"] = st.text_input("Contact number *")
    with detail_cols[2]:
        payload["delegateEmail"] = st.text_input("Email *")

    st.markdown("#### Institution")
    payload["institution"] = st.text_input("Institution *")
    payload["institutionAddress"] = st.text_input("Institution address *")
    inst_cols = st.columns(2)
    with inst_cols[0]:
        payload["institutionContact"] = st.text_input("Institution contact number *")
    with inst_cols[1]:
        payload["institutionEmail"] = st.text_input("Institution email *")
    payload["regionCluster"] = st.selectbox(
        "Region cluster *", options=[r.value for r in RegionCluster]
    )

    st.markdown("#### Preferences")
    pref_cols = st.columns(2)
    with pref_cols[0]:
        payload["tshirtSize"] = st.selectbox("T-shirt size *", options=[s.value for s in TshirtSize])
    with pref_cols[1]:
        payload["dietaryPreferences"] = st.selectbox("Dietary preference", options=DIETARY_OPTIONS)
    payload["dietaryComments"] = st.text_area("Dietary comments", height=80)

    st.markdown("#### Payment")
    payload["paymentOption"] = st.radio("Payment option *", options=PAYMENT_OPTIONS, horizontal=True)
    payload["paymentProofUrl"] = st.text_input("Proof of payment link")
    payload["transactionRef"] = st.text_input("Transaction reference number")

    return payload


def _handle_submission(payload: Dict[str, Any]) -> None:
    """Submit the payload and store feedback in session state."""
    try:
        registration = submit_registration(
            payload,
            get_store(),
            prefix=get_settings().registration_prefix,
            on_registered=get_registration_hook(),
        )
    except ValidationError as e:
        label = FIELD_LABELS.get(e.field, e.field)
        st.error(f"❌ Please fill in: {label}" if e.message.startswith("Missing") else f"❌ {e.message}")
        return
    except StoreError:
        logger.exception("Failed to save registration from form")
        st.error("❌ Failed to save registration. Please try again later.")
        return

    st.session_state[FORM_FEEDBACK] = registration.registration_id


def render_registration_form():
    """Render the public registration page."""
    _render_header()

    registration_id = st.session_state.get(FORM_FEEDBACK)
    if registration_id:
        st.success(f"🎉 Registration submitted! Your Registration ID is **{registration_id}**.")
        st.info("Please keep your Registration ID for future reference.")
        if st.button("Register another delegate"):
            st.session_state.pop(FORM_FEEDBACK, None)
            st.rerun()
        return

    with st.form("registration_form", clear_on_submit=False):
        payload = _collect_form()
        submitted = st.form_submit_button("Submit registration", type="primary", use_container_width=True)

    if submitted:
        _handle_submission(payload)
        if st.session_state.get(FORM_FEEDBACK):
            st.rerun()
