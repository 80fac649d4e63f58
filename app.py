"""
NRYLI Delegate Registration
Public registration form and admin dashboard
"""
import logging
import streamlit as st

from src.ui.admin_dashboard import render_admin_dashboard
from src.ui.registration_form import render_registration_form
from src.ui.resources import get_settings
from src.utils.config import configure_logging
from src.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


# Streamlit page config
st.set_page_config(
    page_title="NRYLI Registration",
    page_icon="📝",
    layout="wide",
    initial_sidebar_state="collapsed"
)


def initialize_session_state():
    """Set session state defaults."""
    if "current_page" not in st.session_state:
        st.session_state.current_page = "register"

    # Allow ?page=admin as a direct link to the dashboard
    if "url_params_processed" not in st.session_state:
        query_params = st.query_params
        if query_params.get("page") == "admin":
            st.session_state.current_page = "admin"
        st.session_state.url_params_processed = True


def apply_custom_css():
    """Apply custom CSS."""
    st.markdown("""
        <style>
        .stApp {
            background: #f3f4f6;
        }

        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
        header, [data-testid="stHeader"] {
            visibility: hidden;
            height: 0;
        }

        [data-testid="stAppViewContainer"] > .main .block-container {
            padding-top: 1.5rem;
        }

        .stButton > button, .stDownloadButton > button {
            border-radius: 8px;
            font-weight: 600;
        }

        .stButton > button[kind="primary"] {
            background: linear-gradient(135deg, #1e3c72 0%, #2a5298 100%);
            color: white;
        }
        </style>
    """, unsafe_allow_html=True)


def render_navigation():
    """Render the navigation bar."""
    st.markdown("<div style='margin-bottom: 24px;'></div>", unsafe_allow_html=True)

    nav_col1, _, nav_col3 = st.columns([1, 3, 1], gap="small")

    with nav_col1:
        if st.button("📝 Register", use_container_width=True, key="nav_register"):
            st.session_state.current_page = "register"

    with nav_col3:
        if st.button("📊 Dashboard", use_container_width=True, key="nav_admin"):
            st.session_state.current_page = "admin"


def render_current_page():
    """Render the page matching the current session state."""
    try:
        if st.session_state.current_page == "register":
            render_registration_form()

        elif st.session_state.current_page == "admin":
            render_admin_dashboard()

        else:
            st.error(f"Unknown page: {st.session_state.current_page}")
            if st.button("Back to registration"):
                st.session_state.current_page = "register"
                st.rerun()

    except ConfigurationError as e:
        logger.error(f"Application is not configured: {e}")
        st.error("The application is not configured yet. Please contact the organizers.")

    except Exception:
        # Error boundary
        logger.exception("Unhandled exception while rendering page")
        st.error("Something went wrong. Please try again later.")

        if st.button("Back to registration"):
            st.session_state.current_page = "register"
            st.rerun()


def main():
    """Application entry point."""
    try:
        log_level = get_settings().log_level
    except ConfigurationError:
        # Reported on the page by render_current_page
        log_level = "INFO"
    configure_logging(log_level)

    try:
        initialize_session_state()
        apply_custom_css()
        render_navigation()
        render_current_page()
    except Exception:
        logger.exception("Unhandled exception during app execution")
        st.error("The application hit an error. Please refresh the page.")

        if st.button("🔄 Refresh"):
            st.session_state.clear()
            st.rerun()


if __name__ == "__main__":
    main()
