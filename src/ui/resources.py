"""Process-wide clients shared by the Streamlit pages."""
import streamlit as st

from src.services.notification_service import build_confirmation_hook
from src.services.storage_service import SupabaseStore
from src.utils.config import Settings, load_settings


@st.cache_resource
def get_settings() -> Settings:
    return load_settings()


@st.cache_resource
def get_store() -> SupabaseStore:
    """Record store built once per process."""
    return SupabaseStore.from_settings(get_settings())


@st.cache_resource
def get_registration_hook():
    """Confirmation notifier when emails are enabled, otherwise None."""
    return build_confirmation_hook(get_settings())
