"""Environment-backed application settings."""
import logging
import os
from dataclasses import dataclass
from threading import Lock

from dotenv import load_dotenv

from src.utils.exceptions import ConfigurationError

DEFAULT_TABLE = "nryli_registrations"
DEFAULT_EMAIL_FROM = "NRYLI Registration <noreply@yourfirm.com>"
DEFAULT_PREFIX = "NRYLI2025"

_ENV_LOADED = False
_ENV_LOCK = Lock()


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once at startup."""

    supabase_url: str
    supabase_anon_key: str
    supabase_service_role_key: str
    table: str = DEFAULT_TABLE
    resend_api_key: str = ""
    email_from: str = DEFAULT_EMAIL_FROM
    send_confirmation_email: bool = False
    request_timeout: float = 10.0
    registration_prefix: str = DEFAULT_PREFIX
    log_level: str = "INFO"

    @property
    def email_enabled(self) -> bool:
        """True when confirmation emails are switched on and a key is present."""
        return self.send_confirmation_email and bool(self.resend_api_key)


def _load_env() -> None:
    """Load variables from a .env file once per process."""
    global _ENV_LOADED

    if _ENV_LOADED:
        return

    with _ENV_LOCK:
        if _ENV_LOADED:
            return
        # Existing environment variables win over .env entries
        load_dotenv(override=False)
        _ENV_LOADED = True


def _first_env(*names: str, default: str = "") -> str:
    for name in names:
        value = os.getenv(name)
        if value:
            return value.strip()
    return default


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def load_settings() -> Settings:
    """
    Build Settings from the environment.

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If the store URL or either store credential is missing
    """
    _load_env()

    supabase_url = _first_env("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL")
    anon_key = _first_env("SUPABASE_ANON_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY")
    service_key = _first_env("SUPABASE_SERVICE_ROLE_KEY")

    missing = [
        name for name, value in (
            ("SUPABASE_URL", supabase_url),
            ("SUPABASE_ANON_KEY", anon_key),
            ("SUPABASE_SERVICE_ROLE_KEY", service_key),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")

    timeout_raw = _first_env("REQUEST_TIMEOUT", default="10")
    try:
        request_timeout = float(timeout_raw)
    except ValueError as e:
        raise ConfigurationError(f"REQUEST_TIMEOUT must be a number: {timeout_raw}") from e
    if request_timeout <= 0:
        raise ConfigurationError("REQUEST_TIMEOUT must be positive")

    return Settings(
        supabase_url=supabase_url,
        supabase_anon_key=anon_key,
        supabase_service_role_key=service_key,
        table=_first_env("SUPABASE_TABLE", default=DEFAULT_TABLE),
        resend_api_key=_first_env("RESEND_API_KEY"),
        email_from=_first_env("EMAIL_FROM", default=DEFAULT_EMAIL_FROM),
        send_confirmation_email=_parse_bool(_first_env("SEND_CONFIRMATION_EMAIL", default="false")),
        request_timeout=request_timeout,
        registration_prefix=_first_env("REGISTRATION_PREFIX", default=DEFAULT_PREFIX),
        log_level=_first_env("LOG_LEVEL", default="INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the entrypoints."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
