"""Date and time utility functions."""
import re
from datetime import date, datetime, timezone
from typing import Optional

# PostgreSQL drops trailing zeros from fractional seconds
_FRACTION_PATTERN = re.compile(r"\.(\d+)")


def _normalize_fraction(timestamp: str) -> str:
    """Pad or trim fractional seconds to the six digits fromisoformat accepts."""
    return _FRACTION_PATTERN.sub(
        lambda m: "." + m.group(1)[:6].ljust(6, "0"), timestamp, count=1
    )


def parse_timestamp(timestamp: str) -> datetime:
    """
    Parse an ISO 8601 timestamp as returned by the record store.

    Args:
        timestamp: e.g. "2025-05-01T08:30:00.123456+00:00", "...00.12345+00:00" or "...Z"

    Returns:
        Timezone-aware datetime (naive inputs are treated as UTC)

    Raises:
        ValueError: If timestamp format is invalid
    """
    if not isinstance(timestamp, str) or not timestamp.strip():
        raise ValueError(f"Invalid timestamp: {timestamp!r}")

    normalized = _normalize_fraction(timestamp.strip().replace("Z", "+00:00"))
    parsed = datetime.fromisoformat(normalized)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_locale_date(timestamp: Optional[str]) -> str:
    """
    Format a creation timestamp as a date without time.

    Uses the local timezone and the locale's date representation ("%x").
    Returns "" when the timestamp is missing or unparseable.
    """
    if not timestamp:
        return ""
    try:
        return parse_timestamp(timestamp).astimezone().strftime("%x")
    except ValueError:
        return ""


def current_millis() -> int:
    """Milliseconds since the epoch."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def today_iso(today: Optional[date] = None) -> str:
    """Return today's date (or the given date) in YYYY-MM-DD format."""
    return (today or date.today()).isoformat()
