"""Record store adapter for the hosted registrations table (Supabase/PostgREST)."""
import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from src.utils.config import Settings
from src.utils.exceptions import (
    DuplicateRegistrationError,
    RegistrationNotFoundError,
    StoreError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class SupabaseStore:
    """
    Thin client to one PostgREST table.

    Reads are sent with the read (anon) key and writes with the service-role
    key. Every failure is raised as StoreError; nothing is swallowed here.
    """

    def __init__(
        self,
        base_url: str,
        read_key: str,
        write_key: str,
        table: str = "nryli_registrations",
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.table = table
        self.timeout = timeout
        self.endpoint = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self._read_key = read_key
        self._write_key = write_key
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseStore":
        """Build a store from process settings."""
        return cls(
            base_url=settings.supabase_url,
            read_key=settings.supabase_anon_key,
            write_key=settings.supabase_service_role_key,
            table=settings.table,
            timeout=settings.request_timeout,
        )

    def _headers(self, write: bool = False, prefer: Optional[str] = None) -> Dict[str, str]:
        key = self._write_key if write else self._read_key
        headers = {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _request(
        self,
        method: str,
        *,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        write: bool = False,
        prefer: Optional[str] = None,
    ) -> requests.Response:
        """Send one request and raise StoreError on transport or HTTP failure."""
        try:
            response = self.session.request(
                method,
                self.endpoint,
                params=params,
                json=json,
                headers=self._headers(write=write, prefer=prefer),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"Store {method} timed out after {self.timeout}s: {e}")
            raise StoreError(f"Store request timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Store {method} failed: {e}")
            raise StoreError(f"Store request failed: {e}") from e

        if response.status_code == 409:
            logger.warning(f"Store conflict on {method}: {response.text}")
            raise DuplicateRegistrationError(f"Conflicting record: {response.text}")

        if response.status_code >= 400:
            logger.error(f"Store {method} returned {response.status_code}: {response.text}")
            raise StoreError(f"Store returned HTTP {response.status_code}")

        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise StoreError("Store returned a non-JSON response") from e

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert one row and return it as stored.

        Args:
            record: Row keyed by stored column names

        Returns:
            dict: Stored row including store-managed id and created_at

        Raises:
            DuplicateRegistrationError: If a unique column collides
            StoreError: On any other failure
        """
        response = self._request(
            "POST",
            json=[record],
            write=True,
            prefer="return=representation",
        )
        rows = self._json(response)
        if not rows:
            raise StoreError("Store accepted the insert but returned no row")
        return rows[0]

    def list_all(self) -> List[Dict[str, Any]]:
        """Return every row, newest first."""
        response = self._request("GET", params={"select": "*", "order": "created_at.desc"})
        return self._json(response) or []

    def update_status(self, record_id: Any, new_status: str) -> Dict[str, Any]:
        """
        Set the status column of one row.

        Raises:
            RegistrationNotFoundError: If no row has the given id
            StoreError: On any other failure
        """
        response = self._request(
            "PATCH",
            params={"id": f"eq.{record_id}"},
            json={"status": new_status},
            write=True,
            prefer="return=representation",
        )
        rows = self._json(response)
        if not rows:
            raise RegistrationNotFoundError(f"No registration with id {record_id}")
        return rows[0]

    def count_all(self) -> int:
        """Return the number of rows using an exact count."""
        response = self._request(
            "HEAD",
            params={"select": "*"},
            prefer="count=exact",
        )
        content_range = response.headers.get("Content-Range", "")
        # e.g. "0-24/25" or "*/0"
        try:
            return int(content_range.rsplit("/", 1)[1])
        except (IndexError, ValueError) as e:
            raise StoreError(f"Unexpected Content-Range header: {content_range!r}") from e

    def list_field(self, field_name: str) -> List[Any]:
        """Return one column's value for every row."""
        rows = self.list_fields([field_name])
        return [row.get(field_name) for row in rows]

    def list_fields(self, field_names: Iterable[str]) -> List[Dict[str, Any]]:
        """Return the selected columns for every row in a single read."""
        response = self._request("GET", params={"select": ",".join(field_names)})
        return self._json(response) or []
