"""Supabase (PostgREST) durable store."""

import logging
from typing import Optional, Any, Dict, List
import requests

from errors import StoreError
from schemas.contract import utc_now_iso
from .base_store import DurableStore

logger = logging.getLogger(__name__)


class SupabaseStore(DurableStore):
    """
    Hosted store reached through the Supabase REST API.

    Rows are written with ``Prefer: return=representation`` so inserts and
    updates hand back the stored row. Every non-2xx answer or transport
    failure is raised as StoreError; callers decide whether to swallow it.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: int = 10
    ):
        """
        Initialize Supabase store.

        Args:
            base_url: Project URL (e.g., https://xyz.supabase.co)
            api_key: Service or anon key
            timeout: Request timeout in seconds (default: 10)
        """
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout

    def _get_headers(self, returning: bool = False) -> dict:
        """Build request headers."""
        headers = {
            "Content-Type": "application/json",
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }
        if returning:
            headers["Prefer"] = "return=representation"
        return headers

    def _table_url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    def _send(self, method: str, table: str, **kwargs) -> Any:
        try:
            response = requests.request(
                method,
                self._table_url(table),
                timeout=self.timeout,
                **kwargs
            )
        except requests.exceptions.Timeout as e:
            raise StoreError(f"{method} {table} timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise StoreError(f"{method} {table} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise StoreError(
                f"{method} {table} returned status {response.status_code}: {response.text}"
            )

        if not response.content:
            return []

        try:
            return response.json()
        except ValueError as e:
            raise StoreError(f"{method} {table} returned malformed JSON: {response.text}") from e

    def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored."""
        row = dict(row)
        row.setdefault("created_at", utc_now_iso())

        result = self._send(
            "POST",
            table,
            json=row,
            headers=self._get_headers(returning=True)
        )

        if not result:
            raise StoreError(f"Insert into {table} returned no row")
        return result[0]

    def update(
        self,
        table: str,
        row_id: str,
        fields: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Partially update one row by id."""
        result = self._send(
            "PATCH",
            table,
            params={"id": f"eq.{row_id}"},
            json=fields,
            headers=self._get_headers(returning=True)
        )
        return result[0] if result else None

    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """Select rows matching equality filters."""
        params = {column: f"eq.{value}" for column, value in (filters or {}).items()}
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = limit

        return self._send(
            "GET",
            table,
            params=params,
            headers=self._get_headers()
        )
