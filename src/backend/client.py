"""REST client for the hosted backend (Supabase / PostgREST).

Talks to ``{SUPABASE_URL}/rest/v1/{table}`` with the project's anon key.
Reads retry transient connection failures; writes are sent exactly once so a
timed-out update is never applied twice.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional
from pathlib import Path
import sys

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import config
from config.logging_config import get_logger
from src.errors import BackendError

logger = get_logger("backend")

TRANSIENT_ERRORS = (requests.exceptions.ConnectionError, requests.exceptions.Timeout)

# Transport failures and undecodable bodies; JSONDecodeError is a ValueError
REQUEST_ERRORS = (requests.exceptions.RequestException, ValueError)


def to_json(value: Any) -> Any:
    """Convert payload values to JSON-compatible types."""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value


def in_filter(ids: Iterable[Any]) -> str:
    """PostgREST ``in`` operator for a list of identifiers."""
    return "in.(" + ",".join(str(i) for i in ids) + ")"


class BackendClient:
    """Client for the PostgREST endpoint of the hosted backend."""

    def __init__(
        self,
        url: Optional[str] = None,
        anon_key: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the backend client.

        Args:
            url: Project URL (defaults to SUPABASE_URL).
            anon_key: Public API key (defaults to SUPABASE_ANON_KEY).
            timeout: Request timeout in seconds.
            session: Pre-built session (used by tests).
        """
        self.url = (url or config.backend.url or "").rstrip("/")
        self.anon_key = anon_key or config.backend.anon_key
        self.timeout = timeout or config.backend.timeout
        if not self.url or not self.anon_key:
            raise BackendError(
                "Backend não configurado",
                details="Defina SUPABASE_URL e SUPABASE_ANON_KEY",
            )

        self.session = session or requests.Session()
        self.session.headers.update({
            "apikey": self.anon_key,
            "Authorization": f"Bearer {self.anon_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

    @property
    def rest_url(self) -> str:
        return f"{self.url}/rest/v1"

    def _raise_for_error(self, response: requests.Response) -> None:
        if response.ok:
            return
        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text or response.reason}
        if not isinstance(payload, dict):
            payload = {"message": str(payload)}
        raise BackendError.from_payload(payload, status_code=response.status_code)

    def _request(
        self,
        method: str,
        table: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Any = None,
        prefer: Optional[str] = None,
    ) -> Any:
        headers = {"Prefer": prefer} if prefer else None
        response = self.session.request(
            method,
            f"{self.rest_url}/{table}",
            params=params,
            json=to_json(payload) if payload is not None else None,
            headers=headers,
            timeout=self.timeout,
        )
        self._raise_for_error(response)
        if not response.content:
            return []
        return response.json()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=4, max=60),
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        reraise=True,
    )
    def _get(self, table: str, params: Dict[str, Any]) -> Any:
        return self._request("GET", table, params=params)

    def _send(self, method: str, table: str, **kwargs: Any) -> Any:
        try:
            return self._request(method, table, **kwargs)
        except REQUEST_ERRORS as e:
            logger.error(f"{method} on {table} failed: {e}")
            raise BackendError("Falha de comunicação com o servidor", details=str(e)) from e

    def select(
        self,
        table: str,
        columns: str = "*",
        order_by: Optional[str] = None,
        ascending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Read rows from a table.

        Args:
            table: Table name.
            columns: PostgREST select expression.
            order_by: Column to sort by.
            ascending: Sort direction.
            limit: Maximum number of rows.

        Returns:
            List of row dictionaries.
        """
        params: Dict[str, Any] = {"select": columns}
        if order_by:
            params["order"] = f"{order_by}.{'asc' if ascending else 'desc'}"
        if limit is not None:
            params["limit"] = limit

        try:
            rows = self._get(table, params)
        except REQUEST_ERRORS as e:
            logger.error(f"Connection to backend failed reading {table}: {e}")
            raise BackendError("Falha de comunicação com o servidor", details=str(e)) from e

        logger.info(f"Loaded {len(rows)} row(s) from {table}")
        return rows

    def update(self, table: str, patch: Dict[str, Any], ids: Iterable[Any]) -> List[Dict[str, Any]]:
        """Apply the same patch to every row whose id is in ``ids``."""
        ids = list(ids)
        if not ids:
            return []
        rows = self._send(
            "PATCH", table,
            params={"id": in_filter(ids)},
            payload=patch,
            prefer="return=representation",
        )
        logger.info(f"Updated {len(ids)} row(s) in {table}: {sorted(patch)}")
        return rows

    def update_one(self, table: str, patch: Dict[str, Any], row_id: Any) -> List[Dict[str, Any]]:
        """Apply a patch to a single row."""
        rows = self._send(
            "PATCH", table,
            params={"id": f"eq.{row_id}"},
            payload=patch,
            prefer="return=representation",
        )
        logger.debug(f"Updated row {row_id} in {table}")
        return rows

    def delete(self, table: str, ids: Iterable[Any]) -> None:
        """Delete every row whose id is in ``ids``."""
        ids = list(ids)
        if not ids:
            return
        self._send("DELETE", table, params={"id": in_filter(ids)})
        logger.info(f"Deleted {len(ids)} row(s) from {table}")

    def insert(self, table: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored."""
        rows = self._send("POST", table, payload=payload, prefer="return=representation")
        logger.info(f"Inserted row into {table}")
        if isinstance(rows, list):
            return rows[0] if rows else {}
        return rows

    def close(self) -> None:
        self.session.close()
