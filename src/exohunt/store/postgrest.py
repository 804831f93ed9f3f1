"""
PostgREST-backed row store (the REST layer of Supabase).
"""

from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from exohunt.config.settings import StoreConfig
from exohunt.store.base import StoreResult
from exohunt.utils.logging import get_logger

log = get_logger(__name__)

REST_PREFIX = "/rest/v1"


def _error_message(response: httpx.Response) -> str:
    """Extract PostgREST's error message, falling back to the status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if message:
            return str(message)
    return f"HTTP {response.status_code}"


class PostgrestRowStore:
    """
    Row store talking to a PostgREST endpoint over httpx.

    Transport and HTTP errors are returned in StoreResult.error, never raised.
    """

    def __init__(
        self,
        config: StoreConfig,
        client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            config: Store configuration (URL, key, timeout).
            client: Optional preconfigured httpx client (used in tests).
        """
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=config.timeout)

    def __enter__(self) -> "PostgrestRowStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying client if this store created it."""
        if self._owns_client:
            self._client.close()

    def _url(self, table: str) -> str:
        return f"{self.config.url}{REST_PREFIX}/{table}"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["apikey"] = self.config.api_key
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> StoreResult:
        """
        Insert rows with a single bulk request.

        Args:
            table: Target table name.
            rows: Records to insert; keys are column names.

        Returns:
            StoreResult with error set if the store rejected the rows.
        """
        headers = {**self._headers(), "Prefer": "return=minimal"}
        try:
            response = self._client.post(
                self._url(table), json=[dict(row) for row in rows], headers=headers
            )
        except httpx.HTTPError as e:
            log.error("Insert request failed", table=table, error=str(e))
            return StoreResult(error=str(e) or type(e).__name__)

        if response.is_success:
            log.info("Inserted rows", table=table, rows=len(rows))
            return StoreResult(status_code=response.status_code)

        message = _error_message(response)
        log.error(
            "Insert rejected",
            table=table,
            status=response.status_code,
            error=message,
        )
        return StoreResult(error=message, status_code=response.status_code)

    def select(
        self,
        table: str,
        columns: Sequence[str],
        *,
        equals: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = True,
        limit: int | None = None,
    ) -> StoreResult:
        """
        Read rows from a table.

        Args:
            table: Source table name.
            columns: Columns to return.
            equals: Column -> value equality filters.
            order_by: Column to sort by.
            descending: Sort direction when order_by is set.
            limit: Maximum number of rows.

        Returns:
            StoreResult with the rows in ``data``.
        """
        params: dict[str, str] = {"select": ",".join(columns)}
        for column, value in (equals or {}).items():
            params[column] = f"eq.{value}"
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = str(limit)

        try:
            response = self._client.get(
                self._url(table), params=params, headers=self._headers()
            )
        except httpx.HTTPError as e:
            log.error("Select request failed", table=table, error=str(e))
            return StoreResult(error=str(e) or type(e).__name__)

        if not response.is_success:
            return StoreResult(
                error=_error_message(response), status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError:
            return StoreResult(
                error="Invalid JSON response", status_code=response.status_code
            )
        if not isinstance(data, list):
            data = [data]
        return StoreResult(data=data, status_code=response.status_code)
