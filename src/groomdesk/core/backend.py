"""Data access layer for the hosted backend.

Wraps the Supabase table API (PostgREST) behind a small gateway so the rest
of the application deals with plain dicts and a single error type.
Nothing is retried here; callers decide how to reconcile a failure.
"""

from dataclasses import dataclass
from typing import Any

import httpx
from loguru import logger
from supabase import Client, PostgrestAPIError, create_client

from groomdesk.config.settings import Settings
from groomdesk.core.schema import REQUIRED_SQL


class BackendError(Exception):
    """A table operation failed on the backend or in transit."""

    def __init__(self, action: str, message: str, code: str | None = None) -> None:
        super().__init__(f"{action} failed: {message}")
        self.action = action
        self.message = message
        self.code = code


@dataclass(frozen=True)
class SchemaStatus:
    """Outcome of the schema compatibility probe."""

    ok: bool
    detail: str | None = None


def create_backend_client(settings: Settings) -> Client:
    """Create a backend client from the configured project URL and anon key.

    Raises:
        ValueError: If the credentials are not configured
    """
    if not settings.has_backend_credentials:
        raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set (see .env.example)")
    logger.info(f"Connecting to backend at {settings.supabase_url}")
    return create_client(settings.supabase_url, settings.supabase_anon_key)


class BackendGateway:
    """Read/write access to the remote tables plus the schema probe."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def fetch_all(
        self,
        table: str,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[dict[str, Any]]:
        """Fetch every visible row of a table, optionally ordered by one column."""
        query = self.client.table(table).select("*")
        if order_by:
            query = query.order(order_by, desc=not ascending)
        response = self._execute(query, f"fetch {table}")
        rows = list(response.data or [])
        logger.debug(f"Fetched {len(rows)} rows from {table}")
        return rows

    def insert(self, table: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as created by the backend."""
        response = self._execute(self.client.table(table).insert([payload]), f"insert {table}")
        if not response.data:
            raise BackendError(f"insert {table}", "backend returned no row")
        row = dict(response.data[0])
        logger.info(f"Inserted row {row.get('id')} into {table}")
        return row

    def update(self, table: str, row_id: str, values: dict[str, Any]) -> None:
        """Update columns of a single row by id."""
        query = self.client.table(table).update(values).eq("id", row_id)
        self._execute(query, f"update {table}")
        logger.info(f"Updated {table}/{row_id}: {sorted(values)}")

    def delete(self, table: str, row_id: str) -> None:
        """Delete a single row by id. Deleting a missing row is not an error."""
        self._execute(self.client.table(table).delete().eq("id", row_id), f"delete {table}")
        logger.info(f"Deleted {table}/{row_id}")

    def probe_schema(self, table: str = "clients", column: str = "pet_name") -> SchemaStatus:
        """Check that a table and one of its newer columns exist.

        Any error, including a transport error, is reported as an outdated
        schema so the user lands on the upgrade screen.
        """
        try:
            self._execute(self.client.table(table).select(column).limit(1), f"probe {table}")
        except BackendError as e:
            logger.warning(f"Schema probe on {table}.{column} failed: {e.message}")
            logger.info(f"Required SQL:\n{REQUIRED_SQL}")
            return SchemaStatus(ok=False, detail=e.message)
        logger.debug(f"Schema probe on {table}.{column} passed")
        return SchemaStatus(ok=True)

    @staticmethod
    def _execute(query: Any, action: str) -> Any:
        try:
            return query.execute()
        except PostgrestAPIError as e:
            logger.error(f"{action} rejected by backend: {e.message} (code={e.code})")
            raise BackendError(action, e.message or str(e), e.code) from e
        except httpx.HTTPError as e:
            logger.error(f"{action} transport error: {e}")
            raise BackendError(action, str(e)) from e
