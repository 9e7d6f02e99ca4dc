"""Shared fixtures: an in-memory stand-in for the Supabase client."""

import itertools
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest
from supabase import AuthApiError, PostgrestAPIError

from groomdesk.app.logic.session import AppSession
from groomdesk.core.backend import BackendGateway

TABLE_COLUMNS = {
    "clients": {"id", "name", "phone", "pet_name", "notes", "created_at"},
    "products": {"id", "name", "quantity", "price", "created_at"},
    "appointments": {
        "id",
        "client_id",
        "client_name",
        "pet_name",
        "service",
        "price",
        "date",
        "is_paid",
        "created_at",
    },
}


class FakeAuthError(AuthApiError):
    """Auth error raised by the fake; skips the library's version-specific constructor."""

    def __init__(self, message: str) -> None:
        Exception.__init__(self, message)
        self.message = message
        self.status = 400
        self.code = None
        self.name = "AuthApiError"


def _null_last(value: Any) -> tuple[bool, Any]:
    # nulls sort last, as in Postgres ascending order
    return (value is None, 0 if value is None else value)


class FakeQuery:
    """Records a chained PostgREST-style query and runs it against `FakeSupabase`."""

    def __init__(self, db: "FakeSupabase", table: str) -> None:
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.filters: list[tuple[str, Any]] = []
        self.order_by: tuple[str, bool] | None = None
        self.limit_n: int | None = None
        self.values: Any = None

    def select(self, columns: str = "*") -> "FakeQuery":
        self.op = "select"
        self.columns = columns
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_by = (column, desc)
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def limit(self, n: int) -> "FakeQuery":
        self.limit_n = n
        return self

    def insert(self, rows: list[dict[str, Any]]) -> "FakeQuery":
        self.op = "insert"
        self.values = rows
        return self

    def update(self, values: dict[str, Any]) -> "FakeQuery":
        self.op = "update"
        self.values = values
        return self

    def delete(self) -> "FakeQuery":
        self.op = "delete"
        return self

    def _matches(self, row: dict[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self) -> SimpleNamespace:
        self.db.calls.append((self.op, self.table))
        if self.db.before_execute is not None:
            self.db.before_execute(self)
        failure = self.db.failures.get((self.op, self.table))
        if failure is not None:
            raise failure

        if self.table not in self.db.rows:
            raise PostgrestAPIError(
                {"message": f'relation "public.{self.table}" does not exist', "code": "42P01"}
            )
        rows = self.db.rows[self.table]

        if self.op == "select":
            if self.columns != "*":
                for column in self.columns.split(","):
                    if column.strip() not in self.db.columns[self.table]:
                        raise PostgrestAPIError(
                            {
                                "message": f"column {self.table}.{column} does not exist",
                                "code": "42703",
                            }
                        )
            data = [dict(r) for r in rows if self._matches(r)]
            if self.order_by:
                column, desc = self.order_by
                data.sort(key=lambda r: _null_last(r.get(column)), reverse=desc)
            if self.limit_n is not None:
                data = data[: self.limit_n]
            return SimpleNamespace(data=data)

        if self.op == "insert":
            created = []
            for payload in self.values:
                row = {"id": self.db.next_id(), **payload}
                rows.append(row)
                created.append(dict(row))
            return SimpleNamespace(data=created)

        if self.op == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.values)
                    updated.append(dict(row))
            return SimpleNamespace(data=updated)

        remaining = [r for r in rows if not self._matches(r)]
        removed = [r for r in rows if self._matches(r)]
        self.db.rows[self.table] = remaining
        return SimpleNamespace(data=removed)


class FakeSubscription:
    def __init__(self, auth: "FakeAuth", callback: Callable[[str, Any], None]) -> None:
        self.auth = auth
        self.callback = callback

    def unsubscribe(self) -> None:
        if self.callback in self.auth.callbacks:
            self.auth.callbacks.remove(self.callback)


class FakeAuth:
    """Email/password auth that notifies subscribers like the real client."""

    def __init__(self) -> None:
        self.users: dict[str, str] = {}
        self.session: Any | None = None
        self.callbacks: list[Callable[[str, Any], None]] = []
        self.sign_out_error: Exception | None = None

    def _emit(self, event: str) -> None:
        for callback in list(self.callbacks):
            callback(event, self.session)

    def sign_up(self, credentials: dict[str, str]) -> SimpleNamespace:
        if credentials["email"] in self.users:
            raise FakeAuthError("User already registered")
        self.users[credentials["email"]] = credentials["password"]
        return SimpleNamespace(user=SimpleNamespace(email=credentials["email"]), session=None)

    def sign_in_with_password(self, credentials: dict[str, str]) -> SimpleNamespace:
        if self.users.get(credentials["email"]) != credentials["password"]:
            raise FakeAuthError("Invalid login credentials")
        user = SimpleNamespace(email=credentials["email"])
        self.session = SimpleNamespace(access_token=f"token-{credentials['email']}", user=user)
        self._emit("SIGNED_IN")
        return SimpleNamespace(user=user, session=self.session)

    def get_session(self) -> Any | None:
        return self.session

    def sign_out(self) -> None:
        self.session = None
        self._emit("SIGNED_OUT")
        if self.sign_out_error is not None:
            raise self.sign_out_error

    def on_auth_state_change(self, callback: Callable[[str, Any], None]) -> FakeSubscription:
        self.callbacks.append(callback)
        return FakeSubscription(self, callback)


class FakeSupabase:
    """In-memory tables plus auth. Failures are injected per (operation, table)."""

    def __init__(self) -> None:
        self.rows: dict[str, list[dict[str, Any]]] = {name: [] for name in TABLE_COLUMNS}
        self.columns = {name: set(cols) for name, cols in TABLE_COLUMNS.items()}
        self.failures: dict[tuple[str, str], Exception] = {}
        self.calls: list[tuple[str, str]] = []
        self.before_execute: Callable[[FakeQuery], None] | None = None
        self.auth = FakeAuth()
        self._ids = itertools.count(1)

    def next_id(self) -> str:
        return f"id-{next(self._ids)}"

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def seed(self, table: str, *rows: dict[str, Any]) -> list[dict[str, Any]]:
        seeded = [{"id": self.next_id(), **row} for row in rows]
        self.rows[table].extend(seeded)
        return seeded

    def fail(self, op: str, table: str, message: str = "permission denied") -> None:
        self.failures[(op, table)] = PostgrestAPIError({"message": message, "code": "42501"})

    def heal(self) -> None:
        self.failures.clear()


@pytest.fixture
def fake_client() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def gateway(fake_client: FakeSupabase) -> BackendGateway:
    return BackendGateway(fake_client)  # type: ignore[arg-type]


@pytest.fixture
def app_session(fake_client: FakeSupabase) -> AppSession:
    fake_client.auth.users["ana@petshop.com"] = "segredo123"
    return AppSession(fake_client)
