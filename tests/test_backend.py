"""Tests for the table gateway and the schema probe."""

from types import SimpleNamespace

import httpx
import pytest

from groomdesk.config.settings import Settings
from groomdesk.core.backend import BackendError, BackendGateway, create_backend_client


def test_fetch_all_orders_rows(fake_client, gateway: BackendGateway) -> None:
    fake_client.seed("products", {"name": "B"}, {"name": "A"}, {"name": "C"})

    assert [r["name"] for r in gateway.fetch_all("products", order_by="name")] == ["A", "B", "C"]
    assert [r["name"] for r in gateway.fetch_all("products", "name", ascending=False)] == [
        "C",
        "B",
        "A",
    ]


def test_insert_returns_created_row(fake_client, gateway: BackendGateway) -> None:
    row = gateway.insert("clients", {"name": "Ana"})
    assert row["id"]
    assert fake_client.rows["clients"] == [row]


def test_insert_without_returned_row_is_an_error() -> None:
    class EmptyInsert:
        def insert(self, rows):
            return self

        def execute(self):
            return SimpleNamespace(data=[])

    gateway = BackendGateway(SimpleNamespace(table=lambda name: EmptyInsert()))  # type: ignore[arg-type]
    with pytest.raises(BackendError, match="no row"):
        gateway.insert("clients", {"name": "Ana"})


def test_backend_rejection_carries_message_and_code(fake_client, gateway) -> None:
    fake_client.fail("update", "products", "new row violates check constraint")
    with pytest.raises(BackendError) as excinfo:
        gateway.update("products", "id-1", {"quantity": -1})

    assert excinfo.value.action == "update products"
    assert excinfo.value.message == "new row violates check constraint"
    assert excinfo.value.code == "42501"


def test_transport_error_becomes_backend_error(fake_client, gateway) -> None:
    fake_client.failures[("delete", "clients")] = httpx.ConnectError("Connection refused")
    with pytest.raises(BackendError, match="Connection refused"):
        gateway.delete("clients", "id-1")


def test_probe_passes_on_current_schema(gateway: BackendGateway) -> None:
    status = gateway.probe_schema()
    assert status.ok
    assert status.detail is None


def test_probe_fails_on_missing_column(fake_client, gateway: BackendGateway) -> None:
    fake_client.columns["clients"].discard("pet_name")
    status = gateway.probe_schema("clients", "pet_name")
    assert not status.ok
    assert "pet_name" in status.detail


def test_probe_fails_on_missing_table(fake_client, gateway: BackendGateway) -> None:
    del fake_client.rows["clients"]
    status = gateway.probe_schema()
    assert not status.ok
    assert "does not exist" in status.detail


def test_probe_treats_transport_error_as_outdated(fake_client, gateway) -> None:
    fake_client.failures[("select", "clients")] = httpx.ConnectTimeout("timed out")
    assert not gateway.probe_schema().ok


def test_create_backend_client_requires_credentials() -> None:
    settings = Settings(_env_file=None, supabase_url="", supabase_anon_key="")
    with pytest.raises(ValueError, match="SUPABASE_URL"):
        create_backend_client(settings)
