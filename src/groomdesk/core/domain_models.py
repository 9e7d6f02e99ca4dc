from datetime import datetime, tzinfo
from enum import Enum
from typing import Any

import polars as pl
from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Constants & Schemas ---

# Polars schema for the in-memory weekly aggregation.
# Dates are naive timestamps in the business time zone.
APPOINTMENT_FRAME_SCHEMA = {
    "id": pl.Utf8,
    "date": pl.Datetime("us"),
    "price": pl.Float64,
    "is_paid": pl.Boolean,
}


# --- Enums ---


class ViewState(str, Enum):
    """Screens reachable from the navigation bar."""

    APPOINTMENTS = "appointments"
    CLIENTS = "clients"
    STOCK = "stock"
    FINANCE = "finance"
    CALCULATOR = "calculator"


class Table(str, Enum):
    """Remote tables used by the application."""

    CLIENTS = "clients"
    PRODUCTS = "products"
    APPOINTMENTS = "appointments"


# --- Helpers ---


def parse_price(value: Any) -> float:
    """Parse a form price. Blank or unparseable input counts as zero."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise ValueError("Price must be a number")
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip().replace(",", ".")
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def to_local_naive(moment: datetime, tz: tzinfo) -> datetime:
    """Convert an aware timestamp to naive local time. Naive input is returned as-is."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz).replace(tzinfo=None)


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


# --- Domain Models ---


class Client(BaseModel):
    """A row of the `clients` table."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    phone: str | None = None
    pet_name: str | None = None
    notes: str | None = None


class Product(BaseModel):
    """A row of the `products` table."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    quantity: int = 0
    price: float = 0.0

    @field_validator("quantity", mode="before")
    @classmethod
    def clamp_quantity(cls, v: Any) -> int:
        """Stock never goes below zero."""
        return max(0, int(v or 0))

    @field_validator("price", mode="before")
    @classmethod
    def default_price(cls, v: Any) -> float:
        return parse_price(v)


class Appointment(BaseModel):
    """
    A row of the `appointments` table.

    `client_name` and `pet_name` are denormalized free text. They are kept as
    typed on the form and never reconciled with the `clients` table, even when
    `client_id` points to a registered client.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    client_id: str | None = None
    client_name: str = ""
    pet_name: str = ""
    service: str = ""
    price: float = 0.0
    date: datetime
    is_paid: bool = False

    @field_validator("client_name", "pet_name", "service", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        return v or ""

    @field_validator("price", mode="before")
    @classmethod
    def default_price(cls, v: Any) -> float:
        return parse_price(v)

    @field_validator("is_paid", mode="before")
    @classmethod
    def default_paid(cls, v: Any) -> bool:
        return bool(v)

    def local_date(self, tz: tzinfo) -> datetime:
        return to_local_naive(self.date, tz)


# --- Form Drafts ---


class ClientDraft(BaseModel):
    """Validated payload of the new-client form."""

    name: str = Field(min_length=1)
    phone: str | None = None
    pet_name: str | None = None
    notes: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> str:
        return (v or "").strip()

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "phone": _blank_to_none(self.phone),
            "pet_name": _blank_to_none(self.pet_name),
            "notes": _blank_to_none(self.notes),
        }


class ProductDraft(BaseModel):
    """Validated payload of the new-product form."""

    name: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=0)
    price: float = Field(default=0.0, ge=0)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> str:
        return (v or "").strip()

    @field_validator("price", mode="before")
    @classmethod
    def parse_form_price(cls, v: Any) -> float:
        return parse_price(v)

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "quantity": self.quantity, "price": self.price}


class AppointmentDraft(BaseModel):
    """
    Validated payload of the new-appointment form.

    Owner and pet names are required. `date` should be time zone aware;
    naive values are stored as given and interpreted by the backend.
    """

    client_id: str | None = None
    client_name: str = Field(min_length=1)
    pet_name: str = Field(min_length=1)
    service: str = Field(min_length=1)
    price: float = Field(default=0.0, ge=0)
    date: datetime

    @field_validator("client_name", "pet_name", "service", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> str:
        return (v or "").strip()

    @field_validator("price", mode="before")
    @classmethod
    def parse_form_price(cls, v: Any) -> float:
        return parse_price(v)

    def to_payload(self) -> dict[str, Any]:
        return {
            "client_id": self.client_id,
            "client_name": self.client_name,
            "pet_name": self.pet_name,
            "service": self.service,
            "price": self.price,
            "date": self.date.isoformat(),
            "is_paid": False,
        }
