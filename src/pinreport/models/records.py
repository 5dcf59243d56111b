"""Pydantic schemas for the transactional records a report consumes.

Records arrive from the sales, repair, cash book and production modules.
Field names accept both snake_case and the camelCase used by the front end.
Date fields are kept as received and parsed by the record filter, so a
single malformed date never rejects a whole request.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

ZERO = Decimal("0")

RawDate = str | datetime | None


class RecordModel(BaseModel):
    """Base for all input records: camelCase aliases, unknown fields ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


def _none_as_zero(value: Any) -> Any:
    return ZERO if value is None else value


def _none_as_empty(value: Any) -> Any:
    return [] if value is None else value


class Contact(RecordModel):
    id: str | None = None
    name: str = ""
    phone: str | None = None


class SaleItem(RecordModel):
    """A line of a sale; cost_price is the cost snapshot at sale time."""

    product_id: str | None = None
    name: str = ""
    sku: str | None = None
    quantity: Decimal = ZERO
    selling_price: Decimal = ZERO
    cost_price: Decimal = ZERO

    @field_validator("quantity", "selling_price", "cost_price", mode="before")
    @classmethod
    def default_missing_amounts(cls, v: Any) -> Any:
        return _none_as_zero(v)

    @property
    def line_cost(self) -> Decimal:
        return self.cost_price * self.quantity


class Sale(RecordModel):
    id: str
    date: RawDate = None
    code: str | None = None
    total: Decimal = ZERO
    items: list[SaleItem] = Field(default_factory=list)
    customer: Contact | None = None
    payment_method: str | None = None

    @field_validator("total", mode="before")
    @classmethod
    def default_missing_total(cls, v: Any) -> Any:
        return _none_as_zero(v)

    @field_validator("items", mode="before")
    @classmethod
    def default_missing_items(cls, v: Any) -> Any:
        return _none_as_empty(v)

    @property
    def cost(self) -> Decimal:
        """Cost of goods sold for this sale."""
        return sum((item.line_cost for item in self.items), ZERO)


class RepairMaterial(RecordModel):
    material_id: str | None = None
    material_name: str = ""
    price: Decimal = ZERO
    quantity: Decimal = ZERO

    @field_validator("price", "quantity", mode="before")
    @classmethod
    def default_missing_amounts(cls, v: Any) -> Any:
        return _none_as_zero(v)


class RepairOrder(RecordModel):
    id: str
    creation_date: RawDate = None
    customer_name: str = ""
    device_name: str = ""
    payment_status: str = "unpaid"
    total: Decimal = ZERO
    labor_cost: Decimal = ZERO
    materials_used: list[RepairMaterial] = Field(default_factory=list)

    @field_validator("total", "labor_cost", mode="before")
    @classmethod
    def default_missing_amounts(cls, v: Any) -> Any:
        return _none_as_zero(v)

    @field_validator("materials_used", mode="before")
    @classmethod
    def default_missing_materials(cls, v: Any) -> Any:
        return _none_as_empty(v)

    @property
    def material_cost(self) -> Decimal:
        return sum((m.price * m.quantity for m in self.materials_used), ZERO)


class CashTransaction(RecordModel):
    """A cash book entry. amount may be signed; reports use its magnitude."""

    id: str
    date: RawDate = None
    type: str
    category: str | None = None
    amount: Decimal = ZERO
    contact: Contact | None = None
    notes: str = ""

    @field_validator("amount", mode="before")
    @classmethod
    def default_missing_amount(cls, v: Any) -> Any:
        return _none_as_zero(v)

    @field_validator("notes", mode="before")
    @classmethod
    def default_missing_notes(cls, v: Any) -> Any:
        return "" if v is None else v


class ProductionOrder(RecordModel):
    id: str
    creation_date: RawDate = None
    product_name: str = ""
    quantity_produced: Decimal = ZERO
    status: str = ""
    total_cost: Decimal = ZERO

    @field_validator("quantity_produced", "total_cost", mode="before")
    @classmethod
    def default_missing_amounts(cls, v: Any) -> Any:
        return _none_as_zero(v)


class Material(RecordModel):
    id: str
    name: str = ""
    purchase_price: Decimal = ZERO
    stock: Decimal = ZERO

    @field_validator("purchase_price", "stock", mode="before")
    @classmethod
    def default_missing_amounts(cls, v: Any) -> Any:
        return _none_as_zero(v)


class Product(RecordModel):
    id: str
    name: str = ""
    cost_price: Decimal = ZERO
    stock: Decimal = ZERO

    @field_validator("cost_price", "stock", mode="before")
    @classmethod
    def default_missing_amounts(cls, v: Any) -> Any:
        return _none_as_zero(v)
