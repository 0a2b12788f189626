from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.validators import (
    require_max_length,
    require_non_empty,
    require_not_future,
    require_present,
    require_range,
)
from ..core.constants import CATEGORY_MAX, PRODUCT_NAME_MAX, REGION_MAX, SALES_STATUS_MAX, SALESPERSON_MAX


@dataclass(frozen=True)
class SalesRecord:
    """Domain entity: one sales transaction.

    ``total`` is derived on every access and never stored.
    """

    sales_id: int
    product_name: str
    category: str
    price: int
    quantity: int
    sales_date: date
    salesperson: str
    region: str
    status: str

    @property
    def total(self) -> int:
        return self.price * self.quantity


@dataclass(frozen=True)
class NewSalesRecord:
    product_name: str
    category: str
    price: int
    quantity: int
    sales_date: date
    salesperson: str
    region: str
    status: str


@dataclass(frozen=True)
class MonthlyTotal:
    year: int
    month: int
    total: int


def validate_sales_record(draft: NewSalesRecord, today: date) -> None:
    for field_name, max_len in (
        ("product_name", PRODUCT_NAME_MAX),
        ("category", CATEGORY_MAX),
        ("salesperson", SALESPERSON_MAX),
        ("region", REGION_MAX),
        ("status", SALES_STATUS_MAX),
    ):
        value = getattr(draft, field_name)
        require_non_empty(value, field_name)
        require_max_length(value, field_name, max_len)

    require_present(draft.price, "price")
    require_range(draft.price, "price", minimum=0)
    require_present(draft.quantity, "quantity")
    require_range(draft.quantity, "quantity", minimum=1)
    require_present(draft.sales_date, "sales_date")
    require_not_future(draft.sales_date, "sales_date", today=today)


def materialize_sales_record(
    draft: NewSalesRecord,
    *,
    entity_id: int,
    created_at: Optional[datetime] = None,
    updated_at: Optional[datetime] = None,
) -> SalesRecord:
    return SalesRecord(
        sales_id=int(entity_id),
        product_name=draft.product_name,
        category=draft.category,
        price=draft.price,
        quantity=draft.quantity,
        sales_date=draft.sales_date,
        salesperson=draft.salesperson,
        region=draft.region,
        status=draft.status,
    )
