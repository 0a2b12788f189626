from __future__ import annotations

from ..engine.aggregator import Dimension
from ..engine.filters import at_least, at_most, contains, equals
from ..engine.kind import EntityKind
from .model import NewSalesRecord, SalesRecord, materialize_sales_record, validate_sales_record

SALES_KIND: EntityKind[SalesRecord, NewSalesRecord] = EntityKind(
    name="sales record",
    id_field="sales_id",
    materialize=materialize_sales_record,
    validate=validate_sales_record,
    criteria={
        "product_name": contains("product_name"),
        "category": equals("category"),
        "region": equals("region"),
        "salesperson": equals("salesperson"),
        "status": equals("status"),
        "min_price": at_least("price"),
        "max_price": at_most("price"),
        "start_date": at_least("sales_date"),
        "end_date": at_most("sales_date"),
    },
    search_criterion="product_name",
    dimensions={
        "category": Dimension("category", "category"),
        "region": Dimension("region", "region"),
        "salesperson": Dimension("salesperson", "salesperson"),
        "status": Dimension("status", "status"),
    },
    recent_key=lambda r: r.sales_date,
    timestamped=False,
)

# Dimensions that also support per-key revenue totals.
TOTAL_DIMENSIONS = ("category", "region", "salesperson")
