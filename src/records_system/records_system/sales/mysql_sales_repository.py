from __future__ import annotations

from typing import Any, Dict, Optional

from ..common.datetime_utils import Clock
from ..database.connection import DatabaseConnection
from ..database.mysql_store import MySQLEntityStore, MySQLTable
from .model import SalesRecord


def _row_to_sales_record(row: Dict[str, Any]) -> SalesRecord:
    # total is derived from price and quantity, so it has no column.
    return SalesRecord(
        sales_id=int(row["sales_id"]),
        product_name=row["product_name"],
        category=row["category"],
        price=int(row["price"]),
        quantity=int(row["quantity"]),
        sales_date=row["sales_date"],
        salesperson=row["salesperson"],
        region=row["region"],
        status=row["status"],
    )


SALES_TABLE: MySQLTable[SalesRecord] = MySQLTable(
    name="sales_data",
    id_column="sales_id",
    columns=(
        "sales_id",
        "product_name",
        "category",
        "price",
        "quantity",
        "sales_date",
        "salesperson",
        "region",
        "status",
    ),
    row_factory=_row_to_sales_record,
)


class MySQLSalesRepository(MySQLEntityStore[SalesRecord]):
    def __init__(self, conn_factory: DatabaseConnection, *, clock: Optional[Clock] = None):
        super().__init__(conn_factory, SALES_TABLE, clock=clock)
