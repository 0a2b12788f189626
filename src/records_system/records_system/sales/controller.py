from __future__ import annotations

from typing import Any, Mapping

from flask import Flask, jsonify

from ..common.http import date_arg, int_arg, iso, json_body, pairs, payload_date, payload_int, payload_str, str_arg
from ..container import Container
from ..core.constants import DEFAULT_RECENT_LIMIT
from .model import NewSalesRecord, SalesRecord


def sales_to_payload(record: SalesRecord) -> dict[str, Any]:
    return {
        "id": record.sales_id,
        "productName": record.product_name,
        "category": record.category,
        "price": record.price,
        "quantity": record.quantity,
        "total": record.total,
        "salesDate": iso(record.sales_date),
        "salesperson": record.salesperson,
        "region": record.region,
        "status": record.status,
    }


def sales_from_payload(payload: Mapping[str, Any]) -> NewSalesRecord:
    # A client-supplied "total" is ignored; it is always price * quantity.
    return NewSalesRecord(
        product_name=payload_str(payload, "productName"),
        category=payload_str(payload, "category"),
        price=payload_int(payload, "price"),
        quantity=payload_int(payload, "quantity"),
        sales_date=payload_date(payload, "salesDate"),
        salesperson=payload_str(payload, "salesperson"),
        region=payload_str(payload, "region"),
        status=payload_str(payload, "status"),
    )


def register(app: Flask, container: Container) -> None:
    sales = container.sales_service

    def listing(rows):
        return jsonify([sales_to_payload(r) for r in rows])

    @app.route("/api/sales", methods=["GET"], endpoint="sales_list")
    def list_sales():
        return listing(sales.list_all())

    @app.route("/api/sales/<int:sales_id>", methods=["GET"], endpoint="sales_get")
    def get_sales(sales_id: int):
        return jsonify(sales_to_payload(sales.get(sales_id)))

    @app.route("/api/sales", methods=["POST"], endpoint="sales_create")
    def create_sales():
        record = sales.create(sales_from_payload(json_body()))
        return jsonify(sales_to_payload(record)), 201

    @app.route("/api/sales/<int:sales_id>", methods=["PUT"], endpoint="sales_update")
    def update_sales(sales_id: int):
        record = sales.update(sales_id, sales_from_payload(json_body()))
        return jsonify(sales_to_payload(record))

    @app.route("/api/sales/<int:sales_id>", methods=["DELETE"], endpoint="sales_delete")
    def delete_sales(sales_id: int):
        sales.delete(sales_id)
        return jsonify({"message": "Sales record deleted"})

    @app.route("/api/sales/category/<category>", methods=["GET"], endpoint="sales_by_category")
    def sales_by_category(category: str):
        return listing(sales.by_category(category))

    @app.route("/api/sales/region/<region>", methods=["GET"], endpoint="sales_by_region")
    def sales_by_region(region: str):
        return listing(sales.by_region(region))

    @app.route("/api/sales/salesperson/<salesperson>", methods=["GET"], endpoint="sales_by_salesperson")
    def sales_by_salesperson(salesperson: str):
        return listing(sales.by_salesperson(salesperson))

    @app.route("/api/sales/status/<status>", methods=["GET"], endpoint="sales_by_status")
    def sales_by_status(status: str):
        return listing(sales.by_status(status))

    @app.route("/api/sales/date-range", methods=["GET"], endpoint="sales_date_range")
    def sales_by_date_range():
        return listing(sales.by_date_range(date_arg("startDate", required=True), date_arg("endDate", required=True)))

    @app.route("/api/sales/search", methods=["GET"], endpoint="sales_search")
    def search_sales():
        return listing(sales.search(str_arg("productName", required=True)))

    @app.route("/api/sales/price-range", methods=["GET"], endpoint="sales_price_range")
    def sales_by_price_range():
        return listing(sales.by_price_range(int_arg("minPrice", required=True), int_arg("maxPrice", required=True)))

    @app.route("/api/sales/filter", methods=["GET"], endpoint="sales_filter")
    def filter_sales():
        return listing(
            sales.filter(
                product_name=str_arg("productName"),
                category=str_arg("category"),
                region=str_arg("region"),
                salesperson=str_arg("salesperson"),
                status=str_arg("status"),
                min_price=int_arg("minPrice"),
                max_price=int_arg("maxPrice"),
                start_date=date_arg("startDate"),
                end_date=date_arg("endDate"),
            )
        )

    @app.route("/api/sales/recent", methods=["GET"], endpoint="sales_recent")
    def recent_sales():
        return listing(sales.recent(int_arg("limit", default=DEFAULT_RECENT_LIMIT)))

    @app.route("/api/sales/top", methods=["GET"], endpoint="sales_top")
    def top_sales():
        return listing(sales.top(int_arg("limit", default=DEFAULT_RECENT_LIMIT)))

    @app.route("/api/sales/statistics/category", methods=["GET"], endpoint="sales_stats_category")
    def totals_by_category():
        return jsonify(pairs(sales.group_totals("category")))

    @app.route("/api/sales/statistics/region", methods=["GET"], endpoint="sales_stats_region")
    def totals_by_region():
        return jsonify(pairs(sales.group_totals("region")))

    @app.route("/api/sales/statistics/salesperson", methods=["GET"], endpoint="sales_stats_salesperson")
    def totals_by_salesperson():
        return jsonify(pairs(sales.group_totals("salesperson")))

    @app.route("/api/sales/statistics/count/<dimension>", methods=["GET"], endpoint="sales_stats_count")
    def counts_by_dimension(dimension: str):
        return jsonify(pairs(sales.group_counts(dimension)))

    @app.route("/api/sales/statistics/monthly", methods=["GET"], endpoint="sales_stats_monthly")
    def monthly_totals():
        return jsonify([[m.year, m.month, m.total] for m in sales.monthly_totals()])

    @app.route("/api/sales/statistics/overall", methods=["GET"], endpoint="sales_stats_overall")
    def sales_overall():
        s = sales.statistics()
        return jsonify(
            {
                "totalCount": s.total_count,
                "totalSales": s.total_sales,
                "averageSales": s.average_sales,
                "maxSales": s.max_sales,
                "minSales": s.min_sales,
            }
        )
