from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError
from ..engine.aggregator import GroupTotal, group_totals
from ..engine.filters import top_by
from ..engine.service import RecordService
from ..engine.store import EntityStore
from ..stats.facade import SalesStatistics, summarize_sales
from .kind import SALES_KIND, TOTAL_DIMENSIONS
from .model import MonthlyTotal, NewSalesRecord, SalesRecord


class SalesService(RecordService[SalesRecord, NewSalesRecord]):
    """Use case: record sales and report revenue."""

    def __init__(self, sales: EntityStore[SalesRecord]):
        super().__init__(SALES_KIND, sales)

    def by_category(self, category: str) -> list[SalesRecord]:
        return self.filter(category=category)

    def by_region(self, region: str) -> list[SalesRecord]:
        return self.filter(region=region)

    def by_salesperson(self, salesperson: str) -> list[SalesRecord]:
        return self.filter(salesperson=salesperson)

    def by_status(self, status: str) -> list[SalesRecord]:
        return self.filter(status=status)

    def by_price_range(self, min_price: Optional[int], max_price: Optional[int]) -> list[SalesRecord]:
        return self.filter(min_price=min_price, max_price=max_price)

    def by_date_range(self, start_date: Optional[date], end_date: Optional[date]) -> list[SalesRecord]:
        return self.filter(start_date=start_date, end_date=end_date)

    def top(self, limit: int) -> list[SalesRecord]:
        """Largest transactions by total."""
        return top_by(self.list_all(), lambda r: r.total, int(limit))

    def group_totals(self, dimension: str) -> list[GroupTotal]:
        if dimension not in TOTAL_DIMENSIONS:
            raise ValidationError(f"Unknown sales total dimension: {dimension}")
        dim = SALES_KIND.dimension(dimension)
        return group_totals(self.list_all(), dim.key_function(today=self.today()), lambda r: r.total)

    def monthly_totals(self) -> list[MonthlyTotal]:
        totals: dict[tuple[int, int], int] = {}
        for r in self.list_all():
            key = (r.sales_date.year, r.sales_date.month)
            totals[key] = totals.get(key, 0) + r.total
        return [MonthlyTotal(year=y, month=m, total=t) for (y, m), t in sorted(totals.items(), reverse=True)]

    def statistics(self) -> SalesStatistics:
        return summarize_sales(self.list_all())
