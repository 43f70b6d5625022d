from decimal import Decimal

from ops_control_center.metrics import shapes
from ops_control_center.metrics.base import CalculationContext
from ops_control_center.metrics.coerce import safe_string, sum_amounts
from ops_control_center.store import Filter, MetricSourceShape, SafeFetcher
from ops_control_center.window import parse_timestamp, to_iso, trailing_since


class RevenueTodayCalculator:
    """Sums paid or captured payment amounts inside today's civil-day window."""

    name: str = "revenue_today"

    async def calculate(self, fetcher: SafeFetcher, context: CalculationContext) -> Decimal:
        window = context.day_window
        candidates = [
            MetricSourceShape(
                shape.table,
                shape.query.where(
                    Filter.gte("created_at", to_iso(window.start_utc)),
                    Filter.lte("created_at", to_iso(window.end_utc)),
                ),
            )
            for shape in shapes.REVENUE_TODAY
        ]
        _, rows = await fetcher.fetch_first(candidates)
        return sum_amounts([row for row in rows if self._counts(row, context)])

    @staticmethod
    def _counts(row: dict, context: CalculationContext) -> bool:
        if safe_string(row.get("status")).lower() not in shapes.REVENUE_STATUSES:
            return False
        # The store already applied the window; only reject rows provably outside it.
        created_at = parse_timestamp(row.get("created_at"))
        return created_at is None or context.day_window.contains(created_at)


class RefundLiabilityCalculator:
    """Sums open refund amounts from the last 30 days.

    The first refund table holding rows wins; tables are never summed
    together, so a transient copy during a migration is not counted twice.
    """

    name: str = "refund_liability"
    trailing_days: int = 30

    async def calculate(self, fetcher: SafeFetcher, context: CalculationContext) -> Decimal:
        since = trailing_since(context.now, days=self.trailing_days)
        candidates = [
            MetricSourceShape(shape.table, shape.query.where(Filter.gte("created_at", since)))
            for shape in shapes.REFUND_LIABILITY
        ]
        _, rows = await fetcher.fetch_first(candidates)
        return sum_amounts(rows)
