from ops_control_center.metrics import shapes
from ops_control_center.metrics.base import CalculationContext
from ops_control_center.metrics.coerce import safe_string
from ops_control_center.store import SafeFetcher
from ops_control_center.window import is_recent_within


class OpenSupportRequestsCalculator:
    """Counts open support requests from the last 30 days.

    The first support table that answers the query at all is authoritative,
    so an existing but empty table yields a genuine zero.
    """

    name: str = "open_support_requests"
    trailing_days: int = 30

    async def calculate(self, fetcher: SafeFetcher, context: CalculationContext) -> int:
        _, rows = await fetcher.fetch_first_successful(shapes.OPEN_SUPPORT_REQUESTS)
        return sum(
            1
            for row in rows
            if safe_string(row.get("status")).lower() == "open"
            and is_recent_within(row.get("created_at"), self.trailing_days, context.now)
        )
