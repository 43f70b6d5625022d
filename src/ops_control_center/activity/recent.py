from ops_control_center.domain import BookingSummary
from ops_control_center.metrics.coerce import safe_key, safe_string
from ops_control_center.store import Filter, Row, RowQuery, SafeFetcher

BOOKING_COLUMNS = "id,booking_code,customer_id,lifecycle_status,payment_status,created_at"
CUSTOMER_COLUMNS = "id,first_name,last_name,email"
PLACEHOLDER_BOOKING_ID = "—"


def format_customer_name(customer: Row | None) -> str | None:
    """Full name, falling back to email, falling back to None."""
    if customer is None:
        return None
    first = safe_string(customer.get("first_name"))
    last = safe_string(customer.get("last_name"))
    full = " ".join(part for part in (first, last) if part)
    return full or safe_string(customer.get("email")) or None


class RecentActivityResolver:
    """Newest bookings joined in memory with their customers' display names.

    Customers are fetched in one batched ``id IN (...)`` lookup. A booking
    whose customer cannot be found is kept with a null name.
    """

    def __init__(self, fetcher: SafeFetcher, limit: int = 5) -> None:
        self._fetcher = fetcher
        self._limit = limit

    async def resolve(self) -> list[BookingSummary]:
        rows = await self._fetcher.fetch_rows(
            "bookings", RowQuery.select(BOOKING_COLUMNS).newest_first().take(self._limit)
        )
        if not rows:
            return []

        customers = await self._fetch_customers(rows)
        return [self._summarize(row, customers) for row in rows[: self._limit]]

    async def _fetch_customers(self, rows: list[Row]) -> dict[str, Row]:
        customer_ids = list(
            dict.fromkeys(cid for row in rows if (cid := safe_key(row.get("customer_id"))))
        )
        if not customer_ids:
            return {}

        customers = await self._fetcher.fetch_rows(
            "customers",
            RowQuery.select(CUSTOMER_COLUMNS).where(Filter.is_in("id", customer_ids)),
        )
        return {
            safe_key(customer.get("id")): customer
            for customer in customers
            if safe_key(customer.get("id"))
        }

    @staticmethod
    def _summarize(row: Row, customers: dict[str, Row]) -> BookingSummary:
        booking_id = (
            safe_key(row.get("booking_code"))
            or safe_key(row.get("id"))
            or PLACEHOLDER_BOOKING_ID
        )
        status = (
            safe_string(row.get("lifecycle_status")) or safe_string(row.get("payment_status")) or None
        )
        created_at = row.get("created_at")
        return BookingSummary(
            booking_id=booking_id,
            customer_name=format_customer_name(customers.get(safe_key(row.get("customer_id")))),
            status=status,
            created_at=created_at if isinstance(created_at, str) else None,
        )
