from ops_control_center.metrics import shapes
from ops_control_center.metrics.base import CalculationContext
from ops_control_center.metrics.coerce import safe_string
from ops_control_center.store import SafeFetcher
from ops_control_center.window import is_recent_within

URL_COLUMNS = ("public_url", "url", "file_url")
FILE_REF_COLUMNS = ("storage_path", "file_path")
UNDELIVERED_STATUSES = frozenset({"pending", "failed"})


def _first_present(row: dict, columns: tuple[str, ...]) -> str:
    for column in columns:
        if row.get(column) is not None:
            return safe_string(row[column])
    return ""


def is_missing_document(row: dict) -> bool:
    """A document is missing if it has no delivered file or is still pending/failed."""
    url = _first_present(row, URL_COLUMNS)
    file_ref = _first_present(row, FILE_REF_COLUMNS)
    status = safe_string(row.get("status")).lower()
    return not url or not file_ref or status in UNDELIVERED_STATUSES


class MissingDocumentsCalculator:
    name: str = "missing_documents"
    trailing_days: int = 30

    async def calculate(self, fetcher: SafeFetcher, context: CalculationContext) -> int:
        _, rows = await fetcher.fetch_first(shapes.MISSING_DOCUMENTS)
        return sum(
            1
            for row in rows
            if is_recent_within(row.get("created_at"), self.trailing_days, context.now)
            and is_missing_document(row)
        )
