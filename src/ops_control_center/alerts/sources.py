from typing import Protocol, runtime_checkable

from ops_control_center.domain import Alert, Severity
from ops_control_center.metrics.coerce import safe_string
from ops_control_center.store import Filter, MetricSourceShape, Row, RowQuery, SafeFetcher

DEFAULT_LIMIT = 5


@runtime_checkable
class AlertSource(Protocol):
    """Protocol for structured alert sources."""

    @property
    def name(self) -> str:
        ...

    async def fetch(self, fetcher: SafeFetcher) -> list[Alert]:
        ...


class FailureTableSource:
    """Recent rows of the structured failure table, reported as errors."""

    name: str = "failure_table"
    REASON_COLUMNS = ("reason", "error", "message", "last_error")

    def __init__(self, limit: int = DEFAULT_LIMIT) -> None:
        self._shapes = (
            MetricSourceShape(
                "event_failures",
                RowQuery.select("event,reason,error,message,created_at").newest_first().take(limit),
            ),
            MetricSourceShape(
                "automation_failures",
                RowQuery.select("event,status,last_error,created_at")
                .where(Filter.eq("status", "failed"))
                .newest_first()
                .take(limit),
            ),
        )

    async def fetch(self, fetcher: SafeFetcher) -> list[Alert]:
        _, rows = await fetcher.fetch_first(self._shapes)
        return [self.to_alert(row) for row in rows]

    @classmethod
    def to_alert(cls, row: Row) -> Alert:
        event = safe_string(row.get("event")) or "event"
        reason = next(
            (safe_string(row.get(c)) for c in cls.REASON_COLUMNS if safe_string(row.get(c))),
            "Unknown failure",
        )
        return Alert(
            message=f"[{event}] failed: {reason}",
            severity=Severity.ERROR,
            created_at=safe_string(row.get("created_at")) or None,
        )


class LogTableSource:
    """Recent warn/error rows of the leveled system log."""

    name: str = "log_table"

    def __init__(self, limit: int = DEFAULT_LIMIT) -> None:
        self._query = (
            RowQuery.select("level,message,created_at")
            .where(Filter.is_in("level", ("error", "warn")))
            .newest_first()
            .take(limit)
        )

    async def fetch(self, fetcher: SafeFetcher) -> list[Alert]:
        rows = await fetcher.fetch_rows("system_logs", self._query)
        return [self.to_alert(row) for row in rows]

    @staticmethod
    def to_alert(row: Row) -> Alert:
        severity = Severity.ERROR if safe_string(row.get("level")).lower() == "error" else Severity.WARN
        message = safe_string(row.get("message")) or "System log alert"
        return Alert(
            message=f"[{severity.value}] {message}",
            severity=severity,
            created_at=safe_string(row.get("created_at")) or None,
        )
