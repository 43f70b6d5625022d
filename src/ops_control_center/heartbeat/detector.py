import logging
from datetime import UTC, datetime

from ops_control_center.domain import HeartbeatKind, HeartbeatStatus
from ops_control_center.metrics.coerce import safe_string
from ops_control_center.store import Filter, RowQuery, SafeFetcher
from ops_control_center.window import parse_timestamp

logger = logging.getLogger(__name__)

HEARTBEAT_TABLE = "system_heartbeats"
EVENT_LOG_TABLE = "system_logs"
LOG_SCAN_LIMIT = 50


class HeartbeatDetector:
    """Finds the latest heartbeat of a background job and judges its staleness.

    Lookup order:
    1. the dedicated heartbeat table, newest row for the kind
    2. the event log, filtered to ``event = heartbeat`` and ``message = kind``
    3. the newest event-log rows scanned in memory, for logs whose event
       column cannot be filtered server-side

    A missing or unparseable timestamp always counts as stale.
    """

    def __init__(self, fetcher: SafeFetcher, now: datetime | None = None) -> None:
        self._fetcher = fetcher
        self._now = now

    async def latest_seen(self, kind: HeartbeatKind) -> str | None:
        rows = await self._fetcher.fetch_rows(
            HEARTBEAT_TABLE,
            RowQuery.select("kind,created_at")
            .where(Filter.eq("kind", kind.value))
            .newest_first()
            .take(1),
        )
        created_at = safe_string(rows[0].get("created_at")) if rows else ""
        if created_at:
            return created_at

        rows = await self._fetcher.fetch_rows(
            EVENT_LOG_TABLE,
            RowQuery.select("created_at,event,message")
            .where(Filter.eq("event", "heartbeat"), Filter.eq("message", kind.value))
            .newest_first()
            .take(1),
        )
        created_at = safe_string(rows[0].get("created_at")) if rows else ""
        if created_at:
            return created_at

        rows = await self._fetcher.fetch_rows(
            EVENT_LOG_TABLE,
            RowQuery.select("created_at,level,event,message").newest_first().take(LOG_SCAN_LIMIT),
        )
        for row in rows:
            if (
                safe_string(row.get("event")).lower() == "heartbeat"
                and safe_string(row.get("message")) == kind.value
            ):
                created_at = safe_string(row.get("created_at"))
                if created_at:
                    return created_at
        return None

    async def get_status(self, kind: HeartbeatKind, threshold_minutes: int) -> HeartbeatStatus:
        checked_at = self._now or datetime.now(UTC)
        status = HeartbeatStatus(
            kind=kind,
            stale_threshold_minutes=threshold_minutes,
            last_seen_at=parse_timestamp(await self.latest_seen(kind)),
            checked_at=checked_at,
        )
        if status.is_stale:
            logger.debug("Heartbeat %s is %s", kind.value, status.freshness)
        return status
