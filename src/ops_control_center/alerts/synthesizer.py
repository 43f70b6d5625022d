import logging
from collections.abc import Sequence

from ops_control_center.alerts.patterns import (
    HEARTBEAT_CATEGORIES,
    AlertCategory,
    is_represented,
)
from ops_control_center.alerts.sources import AlertSource, FailureTableSource, LogTableSource
from ops_control_center.domain import Alert, HeartbeatKind, HeartbeatStatus, MetricValues, Severity
from ops_control_center.store import SafeFetcher

logger = logging.getLogger(__name__)

HEARTBEAT_LABELS: dict[HeartbeatKind, str] = {
    HeartbeatKind.CRON_RETRY: "Cron retry",
    HeartbeatKind.PAYMENT_WEBHOOK: "Payment webhook",
    HeartbeatKind.SUPPLIER_SYNC: "Supplier sync",
}

CategorizedAlert = tuple[AlertCategory, Alert]


def threshold_alerts(
    metrics: MetricValues,
    heartbeats: Sequence[HeartbeatStatus] = (),
    pending_payments_threshold: int = 10,
    active_bookings_threshold: int = 50,
) -> list[CategorizedAlert]:
    """Alerts derived purely from metric thresholds and heartbeat staleness."""
    alerts: list[CategorizedAlert] = []
    if metrics.pending_payments > pending_payments_threshold:
        alerts.append((
            AlertCategory.PENDING_PAYMENTS,
            Alert(
                f"{metrics.pending_payments} pending payments require attention",
                Severity.INFO,
            ),
        ))
    if metrics.active_bookings > active_bookings_threshold:
        alerts.append((
            AlertCategory.ACTIVE_BOOKING_LOAD,
            Alert(f"High active booking load ({metrics.active_bookings} active bookings)"),
        ))
    if metrics.missing_documents > 0:
        alerts.append((
            AlertCategory.MISSING_DOCUMENTS,
            Alert(f"Some booking documents are missing or pending ({metrics.missing_documents})"),
        ))
    if metrics.open_support_requests > 0:
        alerts.append((
            AlertCategory.SUPPORT_BACKLOG,
            Alert(f"Open support requests need attention ({metrics.open_support_requests})"),
        ))
    if metrics.supplier_pending_confirmations > 0:
        alerts.append((
            AlertCategory.SUPPLIER_PENDING,
            Alert(
                "Supplier confirmations are pending "
                f"({metrics.supplier_pending_confirmations} bookings)"
            ),
        ))
    if metrics.failed_automations_24h > 0:
        alerts.append((
            AlertCategory.AUTOMATION_FAILURES,
            Alert(
                "Automation failures detected in the last 24 hours "
                f"({metrics.failed_automations_24h})",
                Severity.ERROR,
            ),
        ))
    for status in heartbeats:
        if status.is_stale:
            alerts.append((
                HEARTBEAT_CATEGORIES[status.kind],
                Alert(_heartbeat_message(status), Severity.ERROR),
            ))
    return alerts


def _heartbeat_message(status: HeartbeatStatus) -> str:
    label = HEARTBEAT_LABELS.get(status.kind, status.kind.value)
    age = status.age_minutes
    if age is None:
        return f"{label} heartbeat is stale: no heartbeat recorded"
    return (
        f"{label} heartbeat is stale: last seen {int(age)} minutes ago "
        f"(threshold {status.stale_threshold_minutes})"
    )


def merge_alerts(existing: Sequence[Alert], derived: Sequence[CategorizedAlert]) -> list[Alert]:
    """Append each derived alert whose category is not yet represented."""
    merged = list(existing)
    for category, alert in derived:
        if is_represented(category, merged):
            logger.debug("Suppressing %s alert, already represented", category.value)
            continue
        merged.append(alert)
    return merged


class AlertSynthesizer:
    """Combines structured alert sources with threshold-derived alerts.

    Sources are consulted in priority order and the first one returning any
    alerts is used. Threshold alerts are then appended unless a matching
    category is already present. Source order is preserved; no severity sort.
    """

    def __init__(
        self,
        fetcher: SafeFetcher,
        sources: Sequence[AlertSource] | None = None,
        pending_payments_threshold: int = 10,
        active_bookings_threshold: int = 50,
    ) -> None:
        self._fetcher = fetcher
        if sources is None:
            sources = (FailureTableSource(), LogTableSource())
        self._sources = tuple(sources)
        self._pending_payments_threshold = pending_payments_threshold
        self._active_bookings_threshold = active_bookings_threshold

    async def structured_alerts(self) -> list[Alert]:
        for source in self._sources:
            alerts = await source.fetch(self._fetcher)
            if alerts:
                logger.debug("Using %d alerts from %s", len(alerts), source.name)
                return alerts
        return []

    async def synthesize(
        self, metrics: MetricValues, heartbeats: Sequence[HeartbeatStatus] = ()
    ) -> list[Alert]:
        derived = threshold_alerts(
            metrics,
            heartbeats,
            pending_payments_threshold=self._pending_payments_threshold,
            active_bookings_threshold=self._active_bookings_threshold,
        )
        return merge_alerts(await self.structured_alerts(), derived)
