import asyncio
import logging
from datetime import UTC, datetime

from ops_control_center.activity import RecentActivityResolver
from ops_control_center.alerts import AlertSynthesizer
from ops_control_center.config import Settings, get_settings
from ops_control_center.core.exceptions import AggregationError
from ops_control_center.domain import MetricValues, Snapshot
from ops_control_center.heartbeat import HeartbeatDetector
from ops_control_center.metrics import CalculationContext, CalculatorRegistry, default_registry
from ops_control_center.store import NotConfiguredError, RowStore, SafeFetcher, SupabaseRestClient
from ops_control_center.window import resolve_day_window

logger = logging.getLogger(__name__)


class SnapshotOrchestrator:
    """Fans out every data source concurrently and assembles one Snapshot.

    Calculators, heartbeat checks and the recent-activity lookup are
    independent and individually failure-isolated; only the alert synthesizer
    waits for their combined results.
    """

    def __init__(
        self,
        fetcher: SafeFetcher,
        settings: Settings,
        registry: CalculatorRegistry | None = None,
        now: datetime | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._settings = settings
        self._registry = registry or default_registry()
        self._now = now

    async def build(self) -> Snapshot:
        now = self._now or datetime.now(UTC)
        day_window = resolve_day_window(now)
        context = CalculationContext(now=now, day_window=day_window)
        detector = HeartbeatDetector(self._fetcher, now=now)

        values, recent_bookings, *heartbeats = await asyncio.gather(
            self._registry.calculate_all(self._fetcher, context),
            RecentActivityResolver(self._fetcher).resolve(),
            *(
                detector.get_status(kind, minutes)
                for kind, minutes in self._settings.heartbeat_thresholds.items()
            ),
        )
        metrics = MetricValues(**values)

        synthesizer = AlertSynthesizer(
            self._fetcher,
            pending_payments_threshold=self._settings.pending_payments_alert_threshold,
            active_bookings_threshold=self._settings.active_bookings_alert_threshold,
        )
        alerts = await synthesizer.synthesize(metrics, heartbeats)

        return Snapshot.from_parts(
            metrics,
            recent_bookings=tuple(recent_bookings),
            alerts=tuple(alerts),
            heartbeats=tuple(heartbeats),
            day_window=None if self._settings.is_production else day_window,
        )


async def load_snapshot(
    settings: Settings | None = None,
    store: RowStore | None = None,
    now: datetime | None = None,
) -> Snapshot:
    """Compute a fresh Snapshot.

    Returns the all-zero Snapshot when the store is not configured. Any other
    failure is raised as AggregationError rather than returning a partial
    snapshot.
    """
    settings = settings or get_settings()
    try:
        if store is not None:
            return await _build(store, settings, now)
        async with SupabaseRestClient.from_settings(settings) as client:
            return await _build(client, settings, now)
    except NotConfiguredError:
        logger.warning("Supabase is not configured; returning empty control center snapshot")
        day_window = None if settings.is_production else resolve_day_window(now)
        return Snapshot.empty(day_window=day_window)
    except Exception as exc:
        logger.exception("Failed to load control center metrics")
        raise AggregationError() from exc


async def _build(store: RowStore, settings: Settings, now: datetime | None) -> Snapshot:
    fetcher = SafeFetcher(store, timeout=settings.fetch_timeout_sec)
    return await SnapshotOrchestrator(fetcher, settings, now=now).build()
