"""Core domain models for the operational control center."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import StrEnum


class Severity(StrEnum):
    """Alert severity as rendered by the dashboard."""

    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class HeartbeatKind(StrEnum):
    """Background loops that emit heartbeats."""

    CRON_RETRY = "cron_retry"
    PAYMENT_WEBHOOK = "payment_webhook"
    SUPPLIER_SYNC = "supplier_sync"


@dataclass(frozen=True, slots=True)
class DayWindow:
    """Inclusive UTC range covering one civil day in a fixed-offset zone."""

    time_zone_label: str
    start_utc: datetime
    end_utc: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start_utc <= instant <= self.end_utc


@dataclass(frozen=True, slots=True)
class Alert:
    """A single operational alert."""

    message: str
    severity: Severity = Severity.WARN
    created_at: str | None = None

    def __post_init__(self) -> None:
        if not self.message.strip():
            raise ValueError("Alert message must not be empty")


@dataclass(frozen=True, slots=True)
class HeartbeatStatus:
    """Latest heartbeat of a background job, judged against its threshold."""

    kind: HeartbeatKind
    stale_threshold_minutes: int
    last_seen_at: datetime | None = None
    checked_at: datetime | None = None

    @property
    def age_minutes(self) -> float | None:
        if self.last_seen_at is None or self.checked_at is None:
            return None
        return (self.checked_at - self.last_seen_at).total_seconds() / 60

    @property
    def is_stale(self) -> bool:
        """True when no signal exists or the signal is older than the threshold."""
        age = self.age_minutes
        if age is None:
            return True
        return age > self.stale_threshold_minutes

    @property
    def freshness(self) -> str:
        if self.last_seen_at is None:
            return "unknown"
        return "stale" if self.is_stale else "ok"


@dataclass(frozen=True, slots=True)
class BookingSummary:
    """Read-only projection of a recent booking."""

    booking_id: str
    customer_name: str | None = None
    status: str | None = None
    created_at: str | None = None


@dataclass(frozen=True, slots=True)
class MetricValues:
    """Computed metric values fed to the alert synthesizer."""

    revenue_today: Decimal = Decimal("0")
    active_bookings: int = 0
    pending_payments: int = 0
    refund_liability: Decimal = Decimal("0")
    missing_documents: int = 0
    open_support_requests: int = 0
    failed_automations_24h: int = 0
    retrying_automations: int = 0
    supplier_pending_confirmations: int = 0


@dataclass(frozen=True, slots=True)
class Snapshot:
    """One computed operational summary. Never persisted."""

    revenue_today: Decimal = Decimal("0")
    active_bookings: int = 0
    pending_payments: int = 0
    refund_liability: Decimal = Decimal("0")
    missing_documents: int = 0
    open_support_requests: int = 0
    failed_automations_24h: int = 0
    retrying_automations: int = 0
    supplier_pending_confirmations: int = 0
    recent_bookings: tuple[BookingSummary, ...] = field(default_factory=tuple)
    alerts: tuple[Alert, ...] = field(default_factory=tuple)
    heartbeats: tuple[HeartbeatStatus, ...] = field(default_factory=tuple)
    day_window: DayWindow | None = None

    @classmethod
    def empty(cls, day_window: DayWindow | None = None) -> "Snapshot":
        return cls(day_window=day_window)

    @classmethod
    def from_parts(
        cls,
        metrics: MetricValues,
        recent_bookings: tuple[BookingSummary, ...],
        alerts: tuple[Alert, ...],
        heartbeats: tuple[HeartbeatStatus, ...] = (),
        day_window: DayWindow | None = None,
    ) -> "Snapshot":
        return cls(
            revenue_today=metrics.revenue_today,
            active_bookings=metrics.active_bookings,
            pending_payments=metrics.pending_payments,
            refund_liability=metrics.refund_liability,
            missing_documents=metrics.missing_documents,
            open_support_requests=metrics.open_support_requests,
            failed_automations_24h=metrics.failed_automations_24h,
            retrying_automations=metrics.retrying_automations,
            supplier_pending_confirmations=metrics.supplier_pending_confirmations,
            recent_bookings=recent_bookings,
            alerts=alerts,
            heartbeats=heartbeats,
            day_window=day_window,
        )
