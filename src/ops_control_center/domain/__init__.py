"""Domain models for the operational control center."""

from ops_control_center.domain.models import (
    Alert,
    BookingSummary,
    DayWindow,
    HeartbeatKind,
    HeartbeatStatus,
    MetricValues,
    Severity,
    Snapshot,
)

__all__ = [
    "Alert",
    "BookingSummary",
    "DayWindow",
    "HeartbeatKind",
    "HeartbeatStatus",
    "MetricValues",
    "Severity",
    "Snapshot",
]
