__version__ = "0.1.0"

from ops_control_center.alerts import AlertCategory, AlertSynthesizer
from ops_control_center.config import Settings, get_settings
from ops_control_center.core import AggregationError, SnapshotOrchestrator, load_snapshot
from ops_control_center.domain import (
    Alert,
    BookingSummary,
    DayWindow,
    HeartbeatKind,
    HeartbeatStatus,
    MetricValues,
    Severity,
    Snapshot,
)
from ops_control_center.logging import configure_logging
from ops_control_center.output import snapshot_to_json, snapshot_to_payload
from ops_control_center.store import NotConfiguredError, SafeFetcher, SupabaseRestClient
from ops_control_center.window import resolve_day_window

__all__ = [
    "__version__",
    "load_snapshot",
    "SnapshotOrchestrator",
    "AggregationError",
    "AlertSynthesizer",
    "AlertCategory",
    "Settings",
    "get_settings",
    "configure_logging",
    "Snapshot",
    "Alert",
    "Severity",
    "DayWindow",
    "HeartbeatKind",
    "HeartbeatStatus",
    "BookingSummary",
    "MetricValues",
    "SafeFetcher",
    "SupabaseRestClient",
    "NotConfiguredError",
    "resolve_day_window",
    "snapshot_to_payload",
    "snapshot_to_json",
]
