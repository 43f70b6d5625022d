from ops_control_center.alerts.patterns import (
    DEDUP_PATTERNS,
    AlertCategory,
    DedupPattern,
    is_represented,
)
from ops_control_center.alerts.sources import AlertSource, FailureTableSource, LogTableSource
from ops_control_center.alerts.synthesizer import AlertSynthesizer, merge_alerts, threshold_alerts

__all__ = [
    "AlertCategory",
    "DedupPattern",
    "DEDUP_PATTERNS",
    "is_represented",
    "AlertSource",
    "FailureTableSource",
    "LogTableSource",
    "AlertSynthesizer",
    "merge_alerts",
    "threshold_alerts",
]
