from ops_control_center.core.exceptions import AggregationError
from ops_control_center.core.orchestrator import SnapshotOrchestrator, load_snapshot

__all__ = ["AggregationError", "SnapshotOrchestrator", "load_snapshot"]
