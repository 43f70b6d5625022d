from ops_control_center.heartbeat.detector import HeartbeatDetector

__all__ = ["HeartbeatDetector"]
