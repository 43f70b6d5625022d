from ops_control_center.output.payload import snapshot_to_json, snapshot_to_payload

__all__ = ["snapshot_to_payload", "snapshot_to_json"]
