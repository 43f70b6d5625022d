import json
from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any

from ops_control_center.domain import Alert, BookingSummary, DayWindow, HeartbeatStatus, Snapshot
from ops_control_center.window import to_iso


def snapshot_to_payload(snapshot: Snapshot) -> dict[str, Any]:
    """Render a Snapshot as the dashboard's camelCase payload."""
    payload: dict[str, Any] = {
        "revenueToday": snapshot.revenue_today,
        "activeBookings": snapshot.active_bookings,
        "pendingPayments": snapshot.pending_payments,
        "refundLiability": snapshot.refund_liability,
        "missingDocuments": snapshot.missing_documents,
        "openSupportRequests": snapshot.open_support_requests,
        "failedAutomations24h": snapshot.failed_automations_24h,
        "retryingAutomations": snapshot.retrying_automations,
        "supplierPendingConfirmations": snapshot.supplier_pending_confirmations,
        "recentBookings": [_booking(b) for b in snapshot.recent_bookings],
        "alerts": [_alert(a) for a in snapshot.alerts],
        "heartbeats": [_heartbeat(h) for h in snapshot.heartbeats],
    }
    if snapshot.day_window is not None:
        payload["dayWindow"] = _day_window(snapshot.day_window)
    return payload


def snapshot_to_json(snapshot: Snapshot) -> str:
    return json.dumps(snapshot_to_payload(snapshot), default=_json_default)


def _booking(booking: BookingSummary) -> dict[str, Any]:
    return {
        "booking_id": booking.booking_id,
        "customer_name": booking.customer_name,
        "status": booking.status,
        "created_at": booking.created_at,
    }


def _alert(alert: Alert) -> dict[str, Any]:
    item: dict[str, Any] = {"severity": alert.severity, "message": alert.message}
    if alert.created_at:
        item["created_at"] = alert.created_at
    return item


def _heartbeat(status: HeartbeatStatus) -> dict[str, Any]:
    return {
        "kind": status.kind,
        "lastSeenAt": status.last_seen_at,
        "staleThresholdMinutes": status.stale_threshold_minutes,
        "isStale": status.is_stale,
        "status": status.freshness,
    }


def _day_window(window: DayWindow) -> dict[str, str]:
    return {
        "tz": window.time_zone_label,
        "startUtc": to_iso(window.start_utc),
        "endUtc": to_iso(window.end_utc),
    }


def _json_default(obj: Any) -> Any:
    if isinstance(obj, datetime):
        return to_iso(obj)
    if isinstance(obj, Decimal):
        return float(obj)
    if isinstance(obj, StrEnum):
        return obj.value
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
