"""Named dedup patterns, one per alert category.

A threshold-derived alert is suppressed when any alert already in the list
matches its category's pattern. The failure-table message form
``[<event>] failed: <reason>`` counts as an automation failure.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from ops_control_center.domain import Alert, HeartbeatKind


class AlertCategory(StrEnum):
    PENDING_PAYMENTS = "pending_payments"
    ACTIVE_BOOKING_LOAD = "active_booking_load"
    MISSING_DOCUMENTS = "missing_documents"
    SUPPORT_BACKLOG = "support_backlog"
    SUPPLIER_PENDING = "supplier_pending"
    AUTOMATION_FAILURES = "automation_failures"
    CRON_RETRY_HEARTBEAT = "cron_retry_heartbeat"
    PAYMENT_WEBHOOK_HEARTBEAT = "payment_webhook_heartbeat"
    SUPPLIER_SYNC_HEARTBEAT = "supplier_sync_heartbeat"


@dataclass(frozen=True, slots=True)
class DedupPattern:
    category: AlertCategory
    pattern: re.Pattern[str]

    def matches(self, message: str) -> bool:
        return self.pattern.search(message) is not None


def _pattern(category: AlertCategory, regex: str) -> DedupPattern:
    return DedupPattern(category, re.compile(regex, re.IGNORECASE))


DEDUP_PATTERNS: dict[AlertCategory, DedupPattern] = {
    pattern.category: pattern
    for pattern in (
        _pattern(AlertCategory.PENDING_PAYMENTS, r"pending payments?|payments? (are |is )?pending"),
        _pattern(AlertCategory.ACTIVE_BOOKING_LOAD, r"active bookings?|booking load"),
        _pattern(
            AlertCategory.MISSING_DOCUMENTS, r"documents?.*(missing|pending)|missing.*documents?"
        ),
        _pattern(AlertCategory.SUPPORT_BACKLOG, r"support requests?|open support"),
        _pattern(
            AlertCategory.SUPPLIER_PENDING,
            r"supplier confirmations?.*pending|awaiting supplier|supplier.*not confirmed",
        ),
        _pattern(
            AlertCategory.AUTOMATION_FAILURES,
            r"automation.*fail|failed automations?|event failures?|^\[[^\]]+\]\s+failed:",
        ),
        _pattern(
            AlertCategory.CRON_RETRY_HEARTBEAT,
            r"cron[ _-]?retry.*(heartbeat|stale|silent)",
        ),
        _pattern(
            AlertCategory.PAYMENT_WEBHOOK_HEARTBEAT,
            r"payment[ _-]?webhook.*(heartbeat|stale|silent)|webhook heartbeat",
        ),
        _pattern(
            AlertCategory.SUPPLIER_SYNC_HEARTBEAT,
            r"supplier[ _-]?sync.*(heartbeat|stale|silent)",
        ),
    )
}

HEARTBEAT_CATEGORIES: dict[HeartbeatKind, AlertCategory] = {
    HeartbeatKind.CRON_RETRY: AlertCategory.CRON_RETRY_HEARTBEAT,
    HeartbeatKind.PAYMENT_WEBHOOK: AlertCategory.PAYMENT_WEBHOOK_HEARTBEAT,
    HeartbeatKind.SUPPLIER_SYNC: AlertCategory.SUPPLIER_SYNC_HEARTBEAT,
}


def is_represented(category: AlertCategory, alerts: Iterable[Alert]) -> bool:
    pattern = DEDUP_PATTERNS[category]
    return any(pattern.matches(alert.message) for alert in alerts)
