import pytest

from ops_control_center.alerts import DEDUP_PATTERNS, AlertCategory, is_represented, threshold_alerts
from ops_control_center.alerts.patterns import HEARTBEAT_CATEGORIES
from ops_control_center.domain import Alert, HeartbeatKind, HeartbeatStatus, MetricValues


class TestDedupPatterns:
    def test_every_category_has_a_pattern(self) -> None:
        assert set(DEDUP_PATTERNS) == set(AlertCategory)

    def test_every_heartbeat_kind_has_a_category(self) -> None:
        assert set(HEARTBEAT_CATEGORIES) == set(HeartbeatKind)

    @pytest.mark.parametrize(
        ("category", "message"),
        [
            (AlertCategory.MISSING_DOCUMENTS, "Some booking documents are missing or pending"),
            (AlertCategory.MISSING_DOCUMENTS, "[warn] Document upload pending for BK-12"),
            (AlertCategory.MISSING_DOCUMENTS, "Missing travel documents for 3 bookings"),
            (AlertCategory.SUPPORT_BACKLOG, "[warn] 4 open support tickets"),
            (AlertCategory.SUPPORT_BACKLOG, "Support request SR-9 escalated"),
            (AlertCategory.AUTOMATION_FAILURES, "[resend_docs] failed: timeout"),
            (AlertCategory.AUTOMATION_FAILURES, "Automation failures detected in the last 24 hours"),
            (AlertCategory.AUTOMATION_FAILURES, "[error] event failure while sending voucher"),
            (AlertCategory.PENDING_PAYMENTS, "12 pending payments require attention"),
            (AlertCategory.ACTIVE_BOOKING_LOAD, "High active booking load"),
            (AlertCategory.SUPPLIER_PENDING, "Supplier confirmations are pending (2 bookings)"),
            (AlertCategory.PAYMENT_WEBHOOK_HEARTBEAT, "[error] payment_webhook heartbeat missed"),
            (AlertCategory.CRON_RETRY_HEARTBEAT, "Cron retry heartbeat is stale"),
            (AlertCategory.SUPPLIER_SYNC_HEARTBEAT, "supplier-sync loop silent since 09:00"),
        ],
    )
    def test_pattern_matches(self, category: AlertCategory, message: str) -> None:
        assert DEDUP_PATTERNS[category].matches(message)

    @pytest.mark.parametrize(
        ("category", "message"),
        [
            (AlertCategory.MISSING_DOCUMENTS, "Open support requests need attention"),
            (AlertCategory.AUTOMATION_FAILURES, "[warn] Slow response from supplier API"),
            (AlertCategory.SUPPORT_BACKLOG, "Some booking documents are missing or pending"),
            (AlertCategory.PENDING_PAYMENTS, "Payment webhook heartbeat is stale"),
        ],
    )
    def test_pattern_does_not_match_other_conditions(
        self, category: AlertCategory, message: str
    ) -> None:
        assert not DEDUP_PATTERNS[category].matches(message)

    def test_is_represented(self) -> None:
        alerts = [Alert("[resend_docs] failed: timeout")]

        assert is_represented(AlertCategory.AUTOMATION_FAILURES, alerts)
        assert not is_represented(AlertCategory.SUPPORT_BACKLOG, alerts)

    def test_threshold_messages_only_match_their_own_category(self) -> None:
        metrics = MetricValues(
            active_bookings=80,
            pending_payments=40,
            missing_documents=2,
            open_support_requests=3,
            failed_automations_24h=1,
            supplier_pending_confirmations=4,
        )
        heartbeats = [HeartbeatStatus(kind, 30) for kind in HeartbeatKind]

        derived = threshold_alerts(metrics, heartbeats)

        assert len(derived) == len(AlertCategory)
        for category, alert in derived:
            matching = {c for c, p in DEDUP_PATTERNS.items() if p.matches(alert.message)}
            assert matching == {category}, alert.message
