"""Candidate source shapes per metric, tried in order.

Deployments created at different times name tables and columns differently;
each tuple lists the known generations, newest first. Trailing time filters
are added by the calculators since they depend on the check instant.
"""

from ops_control_center.store import Filter, MetricSourceShape, RowQuery

REVENUE_STATUSES = ("paid", "captured")
REFUND_OPEN_STATUSES = ("initiated", "pending", "processing")

REVENUE_TODAY: tuple[MetricSourceShape, ...] = (
    MetricSourceShape(
        "payments",
        RowQuery.select("amount,status,created_at").where(Filter.is_in("status", REVENUE_STATUSES)),
    ),
)

ACTIVE_BOOKINGS: tuple[MetricSourceShape, ...] = (
    MetricSourceShape(
        "bookings",
        RowQuery.select("id").where(Filter.is_in("status", ("confirmed", "traveling"))),
    ),
    MetricSourceShape(
        "bookings",
        RowQuery.select("id").where(
            Filter.is_in("supplier_status", ("confirmed", "partially_confirmed"))
        ),
    ),
)

PENDING_PAYMENTS: tuple[MetricSourceShape, ...] = (
    MetricSourceShape(
        "bookings",
        RowQuery.select("id").where(Filter.is_in("payment_status", ("pending", "payment_pending"))),
    ),
    MetricSourceShape(
        "payments",
        RowQuery.select("id")
        .where(Filter.is_in("status", ("pending", "created", "requires_action", "authorized")))
        .take(500),
    ),
)

REFUND_LIABILITY: tuple[MetricSourceShape, ...] = (
    MetricSourceShape(
        "refunds",
        RowQuery.select("amount,status,created_at").where(
            Filter.is_in("status", REFUND_OPEN_STATUSES)
        ),
    ),
    MetricSourceShape(
        "payment_refunds",
        RowQuery.select("amount,status,created_at").where(
            Filter.is_in("status", REFUND_OPEN_STATUSES)
        ),
    ),
)

MISSING_DOCUMENTS: tuple[MetricSourceShape, ...] = tuple(
    MetricSourceShape(table, RowQuery.select(columns).newest_first().take(500))
    for table, columns in (
        ("documents", "id,public_url,status,storage_path,created_at"),
        ("documents", "id,url,status,storage_path,created_at"),
        ("documents", "id,public_url,storage_path,created_at"),
        ("booking_documents", "id,url,status,file_path,created_at"),
        ("booking_documents", "id,file_url,status,file_path,created_at"),
    )
)

OPEN_SUPPORT_REQUESTS: tuple[MetricSourceShape, ...] = tuple(
    shape
    for table in ("support_requests", "customer_requests", "helpdesk_tickets")
    for shape in (
        MetricSourceShape(table, RowQuery.select("id,status,created_at").newest_first().take(500)),
        MetricSourceShape(table, RowQuery.select("id,status").take(500)),
    )
)

FAILED_AUTOMATIONS: tuple[MetricSourceShape, ...] = tuple(
    MetricSourceShape(table, RowQuery.select("id").where(Filter.eq("status", "failed")))
    for table in ("event_failures", "automation_failures")
)

RETRYING_AUTOMATIONS: tuple[MetricSourceShape, ...] = tuple(
    MetricSourceShape(table, RowQuery.select("id").where(Filter.eq("status", "retrying")).take(500))
    for table in ("automation_failures", "event_failures")
)

SUPPLIER_PENDING_CONFIRMATIONS: tuple[MetricSourceShape, ...] = (
    MetricSourceShape(
        "bookings",
        RowQuery.select("id").where(Filter.is_in("supplier_status", ("pending", "requested"))),
    ),
    MetricSourceShape(
        "supplier_assignments",
        RowQuery.select("id").where(Filter.is_in("status", ("pending", "requested"))),
    ),
)
