from datetime import timedelta

from ops_control_center.metrics import shapes
from ops_control_center.metrics.base import CalculationContext, MetricCalculator
from ops_control_center.metrics.counts import ShapeCountCalculator
from ops_control_center.metrics.documents import MissingDocumentsCalculator, is_missing_document
from ops_control_center.metrics.registry import CalculatorRegistry
from ops_control_center.metrics.revenue import RefundLiabilityCalculator, RevenueTodayCalculator
from ops_control_center.metrics.support import OpenSupportRequestsCalculator


def default_registry() -> CalculatorRegistry:
    """Registry holding one calculator per snapshot metric."""
    registry = CalculatorRegistry()
    registry.register(RevenueTodayCalculator())
    registry.register(ShapeCountCalculator("active_bookings", shapes.ACTIVE_BOOKINGS))
    registry.register(ShapeCountCalculator("pending_payments", shapes.PENDING_PAYMENTS))
    registry.register(RefundLiabilityCalculator())
    registry.register(MissingDocumentsCalculator())
    registry.register(OpenSupportRequestsCalculator())
    registry.register(
        ShapeCountCalculator(
            "failed_automations_24h", shapes.FAILED_AUTOMATIONS, trailing=timedelta(hours=24)
        )
    )
    registry.register(ShapeCountCalculator("retrying_automations", shapes.RETRYING_AUTOMATIONS))
    registry.register(
        ShapeCountCalculator("supplier_pending_confirmations", shapes.SUPPLIER_PENDING_CONFIRMATIONS)
    )
    return registry


__all__ = [
    "CalculationContext",
    "MetricCalculator",
    "CalculatorRegistry",
    "ShapeCountCalculator",
    "RevenueTodayCalculator",
    "RefundLiabilityCalculator",
    "MissingDocumentsCalculator",
    "OpenSupportRequestsCalculator",
    "default_registry",
    "is_missing_document",
]
