from collections.abc import Sequence
from datetime import timedelta

from ops_control_center.metrics.base import CalculationContext
from ops_control_center.store import Filter, MetricSourceShape, SafeFetcher
from ops_control_center.window import to_iso


class ShapeCountCalculator:
    """Counts rows under the first shape that yields any.

    With ``trailing`` set, each shape is narrowed to rows created within that
    span before ``now``.
    """

    def __init__(
        self,
        name: str,
        shapes: Sequence[MetricSourceShape],
        trailing: timedelta | None = None,
    ) -> None:
        self._name = name
        self._shapes = tuple(shapes)
        self._trailing = trailing

    @property
    def name(self) -> str:
        return self._name

    def _resolve_shapes(self, context: CalculationContext) -> list[MetricSourceShape]:
        if self._trailing is None:
            return list(self._shapes)
        since = to_iso(context.now - self._trailing)
        return [
            MetricSourceShape(shape.table, shape.query.where(Filter.gte("created_at", since)))
            for shape in self._shapes
        ]

    async def calculate(self, fetcher: SafeFetcher, context: CalculationContext) -> int:
        _, rows = await fetcher.fetch_first(self._resolve_shapes(context))
        return len(rows)
