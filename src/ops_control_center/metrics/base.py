from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from ops_control_center.domain import DayWindow
from ops_control_center.store import SafeFetcher


@dataclass(frozen=True, slots=True)
class CalculationContext:
    """Per-snapshot inputs shared by all calculators."""

    now: datetime
    day_window: DayWindow


@runtime_checkable
class MetricCalculator(Protocol):
    """Protocol for metric calculators.

    Implementations must not raise: when every shape is exhausted they return
    the zero value of their metric type.
    """

    @property
    def name(self) -> str:
        ...

    async def calculate(self, fetcher: SafeFetcher, context: CalculationContext) -> Any:
        ...
