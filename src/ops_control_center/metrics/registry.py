import asyncio
from typing import Any

from ops_control_center.metrics.base import CalculationContext, MetricCalculator
from ops_control_center.store import SafeFetcher


class CalculatorRegistry:
    """Registry for managing and concurrently running metric calculators."""

    def __init__(self) -> None:
        self._calculators: list[MetricCalculator] = []

    def register(self, calculator: MetricCalculator) -> None:
        if any(existing.name == calculator.name for existing in self._calculators):
            raise ValueError(f"Calculator already registered: {calculator.name}")
        self._calculators.append(calculator)

    @property
    def calculators(self) -> tuple[MetricCalculator, ...]:
        return tuple(self._calculators)

    async def calculate_all(
        self, fetcher: SafeFetcher, context: CalculationContext
    ) -> dict[str, Any]:
        results = await asyncio.gather(
            *(calculator.calculate(fetcher, context) for calculator in self._calculators)
        )
        return {
            calculator.name: result
            for calculator, result in zip(self._calculators, results, strict=True)
        }
