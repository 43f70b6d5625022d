from collections import defaultdict
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any


class Operator(StrEnum):
    EQ = "eq"
    IN = "in"
    GTE = "gte"
    LTE = "lte"


@dataclass(frozen=True, slots=True)
class Filter:
    """A single PostgREST column predicate."""

    column: str
    operator: Operator
    value: Any

    @classmethod
    def eq(cls, column: str, value: Any) -> "Filter":
        return cls(column, Operator.EQ, value)

    @classmethod
    def is_in(cls, column: str, values: tuple[Any, ...] | list[Any]) -> "Filter":
        return cls(column, Operator.IN, tuple(values))

    @classmethod
    def gte(cls, column: str, value: Any) -> "Filter":
        return cls(column, Operator.GTE, value)

    @classmethod
    def lte(cls, column: str, value: Any) -> "Filter":
        return cls(column, Operator.LTE, value)

    def render(self) -> str:
        if self.operator is Operator.IN:
            return f"in.({','.join(str(v) for v in self.value)})"
        return f"{self.operator.value}.{self.value}"


@dataclass(frozen=True, slots=True)
class Order:
    column: str
    descending: bool = True

    def render(self) -> str:
        return f"{self.column}.{'desc' if self.descending else 'asc'}"


@dataclass(frozen=True, slots=True)
class RowQuery:
    """Column projection, filters, ordering and limit for one select."""

    columns: tuple[str, ...]
    filters: tuple[Filter, ...] = field(default_factory=tuple)
    order: Order | None = None
    limit: int | None = None

    @classmethod
    def select(cls, columns: str) -> "RowQuery":
        return cls(columns=tuple(c.strip() for c in columns.split(",") if c.strip()))

    def where(self, *filters: Filter) -> "RowQuery":
        return replace(self, filters=self.filters + filters)

    def newest_first(self, column: str = "created_at") -> "RowQuery":
        return replace(self, order=Order(column, descending=True))

    def take(self, limit: int) -> "RowQuery":
        return replace(self, limit=limit)

    def to_params(self) -> list[tuple[str, str]]:
        """Render as PostgREST query parameters.

        A column constrained more than once (e.g. a time range) is folded into
        a single ``and=(...)`` group since PostgREST keeps only one value per key.
        """
        params: list[tuple[str, str]] = [("select", ",".join(self.columns))]

        by_column: dict[str, list[Filter]] = defaultdict(list)
        for item in self.filters:
            by_column[item.column].append(item)

        grouped: list[str] = []
        for column, items in by_column.items():
            if len(items) == 1:
                params.append((column, items[0].render()))
            else:
                grouped.extend(f"{column}.{item.render()}" for item in items)
        if grouped:
            params.append(("and", f"({','.join(grouped)})"))

        if self.order is not None:
            params.append(("order", self.order.render()))
        if self.limit is not None:
            params.append(("limit", str(self.limit)))
        return params
