from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import Any

import pytest

from ops_control_center.config import Settings
from ops_control_center.store import Operator, QueryError, RowQuery, SafeFetcher
from ops_control_center.window import parse_timestamp

Table = tuple[frozenset[str], list[dict[str, Any]]]


def make_table(*rows: dict[str, Any], columns: Iterable[str] | None = None) -> Table:
    """Build a table schema; columns default to the union of the row keys."""
    names = set(columns or ())
    for row in rows:
        names.update(row)
    return frozenset(names), [dict(row) for row in rows]


def _compare(left: Any, right: Any) -> tuple[Any, Any]:
    left_ts, right_ts = parse_timestamp(left), parse_timestamp(right)
    if left_ts is not None and right_ts is not None:
        return left_ts, right_ts
    return str(left), str(right)


def _sort_key(value: Any) -> tuple[bool, datetime, str]:
    parsed = parse_timestamp(value)
    return parsed is not None, parsed or datetime.min.replace(tzinfo=UTC), str(value)


def _matches(row: dict[str, Any], column: str, operator: Operator, value: Any) -> bool:
    actual = row.get(column)
    if actual is None:
        return False
    if operator is Operator.EQ:
        return str(actual) == str(value)
    if operator is Operator.IN:
        return str(actual) in {str(v) for v in value}
    left, right = _compare(actual, value)
    if operator is Operator.GTE:
        return left >= right
    return left <= right


class InMemoryStore:
    """PostgREST-like store evaluating projections and filters in memory.

    Unknown tables and unknown columns raise QueryError, as PostgREST
    answers 404/400 for them, so schema-drift fallbacks are exercised.
    """

    def __init__(
        self,
        tables: dict[str, Table] | None = None,
        failures: dict[str, BaseException] | None = None,
    ) -> None:
        self.tables = tables or {}
        self.failures = failures or {}
        self.calls: list[tuple[str, RowQuery]] = []

    async def select_many(self, table: str, query: RowQuery) -> list[dict[str, Any]]:
        self.calls.append((table, query))
        if table in self.failures:
            raise self.failures[table]
        if table not in self.tables:
            raise QueryError(table, 404, "relation does not exist")

        columns, rows = self.tables[table]
        referenced = set(query.columns) | {f.column for f in query.filters}
        if query.order is not None:
            referenced.add(query.order.column)
        unknown = referenced - columns
        if unknown:
            raise QueryError(table, 400, f"column {sorted(unknown)[0]} does not exist")

        result = [
            row
            for row in rows
            if all(_matches(row, f.column, f.operator, f.value) for f in query.filters)
        ]
        if query.order is not None:
            key = query.order.column
            present = [row for row in result if row.get(key) is not None]
            missing = [row for row in result if row.get(key) is None]
            present.sort(key=lambda row: _sort_key(row[key]), reverse=query.order.descending)
            result = present + missing
        if query.limit is not None:
            result = result[: query.limit]
        return [{column: row.get(column) for column in query.columns} for row in result]

    async def select_one(self, table: str, query: RowQuery) -> dict[str, Any] | None:
        rows = await self.select_many(table, query.take(1))
        return rows[0] if rows else None

    def tables_queried(self) -> list[str]:
        return [table for table, _ in self.calls]


@pytest.fixture
def now() -> datetime:
    # 11:30 IST on 2026-03-10
    return datetime(2026, 3, 10, 6, 0, tzinfo=UTC)


@pytest.fixture
def table() -> Callable[..., Table]:
    return make_table


@pytest.fixture
def store_factory() -> Callable[..., InMemoryStore]:
    return InMemoryStore


@pytest.fixture
def fetcher_for() -> Callable[[InMemoryStore], SafeFetcher]:
    def build(store: InMemoryStore, timeout: float = 1.0) -> SafeFetcher:
        return SafeFetcher(store, timeout=timeout)

    return build


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_role_key="service-role-key",
        environment="development",
        _env_file=None,
    )
