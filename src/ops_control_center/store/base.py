from typing import Any, Protocol, runtime_checkable

from ops_control_center.store.query import RowQuery


@runtime_checkable
class RowStore(Protocol):
    """Protocol for read-only relational query clients."""

    async def select_many(self, table: str, query: RowQuery) -> list[dict[str, Any]]:
        ...

    async def select_one(self, table: str, query: RowQuery) -> dict[str, Any] | None:
        ...
