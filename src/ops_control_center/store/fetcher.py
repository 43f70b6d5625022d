import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import httpx

from ops_control_center.store.base import RowStore
from ops_control_center.store.exceptions import FetchTimeoutError, NotConfiguredError, StoreError
from ops_control_center.store.query import RowQuery

logger = logging.getLogger(__name__)

Row = dict[str, Any]


@dataclass(frozen=True, slots=True)
class MetricSourceShape:
    """One candidate table/projection/filter combination for a metric."""

    table: str
    query: RowQuery


class SafeFetcher:
    """Error boundary between the store and every metric calculator.

    Any shape mismatch, transport failure or timeout is reported as "no rows
    under this shape" instead of propagating. ``NotConfiguredError`` is the one
    exception let through, since it is decided before any query is issued.
    """

    def __init__(self, store: RowStore, timeout: float = 8.0) -> None:
        self._store = store
        self._timeout = timeout

    async def try_fetch_rows(self, table: str, query: RowQuery) -> list[Row] | None:
        """Return rows, or None when the shape failed (as opposed to matching nothing)."""
        try:
            return await self._select(table, query)
        except NotConfiguredError:
            raise
        except (StoreError, httpx.HTTPError, ValueError) as exc:
            logger.debug("Shape rejected for %s: %s", table, exc)
            return None

    async def _select(self, table: str, query: RowQuery) -> list[Row]:
        try:
            return await asyncio.wait_for(self._store.select_many(table, query), self._timeout)
        except TimeoutError as exc:
            raise FetchTimeoutError(table, self._timeout) from exc

    async def fetch_rows(self, table: str, query: RowQuery) -> list[Row]:
        rows = await self.try_fetch_rows(table, query)
        return rows or []

    async def fetch_first(
        self, shapes: Sequence[MetricSourceShape]
    ) -> tuple[MetricSourceShape | None, list[Row]]:
        """Walk shapes in order and return the first one yielding at least one row."""
        for index, shape in enumerate(shapes):
            rows = await self.fetch_rows(shape.table, shape.query)
            if rows:
                if index:
                    logger.debug("Using fallback shape %d for %s", index, shape.table)
                return shape, rows
        return None, []

    async def fetch_first_successful(
        self, shapes: Sequence[MetricSourceShape]
    ) -> tuple[MetricSourceShape | None, list[Row]]:
        """Like fetch_first, but a shape that succeeds with zero rows also wins."""
        for shape in shapes:
            rows = await self.try_fetch_rows(shape.table, shape.query)
            if rows is not None:
                return shape, rows
        return None, []
