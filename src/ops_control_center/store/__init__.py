from ops_control_center.store.base import RowStore
from ops_control_center.store.client import SupabaseRestClient
from ops_control_center.store.exceptions import (
    FetchTimeoutError,
    NotConfiguredError,
    QueryError,
    StoreError,
)
from ops_control_center.store.fetcher import MetricSourceShape, Row, SafeFetcher
from ops_control_center.store.query import Filter, Operator, Order, RowQuery

__all__ = [
    "RowStore",
    "SupabaseRestClient",
    "SafeFetcher",
    "MetricSourceShape",
    "Row",
    "RowQuery",
    "Filter",
    "Operator",
    "Order",
    "StoreError",
    "NotConfiguredError",
    "QueryError",
    "FetchTimeoutError",
]
