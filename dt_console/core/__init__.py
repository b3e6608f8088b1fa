"""
Core module for dt_console.

This module contains the status poller, the query executor and the state
they publish, independent of the HTTP layer and of any renderer.
"""

from .exceptions import ApiException, EmptyResultError, FetchError, QueryError, report_exception
from .models import (
    ColumnDescriptor,
    ComponentStatus,
    Error,
    Indicator,
    Loading,
    PollState,
    QueryResult,
    Ready,
    StatusSnapshot,
)
from .poller import StatusPoller
from .query_executor import QueryExecutor
from .query_panel import PanelState, QueryPanel
from .schema import infer_columns
from .state import StateHolder
from .status_client import StatusClient, classify

__all__ = [
    "ApiException",
    "ColumnDescriptor",
    "ComponentStatus",
    "EmptyResultError",
    "Error",
    "FetchError",
    "Indicator",
    "Loading",
    "PanelState",
    "PollState",
    "QueryError",
    "QueryExecutor",
    "QueryPanel",
    "QueryResult",
    "Ready",
    "StateHolder",
    "StatusClient",
    "StatusPoller",
    "StatusSnapshot",
    "classify",
    "infer_columns",
    "report_exception",
]
