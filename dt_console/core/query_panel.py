"""
Query panel session state.

Holds the query editor text and the outcome of the last execution. A new
execution always replaces the previous result, and an error clears it.
"""

import logging
from dataclasses import dataclass, replace

from dt_console import config
from dt_console.core.exceptions import EmptyResultError, QueryError, report_exception
from dt_console.core.models import QueryResult
from dt_console.core.query_executor import QueryExecutor
from dt_console.core.state import StateHolder

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PanelState:
    query_text: str
    running: bool = False
    error: str | None = None
    result: QueryResult | None = None

    @property
    def button_label(self) -> str:
        return "Running..." if self.running else "Run DQL"


def error_text(error: QueryError) -> str:
    if isinstance(error, EmptyResultError):
        return "No data returned from query"
    return f"Failed to execute DQL query: {error.message}"


class QueryPanel:
    def __init__(self, executor: QueryExecutor, query_text: str | None = None):
        self.executor = executor
        self.state: StateHolder[PanelState] = StateHolder(
            PanelState(query_text=query_text if query_text is not None else config.QUERY_DEFAULT)
        )

    def set_query(self, query_text: str) -> None:
        self.state.set(replace(self.state.value, query_text=query_text))

    async def run_query(self) -> PanelState:
        """Execute the current query text; does nothing if one is already running."""
        current = self.state.value
        if current.running:
            log.debug("Query already running, ignoring trigger")
            return current
        self.state.set(replace(current, running=True, error=None))
        try:
            result = await self.executor.execute(current.query_text, config.QUERY_TIMEOUT_MS)
        except QueryError as e:
            report_exception(e, "Query execution failed", endpoint=self.executor.endpoint)
            self.state.set(replace(self.state.value, running=False, error=error_text(e), result=None))
        except BaseException:
            self.state.set(replace(self.state.value, running=False))
            raise
        else:
            self.state.set(replace(self.state.value, running=False, error=None, result=result))
        return self.state.value
