"""
Query executor.

Submits a query string verbatim to the query service and wraps the returned
records into a QueryResult. Nothing is retried.
"""

import logging
from typing import Any

from aiohttp import ClientError, ClientResponse, ClientSession, ClientTimeout

from dt_console import config
from dt_console.core.exceptions import EmptyResultError, QueryError
from dt_console.core.models import QueryResult
from dt_console.core.schema import infer_columns

log = logging.getLogger(__name__)


async def _error_message(res: ClientResponse) -> str:
    # the service answers {"error": {"code": ..., "message": ...}} on failure
    try:
        body = await res.json(content_type=None)
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = body["error"].get("message")
        if message:
            return str(message)
    return f"HTTP {res.status} {res.reason or ''}".strip()


class QueryExecutor:
    """Runs queries against the query service endpoint."""

    def __init__(self, session: ClientSession, endpoint: str | None = None):
        self.session = session
        self.endpoint = endpoint or config.QUERY_ENDPOINT

    def build_body(self, query_text: str, timeout_ms: int) -> dict[str, Any]:
        return {
            "query": query_text,
            "requestTimeoutMilliseconds": timeout_ms,
            "enablePreview": bool(config.QUERY_ENABLE_PREVIEW),
        }

    async def execute(self, query_text: str, timeout_ms: int | None = None) -> QueryResult:
        """
        Execute a query and infer its table columns.

        Args:
            query_text: The query, sent as is
            timeout_ms: Request timeout given to the service, defaults to QUERY_TIMEOUT_MS

        Returns:
            The records and their columns

        Raises:
            QueryError: on transport or service failure
            EmptyResultError: if the service answered without records
        """
        if timeout_ms is None:
            timeout_ms = config.QUERY_TIMEOUT_MS
        body = self.build_body(query_text, timeout_ms)
        # leave the service some time to answer with its own timeout error
        client_timeout = ClientTimeout(total=timeout_ms / 1000 + 10)
        log.debug("Executing query %r", query_text)
        try:
            async with self.session.post(self.endpoint, json=body, timeout=client_timeout) as res:
                if not res.ok:
                    raise QueryError(await _error_message(res))
                try:
                    payload = await res.json(content_type=None)
                except ValueError as e:
                    raise QueryError("invalid JSON in query response") from e
        except ClientError as e:
            raise QueryError(str(e) or e.__class__.__name__) from e
        except TimeoutError as e:
            raise QueryError(f"query timed out after {timeout_ms} ms") from e

        records = self._records(payload)
        if not records:
            raise EmptyResultError()
        return QueryResult(records=tuple(records), columns=tuple(infer_columns(records)))

    @staticmethod
    def _records(payload: Any) -> list[dict[str, Any]]:
        if not isinstance(payload, dict):
            raise QueryError("malformed query response")
        result = payload.get("result") or {}
        records = result.get("records") if isinstance(result, dict) else None
        if records is None:
            return []
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise QueryError("malformed query response: records must be objects")
        return records
