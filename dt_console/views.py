"""
View models handed to the renderer.

These functions turn core state into plain dicts; they hold no state.
"""

from typing import Any

from dt_console import config
from dt_console.core.models import Error, Indicator, Loading, PollState, QueryResult, Ready
from dt_console.core.query_panel import PanelState
from dt_console.core.status_client import classify

STATUS_TITLE = "Dynatrace Platform Status"
STATUS_ERROR_TEXT = "Unable to load status information"
EMPTY_TABLE_TEXT = 'No data available. Click "Run DQL" to execute the query.'

STATUS_TEXTS = {
    Indicator.NONE: "All Systems Operational",
    Indicator.MINOR: "Minor Service Outage",
    Indicator.MAJOR: "Major Service Outage",
    Indicator.CRITICAL: "Critical Service Outage",
}


def status_text(indicator: Any) -> str:
    return STATUS_TEXTS.get(Indicator.parse(indicator), "Unknown Status")


def component_class(status: str) -> str:
    return "status-operational" if status == "operational" else "status-minor"


def status_view(state: PollState) -> dict[str, Any]:
    if isinstance(state, Loading):
        return {"state": "loading", "title": STATUS_TITLE}
    if isinstance(state, Error):
        return {
            "state": "error",
            "title": STATUS_TITLE,
            "message": STATUS_ERROR_TEXT,
            "detail": state.message,
            "link": config.STATUS_PAGE_URL,
        }
    if isinstance(state, Ready):
        snapshot = state.snapshot
        displayed = snapshot.components[: config.STATUS_COMPONENTS_DISPLAYED]
        return {
            "state": "ready",
            "title": STATUS_TITLE,
            "class": f"status-{classify(snapshot.indicator)}",
            "text": status_text(snapshot.indicator),
            "description": snapshot.description or None,
            "components": [
                {"name": c.name, "status": c.status, "class": component_class(c.status)}
                for c in displayed
            ],
            "link": config.STATUS_PAGE_URL,
        }
    raise TypeError(f"Unexpected poll state: {state!r}")


def table_view(result: QueryResult | None, page: int = 1, page_size: int | None = None) -> dict:
    page_size = page_size or config.PAGE_SIZE_DEFAULT
    base = {
        "page": page,
        "pageSize": page_size,
        "pageSizeOptions": config.PAGE_SIZE_OPTIONS,
    }
    if result is None or not len(result):
        return {**base, "tableData": [], "tableColumns": [], "total": 0, "summary": EMPTY_TABLE_TEXT}
    offset = page_size * (page - 1) if page > 1 else 0
    rows = result.rows
    return {
        **base,
        "tableData": rows[offset : offset + page_size],
        "tableColumns": [column.to_dict() for column in result.columns],
        "total": len(rows),
        "summary": f"Displaying {len(rows)} rows from the DQL query",
    }


def panel_view(state: PanelState, page: int = 1, page_size: int | None = None) -> dict:
    return {
        "query": state.query_text,
        "running": state.running,
        "buttonLabel": state.button_label,
        "error": state.error,
        **table_view(state.result, page, page_size),
    }
