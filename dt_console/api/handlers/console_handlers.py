"""
Status and query request handlers.
"""

import json
from datetime import datetime, timezone

from aiohttp import web

from dt_console.core.exceptions import ApiException
from dt_console.core.url import build_link_with_page, parse_paging
from dt_console.views import panel_view, status_view


async def _read_query_text(request, required: bool) -> str | None:
    if not request.can_read_body:
        if required:
            raise ApiException(400, None, "Invalid body", "Expected a JSON object with a query")
        return None
    try:
        body = await request.json()
    except json.JSONDecodeError:
        raise ApiException(400, None, "Invalid body", "Body is not valid JSON")
    if not isinstance(body, dict):
        raise ApiException(400, None, "Invalid body", "Expected a JSON object")
    query = body.get("query")
    if query is None and not required:
        return None
    if not isinstance(query, str):
        raise ApiException(400, None, "Invalid body", "query must be a string")
    return query


def _panel_body(request) -> dict:
    page, page_size = parse_paging(request)
    query_string = request.query_string.split("&") if request.query_string else []
    body = panel_view(request.app["query_panel"].state.value, page, page_size)
    next = build_link_with_page(request, query_string, page + 1, page_size)
    prev = build_link_with_page(request, query_string, page - 1, page_size)
    body["links"] = {
        "next": next if page_size * page < body["total"] else None,
        "prev": prev if page > 1 else None,
    }
    return body


async def handle_status(request):
    """Handle platform status requests."""
    return web.json_response(status_view(request.app["poller"].state.value))


async def handle_query_get(request):
    """Handle query panel state requests."""
    return web.json_response(_panel_body(request))


async def handle_query_set(request):
    """Handle query text updates."""
    query = await _read_query_text(request, required=True)
    request.app["query_panel"].set_query(query)
    return web.json_response(_panel_body(request))


async def handle_query_run(request):
    """Handle query executions, optionally replacing the query text first."""
    # validate paging before running anything
    parse_paging(request)
    query = await _read_query_text(request, required=False)
    panel = request.app["query_panel"]
    if query is not None:
        panel.set_query(query)
    await panel.run_query()
    return web.json_response(_panel_body(request))


async def handle_health(request):
    """Handle health check requests."""
    start_time = request.app["start_time"]
    current_time = datetime.now(timezone.utc)
    uptime_seconds = (current_time - start_time).total_seconds()
    return web.json_response(
        {
            "status": "ok",
            "version": request.app["app_version"],
            "uptime_seconds": uptime_seconds,
            "poller_running": request.app["poller"].running,
        }
    )
