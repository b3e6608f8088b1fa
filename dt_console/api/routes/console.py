"""
Status and query route definitions.
"""

from aiohttp import web

from ..handlers.console_handlers import (
    handle_health,
    handle_query_get,
    handle_query_run,
    handle_query_set,
    handle_status,
)

routes = web.RouteTableDef()


@routes.get(r"/api/status/", name="status")
async def status(request):
    """Get the platform status widget state."""
    return await handle_status(request)


@routes.get(r"/api/query/", name="query")
async def query(request):
    """Get the query panel state and the current table page."""
    return await handle_query_get(request)


@routes.put(r"/api/query/")
async def query_set(request):
    """Replace the query text."""
    return await handle_query_set(request)


@routes.post(r"/api/query/")
async def query_run(request):
    """Run the query."""
    return await handle_query_run(request)


@routes.get(r"/health/", name="health")
async def health(request):
    """Return health check status"""
    return await handle_health(request)
