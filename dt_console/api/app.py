"""
Main API application factory.

This module creates the aiohttp application with all routes and middleware,
and owns the lifecycle of the status poller and the query panel.
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path

import aiohttp_cors
import sentry_sdk
from aiohttp import ClientSession, web
from aiohttp_swagger import setup_swagger

from dt_console import config
from dt_console.core.poller import StatusPoller
from dt_console.core.query_executor import QueryExecutor
from dt_console.core.query_panel import QueryPanel
from dt_console.core.sentry import get_sentry_kwargs
from dt_console.core.status_client import StatusClient
from dt_console.core.version import get_app_version

from .routes.console import routes as console_routes

log = logging.getLogger(__name__)

sentry_sdk.init(**get_sentry_kwargs())

SWAGGER_FILE = Path(__file__).parent.parent / "console_swagger.yaml"


async def app_factory():
    """Create and configure the aiohttp application."""

    async def on_startup(app):
        app["csession"] = ClientSession()
        app["start_time"] = datetime.now(timezone.utc)
        app["app_version"] = await get_app_version()
        app["poller"] = StatusPoller(StatusClient(app["csession"]))
        app["query_panel"] = QueryPanel(QueryExecutor(app["csession"]))
        app["poller"].start()

    async def on_cleanup(app):
        app["poller"].stop()
        await app["csession"].close()

    app = web.Application()

    app.add_routes(console_routes)

    app.on_startup.append(on_startup)
    app.on_cleanup.append(on_cleanup)

    # Setup CORS
    cors = aiohttp_cors.setup(
        app,
        defaults={
            "*": aiohttp_cors.ResourceOptions(
                allow_credentials=True, expose_headers="*", allow_headers="*"
            )
        },
    )
    for route in list(app.router.routes()):
        cors.add(route)

    # Setup Swagger documentation
    setup_swagger(
        app,
        swagger_url=config.DOC_PATH,
        ui_version=3,
        swagger_from_file=str(SWAGGER_FILE),
    )

    return app


def run():
    """Run the application."""
    logging.basicConfig(level=config.LOG_LEVEL)
    log.info("Serving dt-console, status from %s", config.STATUS_ENDPOINT)
    web.run_app(app_factory(), path=os.environ.get("CONSOLE_APP_SOCKET_PATH"))
