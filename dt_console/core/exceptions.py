"""
Exception handling for the core module.

FetchError and QueryError never leave the core: the poller and the query panel
turn them into state. ApiException is the HTTP layer's error.
"""

import json
import logging

import sentry_sdk
from aiohttp import web

log = logging.getLogger(__name__)


class FetchError(Exception):
    """The status document could not be fetched or parsed"""


class QueryError(Exception):
    """The query service failed or returned nothing"""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class EmptyResultError(QueryError):
    def __init__(self) -> None:
        super().__init__("no data returned")


class ApiException(web.HTTPException):
    """Raise a client error as aiohttp exception with a JSON body"""

    def __init__(self, status, error_code, title, detail) -> None:
        self.status_code = status
        error_body = {"errors": [{"code": error_code, "title": title, "detail": detail}]}
        super().__init__(content_type="application/json", text=json.dumps(error_body))


def report_exception(exc: Exception, title: str, **tags) -> str | None:
    """Log an exception and send it to Sentry if configured, returning the event id."""
    log.warning("%s: %s", title, exc)
    event_id = None
    if sentry_sdk.get_client().is_active():
        with sentry_sdk.new_scope() as scope:
            scope.set_tags({"title": title, **tags})
            event_id = sentry_sdk.capture_exception(exc)
    return event_id
