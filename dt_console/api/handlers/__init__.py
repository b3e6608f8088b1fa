"""
Request handlers for the API module.
"""

from .console_handlers import (
    handle_health,
    handle_query_get,
    handle_query_run,
    handle_query_set,
    handle_status,
)

__all__ = [
    "handle_health",
    "handle_query_get",
    "handle_query_run",
    "handle_query_set",
    "handle_status",
]
