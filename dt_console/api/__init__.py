"""
API module for dt_console.

This module contains the HTTP layer exposing the status widget and the query
panel to the renderer. It uses the core module for all behaviour.
"""

from .app import app_factory

__all__ = ["app_factory"]
