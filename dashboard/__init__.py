"""Inspection routes for the action log."""

from .server import dashboard_router, set_state

__all__ = ["dashboard_router", "set_state"]
