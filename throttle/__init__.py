"""Request throttling and action tracking."""

from .manager import RequestManager
from .tracker import TRACKING_SENTINEL, action_tracker

__all__ = ["RequestManager", "TRACKING_SENTINEL", "action_tracker"]
