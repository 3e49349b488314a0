"""Hierarchical action timestamp log."""

from .tree import ActionLog

__all__ = ["ActionLog"]
