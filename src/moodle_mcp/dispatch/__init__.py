"""Tool dispatch over the declarative registry."""

from .dispatcher import ToolDispatcher

__all__ = ["ToolDispatcher"]
