"""Runtime wiring package: the explicitly constructed application context."""

from .context import AppContext, create_context

__all__ = ["AppContext", "create_context"]
