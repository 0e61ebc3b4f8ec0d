"""Application layer for GUI bootstrap and lifecycle management."""

from .bootstrap import AppContext, create_app, create_store, BACKENDS  # noqa: F401

__all__ = [
    "AppContext",
    "create_app",
    "create_store",
    "BACKENDS",
]
