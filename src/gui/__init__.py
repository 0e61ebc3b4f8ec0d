"""Epic Todo GUI public API.

Small surface for external callers (launcher, tests). Avoids side-effect
heavy imports: no QApplication is created here and PyQt6 is not imported.
"""

from __future__ import annotations

from .services.event_bus import (  # noqa: F401
    EventBus,
    GUIEvent,
    Event,
)
from .app.bootstrap import AppContext, create_app  # noqa: F401

__all__ = [
    "EventBus",
    "GUIEvent",
    "Event",
    "AppContext",
    "create_app",
]
