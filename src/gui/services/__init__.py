"""Service layer exports.

Responsibilities:
 - EventBus publish/subscribe core
 - Logging configuration and in-app log buffer
 - Runtime settings
"""

from .event_bus import EventBus, GUIEvent  # noqa: F401
from .logging_service import LoggingService, configure_logging  # noqa: F401
from .settings_service import SettingsService  # noqa: F401

__all__ = [
    "EventBus",
    "GUIEvent",
    "LoggingService",
    "configure_logging",
    "SettingsService",
]
