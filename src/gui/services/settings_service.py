"""Runtime settings for the task table.

A small dataclass of behavior toggles, injected into the view model. The
``instance`` class attribute mirrors the app-wide default so code without an
explicit settings object still gets consistent behavior.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from config import settings as config


@dataclass
class SettingsService:
    """Runtime settings and feature flags.

    Attributes:
        write_through_toggles: When True (default), toggling a field persists
            the collection immediately, the same way deletes do. When False
            toggles stay in memory until an explicit ``save()`` and may be
            lost if the session ends first.
        default_page_size: Page size used when a view is first shown. Must be
            one of ``config.settings.PAGE_SIZE_OPTIONS``.
    """

    instance: ClassVar["SettingsService"]

    write_through_toggles: bool = True
    default_page_size: int = config.DEFAULT_PAGE_SIZE


SettingsService.instance = SettingsService()
