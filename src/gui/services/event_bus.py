"""EventBus core.

Synchronous publish/subscribe used between the task table view model and
whatever renders it (the Qt view, tests, diagnostics).

All work happens on the single UI thread: a publish runs every handler to
completion before returning. A failing handler is logged and recorded in
``errors`` but never stops the remaining handlers or the publisher.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from time import perf_counter
from typing import Any, Dict, List, Protocol, Tuple

__all__ = [
    "GUIEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]

_log = logging.getLogger(__name__)


class GUIEvent(str, Enum):  # str subclass so names compare equal to plain strings
    RECORDS_LOADED = "records_loaded"
    RECORDS_CHANGED = "records_changed"
    SORT_CHANGED = "sort_changed"
    PAGE_CHANGED = "page_changed"
    PERSIST_FAILED = "persist_failed"


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float


class EventHandler(Protocol):
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | GUIEvent) -> str:
    return name.value if isinstance(name, GUIEvent) else name


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[Tuple[Event, BaseException]] = []

    def subscribe(
        self, name: str | GUIEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        bucket = self._subs.get(sub.event, [])
        self._subs[sub.event] = [s for s in bucket if s is not sub]
        if not self._subs[sub.event]:
            del self._subs[sub.event]
        sub.active = False

    def publish(self, name: str | GUIEvent, payload: Any = None) -> Event:
        evt = Event(name=_key(name), payload=payload, timestamp=perf_counter())
        # Snapshot so handlers may (un)subscribe while being dispatched
        for sub in list(self._subs.get(evt.name, ())):
            if not sub.active:
                continue
            if sub.once:
                self.unsubscribe(sub)
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                _log.exception("Handler for %s failed", evt.name)
                self._errors.append((evt, exc))
        return evt

    def subscriber_count(self, name: str | GUIEvent) -> int:
        return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> List[Tuple[Event, BaseException]]:
        return list(self._errors)

    def clear(self) -> None:
        self._subs.clear()
        self._errors.clear()
