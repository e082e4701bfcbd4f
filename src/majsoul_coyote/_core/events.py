# Area: Core
"""
majsoul_coyote._core.events — Game event source and subscription arena
======================================================================

``GameEventSource`` is a minimal in-process emitter for the normalized
game events (``mingpai``, ``riichi``, ``ron``, ``zumo``, ``liuju``,
``zhongju``). ``EventStore`` records every subscription a controller makes
so all of them can be released in one call on teardown.

Usage:
    store = EventStore()
    events = store.wrap(source)
    events.on("riichi", on_riichi)
    ...
    store.remove_all_listeners()
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Protocol, Tuple

logger = logging.getLogger("majsoul_coyote.events")

Handler = Callable[..., None]


class EventSource(Protocol):
    """Anything handlers can be attached to and detached from."""

    def on(self, event: str, handler: Handler) -> None:
        ...

    def off(self, event: str, handler: Handler) -> None:
        ...


class GameEventSource:
    """
    Synchronous named-event emitter.

    Handlers run in registration order. A failing handler is logged and
    does not prevent the remaining handlers from running.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Handler]] = {}

    def on(self, event: str, handler: Handler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def off(self, event: str, handler: Handler) -> None:
        """Remove one registration of handler. No-op if not registered."""
        handlers = self._handlers.get(event)
        if not handlers:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            return
        if not handlers:
            del self._handlers[event]

    def emit(self, event: str, *args) -> int:
        """
        Deliver an event to its handlers.

        Returns:
            Number of handlers invoked
        """
        handlers = list(self._handlers.get(event, ()))
        for handler in handlers:
            try:
                handler(*args)
            except Exception:
                logger.exception(f"Handler for '{event}' failed")
        return len(handlers)

    def listener_count(self, event: Optional[str] = None) -> int:
        if event is not None:
            return len(self._handlers.get(event, ()))
        return sum(len(h) for h in self._handlers.values())


class _WrappedSource:
    """Subscription handle returned by EventStore.wrap()."""

    def __init__(self, store: "EventStore", source: EventSource):
        self._store = store
        self._source = source

    def on(self, event: str, handler: Handler) -> "_WrappedSource":
        self._source.on(event, handler)
        self._store._record(self._source, event, handler)
        return self


class EventStore:
    """Arena of subscriptions created by one owner."""

    def __init__(self) -> None:
        self._subscriptions: List[Tuple[EventSource, str, Handler]] = []

    def wrap(self, source: EventSource) -> _WrappedSource:
        return _WrappedSource(self, source)

    def _record(self, source: EventSource, event: str, handler: Handler) -> None:
        self._subscriptions.append((source, event, handler))
        logger.debug(f"Subscribed to {event}")

    @property
    def count(self) -> int:
        return len(self._subscriptions)

    def remove_all_listeners(self) -> None:
        """Release every recorded subscription. Safe to call repeatedly."""
        subscriptions, self._subscriptions = self._subscriptions, []
        for source, event, handler in subscriptions:
            source.off(event, handler)
        if subscriptions:
            logger.debug(f"Released {len(subscriptions)} subscriptions")
