"""Synchronous observer substrate shared by cells, collections and the graph.

Handlers run immediately, in subscription order, on the caller's stack.
Handlers registered for "all" receive the event name as their first argument,
which is how collections re-broadcast cell events and how the graph
re-broadcasts collection events.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class Events:
    """Mixin giving an object on/off/trigger and listen_to/stop_listening."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)
        self._listening_to: list[tuple[Events, str, Handler]] = []

    def on(self, event: str, handler: Handler) -> None:
        """Subscribe handler to event (space-separated names allowed)."""
        for name in event.split():
            self._handlers[name].append(handler)

    def off(self, event: str | None = None, handler: Handler | None = None) -> None:
        """Unsubscribe handlers.

        With no arguments drops every handler; with only `event` drops all
        handlers of that event; with both drops that one handler.
        """
        if event is None:
            if handler is None:
                self._handlers.clear()
                return
            names = list(self._handlers)
        else:
            names = event.split()

        for name in names:
            if handler is None:
                self._handlers.pop(name, None)
                continue
            handlers = self._handlers.get(name)
            if not handlers:
                continue
            self._handlers[name] = [h for h in handlers if h != handler]
            if not self._handlers[name]:
                del self._handlers[name]

    def trigger(self, event: str, *args: Any) -> None:
        """Call every handler of `event`, then every "all" handler."""
        # Copy: handlers may subscribe/unsubscribe while being called
        for handler in list(self._handlers.get(event, ())):
            handler(*args)
        if event != "all":
            for handler in list(self._handlers.get("all", ())):
                handler(event, *args)

    def has_handlers(self, event: str) -> bool:
        return bool(self._handlers.get(event))

    def listen_to(self, other: Events, event: str, handler: Handler) -> None:
        """Subscribe to another object, remembering it for stop_listening()."""
        other.on(event, handler)
        self._listening_to.append((other, event, handler))

    def stop_listening(self, other: Events | None = None) -> None:
        """Drop subscriptions made with listen_to (optionally only on `other`)."""
        remaining = []
        for target, event, handler in self._listening_to:
            if other is None or target is other:
                target.off(event, handler)
            else:
                remaining.append((target, event, handler))
        self._listening_to = remaining
