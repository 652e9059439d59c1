"""Named, reentrant batch counters.

A batch marks a group of mutations that belong to one logical operation so
observers can defer expensive work until the outermost batch closes. Batches
do not defer, queue or roll back anything.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterable, Iterator

logger = logging.getLogger(__name__)


class BatchTracker:
    """Depth counter per batch name.

    `notify(event, payload)` is called with "batch:start" / "batch:stop" and
    the caller's data plus `batch_name`.
    """

    def __init__(self, notify: Callable[[str, dict[str, Any]], None] | None = None):
        self._depths: dict[str, int] = {}
        self._notify = notify

    def start_batch(self, name: str, **data: Any) -> None:
        self._depths[name] = self._depths.get(name, 0) + 1
        logger.debug(f"Batch {name!r} started (depth {self._depths[name]})")
        if self._notify is not None:
            self._notify("batch:start", {**data, "batch_name": name})

    def stop_batch(self, name: str, **data: Any) -> None:
        depth = self._depths.get(name, 0) - 1
        self._depths[name] = depth
        if depth < 0:
            logger.warning(f"Batch {name!r} stopped more often than started (depth {depth})")
        if self._notify is not None:
            self._notify("batch:stop", {**data, "batch_name": name})

    def has_active_batch(self, name: str | Iterable[str] | None = None) -> bool:
        """True if any (or any of the named) batches is running."""
        if name is None:
            names: Iterable[str] = self._depths.keys()
        elif isinstance(name, str):
            names = [name]
        else:
            names = name
        return any(self._depths.get(n, 0) > 0 for n in names)

    def depth(self, name: str) -> int:
        return self._depths.get(name, 0)

    @contextmanager
    def batch(self, name: str, **data: Any) -> Iterator[None]:
        """Run the body inside a batch; the stop fires even on error."""
        self.start_batch(name, **data)
        try:
            yield
        finally:
            self.stop_batch(name, **data)
