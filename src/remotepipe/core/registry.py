"""Subscriber registry: copy-on-write list of event subscribers.

Delivery reads far outnumber add/remove calls, so readers never lock:
:meth:`SubscriberRegistry.snapshot` returns the current immutable tuple,
and writers swap in a replacement tuple under a lock.  A delivery pass
iterating over an old snapshot is unaffected by concurrent mutation.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Iterator

_log = logging.getLogger(__name__)


class SubscriberRegistry:
    """Ordered set of subscribers, safe to mutate during delivery.

    Equality is ``==``: the same object (or the same bound method) is never
    registered twice.

    Args:
        on_empty: Called (outside the lock) whenever :meth:`remove` turns a
            non-empty registry into an empty one.
    """

    def __init__(self, on_empty: Callable[[], None] | None = None) -> None:
        self._on_empty = on_empty
        self._lock = threading.Lock()
        self._subscribers: tuple[Any, ...] = ()

    def add(self, subscriber: Any) -> None:
        """Append *subscriber* unless it is already registered."""
        with self._lock:
            if subscriber in self._subscribers:
                _log.debug("Subscriber %r already registered", subscriber)
                return
            self._subscribers = self._subscribers + (subscriber,)

    def remove(self, subscriber: Any) -> None:
        """Remove *subscriber* if present; fire ``on_empty`` on the last removal."""
        with self._lock:
            current = self._subscribers
            if subscriber not in current:
                return
            self._subscribers = tuple(s for s in current if s != subscriber)
            became_empty = not self._subscribers

        if became_empty and self._on_empty is not None:
            self._on_empty()

    def clear(self) -> None:
        """Drop every subscriber without firing ``on_empty``."""
        with self._lock:
            self._subscribers = ()

    def snapshot(self) -> tuple[Any, ...]:
        """Return a point-in-time, immutable view for one delivery pass."""
        return self._subscribers

    def __len__(self) -> int:
        return len(self._subscribers)

    def __contains__(self, subscriber: object) -> bool:
        return subscriber in self._subscribers

    def __iter__(self) -> Iterator[Any]:
        return iter(self._subscribers)
