"""Subscriber interfaces."""

from remotepipe.core.interfaces.listener import (
    EventHandler,
    RemoteListener,
    Subscriber,
    deliver,
)

__all__ = [
    "EventHandler",
    "RemoteListener",
    "Subscriber",
    "deliver",
]
