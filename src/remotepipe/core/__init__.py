"""Core services: line decoding, subscriber registry, dispatch engine."""

from remotepipe.core.decoder import decode_line
from remotepipe.core.engine import DispatchEngine
from remotepipe.core.interfaces.listener import RemoteListener
from remotepipe.core.registry import SubscriberRegistry

__all__ = [
    "decode_line",
    "DispatchEngine",
    "RemoteListener",
    "SubscriberRegistry",
]
