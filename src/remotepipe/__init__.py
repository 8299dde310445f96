"""remotepipe: Apple remote events from the ``iremotepipe`` helper."""

from remotepipe.core.decoder import decode_line
from remotepipe.core.engine import DispatchEngine
from remotepipe.core.errors import (
    DecodeError,
    EngineStoppedError,
    LaunchError,
    ProvisioningError,
    RemoteError,
    StreamError,
)
from remotepipe.core.interfaces.listener import RemoteListener
from remotepipe.core.models.event import RemoteEvent
from remotepipe.core.models.state import Button, EngineState, Phase

__version__ = "1.0.0"

__all__ = [
    "Button",
    "DecodeError",
    "DispatchEngine",
    "EngineState",
    "EngineStoppedError",
    "LaunchError",
    "Phase",
    "ProvisioningError",
    "RemoteError",
    "RemoteEvent",
    "RemoteListener",
    "StreamError",
    "decode_line",
]
