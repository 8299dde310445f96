"""Pydantic models for configuration, events, and enumerations."""
from remotepipe.core.models.config import HelperConfig, RemoteConfig, SystemConfig
from remotepipe.core.models.event import RemoteEvent
from remotepipe.core.models.state import Button, EngineState, Phase

__all__ = [
    "HelperConfig",
    "RemoteConfig",
    "SystemConfig",
    "RemoteEvent",
    "Button",
    "EngineState",
    "Phase",
]
