"""Enumerations for remote buttons, event phases and engine lifecycle."""

from __future__ import annotations

from enum import Enum


class Button(str, Enum):
    """All button types on the white and the aluminum Apple remotes."""

    VOLUME_UP = "volume_up"
    VOLUME_DOWN = "volume_down"
    PREVIOUS = "previous"
    NEXT = "next"
    PLAY_PAUSE = "play_pause"
    MENU = "menu"
    SELECT = "select"


class Phase(str, Enum):
    """The moment within a button interaction that an event reports."""

    PRESSED = "pressed"
    HOLD_STARTED = "hold_started"
    HOLD_STOPPED = "hold_stopped"
    HELD = "held"


class EngineState(str, Enum):
    """Lifecycle of a :class:`~remotepipe.core.engine.DispatchEngine`.

    ``STOPPED`` is terminal.
    """

    CREATED = "created"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"
