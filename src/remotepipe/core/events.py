"""Well-known event kinds and the helper's wire vocabulary.

Defined centrally so the decoder, listeners and tests agree on which
``(Button, Phase)`` pairs exist.
"""

from __future__ import annotations

from remotepipe.core.models.state import Button, Phase

# --- Wire tokens (``type`` field of iremotepipe output) ------------------

TYPE_UP = "up"
TYPE_DOWN = "down"
TYPE_LEFT = "left"
TYPE_RIGHT = "right"
TYPE_PLAY = "play"
TYPE_SLEEP = "sleep"
TYPE_MENU = "menu"
TYPE_OK = "ok"

# Buttons that report a hold as a start/stop pair.
HOLDABLE_TOKENS: dict[str, Button] = {
    TYPE_UP: Button.VOLUME_UP,
    TYPE_DOWN: Button.VOLUME_DOWN,
    TYPE_LEFT: Button.PREVIOUS,
    TYPE_RIGHT: Button.NEXT,
}

# --- Supported phases per button -----------------------------------------

SUPPORTED_PHASES: dict[Button, tuple[Phase, ...]] = {
    Button.VOLUME_UP: (Phase.PRESSED, Phase.HOLD_STARTED, Phase.HOLD_STOPPED),
    Button.VOLUME_DOWN: (Phase.PRESSED, Phase.HOLD_STARTED, Phase.HOLD_STOPPED),
    Button.PREVIOUS: (Phase.PRESSED, Phase.HOLD_STARTED, Phase.HOLD_STOPPED),
    Button.NEXT: (Phase.PRESSED, Phase.HOLD_STARTED, Phase.HOLD_STOPPED),
    # A long hold is a single terminal notification, with no start signal.
    Button.PLAY_PAUSE: (Phase.PRESSED, Phase.HELD),
    Button.MENU: (Phase.PRESSED, Phase.HELD),
    # Aluminum remote only.
    Button.SELECT: (Phase.PRESSED,),
}

EVENT_KINDS: tuple[tuple[Button, Phase], ...] = tuple(
    (button, phase) for button, phases in SUPPORTED_PHASES.items() for phase in phases
)


def handler_name(button: Button, phase: Phase) -> str:
    """Return the listener method name for an event kind, e.g. ``on_menu_held``."""
    return f"on_{button.value}_{phase.value}"
