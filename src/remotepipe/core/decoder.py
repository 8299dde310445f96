"""Line decoder: one line of ``iremotepipe`` output → :class:`RemoteEvent`.

The helper prints one compact record per button event::

    {"type":"up","hold":true,"pressed":true}

Only this exact three-field shape is understood.  Reordered, extra or
missing fields are reported as :class:`DecodeError`; the wire format is
owned by the helper and is not versioned, so the decoder does not guess.
"""

from __future__ import annotations

import re

from remotepipe.core import events
from remotepipe.core.errors import DecodeError
from remotepipe.core.models.event import RemoteEvent
from remotepipe.core.models.state import Button, Phase

_LINE_RE = re.compile(
    r"""
    \{\s*
    "type"\s*:\s*"(?P<type>[^"]*)"\s*,\s*
    "hold"\s*:\s*(?P<hold>true|false)\s*,\s*
    "pressed"\s*:\s*(?P<pressed>true|false)\s*
    \}
    """,
    re.VERBOSE,
)


def decode_line(line: str, origin: str | None = None) -> RemoteEvent:
    """Decode *line* into a :class:`RemoteEvent` stamped with *origin*.

    Raises:
        DecodeError: If *line* is not a recognised helper record.
    """
    if not isinstance(line, str):
        raise DecodeError(line, "not a text line")
    raw = line.rstrip("\r\n")
    match = _LINE_RE.fullmatch(raw.strip())
    if match is None:
        raise DecodeError(raw, "unrecognised line format")

    token = match.group("type")
    hold = match.group("hold") == "true"
    pressed = match.group("pressed") == "true"
    try:
        button, phase = classify(token, hold, pressed)
    except DecodeError as exc:
        raise DecodeError(raw, f"{exc.reason} {token!r}") from None
    return RemoteEvent(button=button, phase=phase, origin=origin, raw_line=raw)


def classify(token: str, hold: bool, pressed: bool) -> tuple[Button, Phase]:
    """Map a wire ``type`` token and its flags to a ``(Button, Phase)`` pair.

    ``play``, ``sleep`` and ``ok`` ignore both flags, ``menu`` ignores
    ``pressed``: the helper never emits the other combinations for them.
    """
    button = events.HOLDABLE_TOKENS.get(token)
    if button is not None:
        if not hold:
            return button, Phase.PRESSED
        return button, Phase.HOLD_STARTED if pressed else Phase.HOLD_STOPPED

    if token == events.TYPE_PLAY:
        return Button.PLAY_PAUSE, Phase.PRESSED
    if token == events.TYPE_SLEEP:
        return Button.PLAY_PAUSE, Phase.HELD
    if token == events.TYPE_MENU:
        return Button.MENU, Phase.HELD if hold else Phase.PRESSED
    if token == events.TYPE_OK:
        return Button.SELECT, Phase.PRESSED

    raise DecodeError(token, "unknown type token")
