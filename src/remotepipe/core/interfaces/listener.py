"""Subscriber interface for remote events.

Any callable ``handler(event)`` or any object with a ``handle(event)``
method may subscribe to an engine.  :class:`RemoteListener` is a
convenience base class that routes each event to a per-kind method such
as ``on_volume_up_hold_started``; methods a subclass does not override
are no-ops.  Any other object gets the same per-kind hooks, and kinds it
has no hook for are ignored.
"""

from __future__ import annotations

from typing import Callable, Protocol, Union, runtime_checkable

from remotepipe.core import events
from remotepipe.core.models.event import RemoteEvent
from remotepipe.core.models.state import Button, Phase


@runtime_checkable
class EventHandler(Protocol):
    """Anything with a ``handle(event)`` method."""

    def handle(self, event: RemoteEvent) -> None: ...


Subscriber = Union[EventHandler, Callable[[RemoteEvent], object]]

# (Button, Phase) → listener method name
_DISPATCH_TABLE: dict[tuple[Button, Phase], str] = {
    kind: events.handler_name(*kind) for kind in events.EVENT_KINDS
}


def deliver(subscriber: Subscriber, event: RemoteEvent) -> None:
    """Hand *event* to *subscriber*, whichever form it takes.

    Objects with neither ``handle`` nor ``__call__`` get the matching
    ``on_<button>_<phase>`` hook; a missing hook means the kind is ignored.
    """
    handle = getattr(subscriber, "handle", None)
    if callable(handle):
        handle(event)
        return
    if callable(subscriber):
        subscriber(event)
        return
    name = _DISPATCH_TABLE.get(event.kind)
    hook = getattr(subscriber, name, None) if name is not None else None
    if callable(hook):
        hook(event)


class RemoteListener:
    """Base class with one no-op hook per event kind."""

    def handle(self, event: RemoteEvent) -> None:
        name = _DISPATCH_TABLE.get(event.kind)
        if name is None:
            return
        getattr(self, name)(event)

    # -- Volume Up ------------------------------------------------------

    def on_volume_up_pressed(self, event: RemoteEvent) -> None:
        pass

    def on_volume_up_hold_started(self, event: RemoteEvent) -> None:
        pass

    def on_volume_up_hold_stopped(self, event: RemoteEvent) -> None:
        pass

    # -- Volume Down ----------------------------------------------------

    def on_volume_down_pressed(self, event: RemoteEvent) -> None:
        pass

    def on_volume_down_hold_started(self, event: RemoteEvent) -> None:
        pass

    def on_volume_down_hold_stopped(self, event: RemoteEvent) -> None:
        pass

    # -- Previous -------------------------------------------------------

    def on_previous_pressed(self, event: RemoteEvent) -> None:
        pass

    def on_previous_hold_started(self, event: RemoteEvent) -> None:
        pass

    def on_previous_hold_stopped(self, event: RemoteEvent) -> None:
        pass

    # -- Next -----------------------------------------------------------

    def on_next_pressed(self, event: RemoteEvent) -> None:
        pass

    def on_next_hold_started(self, event: RemoteEvent) -> None:
        pass

    def on_next_hold_stopped(self, event: RemoteEvent) -> None:
        pass

    # -- Play/Pause (hold is a single "held" signal) --------------------

    def on_play_pause_pressed(self, event: RemoteEvent) -> None:
        pass

    def on_play_pause_held(self, event: RemoteEvent) -> None:
        pass

    # -- Menu -----------------------------------------------------------

    def on_menu_pressed(self, event: RemoteEvent) -> None:
        pass

    def on_menu_held(self, event: RemoteEvent) -> None:
        pass

    # -- Select (aluminum remote only, no hold) -------------------------

    def on_select_pressed(self, event: RemoteEvent) -> None:
        pass
