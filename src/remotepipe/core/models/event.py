"""Pydantic model for decoded remote-control events."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from remotepipe.core.models.state import Button, Phase


class RemoteEvent(BaseModel):
    """One decoded button event, as delivered to subscribers."""

    model_config = ConfigDict(frozen=True)

    button: Button
    phase: Phase
    origin: str | None = Field(default=None, description="Name of the engine that produced the event")
    raw_line: str = Field(description="The helper's output line, verbatim")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def kind(self) -> tuple[Button, Phase]:
        return (self.button, self.phase)
