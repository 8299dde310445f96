"""Exception hierarchy for the remote event engine."""

from __future__ import annotations


class RemoteError(Exception):
    """Base class for every error raised by :mod:`remotepipe`."""


class ProvisioningError(RemoteError):
    """The helper executable is missing or not executable."""


class LaunchError(RemoteError):
    """The helper executable exists but the process could not be started."""


class StreamError(RemoteError):
    """Reading the helper's output failed while the engine was running."""


class EngineStoppedError(RemoteError):
    """A stopped engine was asked to start again."""


class DecodeError(RemoteError, ValueError):
    """A helper output line does not match the known wire vocabulary."""

    def __init__(self, line: object, reason: str) -> None:
        super().__init__(f"{reason}: {line!r}")
        self.line = line
        self.reason = reason
