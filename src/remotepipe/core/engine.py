"""Dispatch engine: runs ``iremotepipe`` and fans its events out.

The engine launches the helper, reads its stdout line by line on a
daemon thread, decodes each line and hands the resulting
:class:`RemoteEvent` to every registered subscriber, synchronously and in
registration order.

Key behaviours:
* ``start()`` failures (missing helper, failed launch) are raised to the
  caller and leave the engine ``STOPPED``.
* ``stop()`` never waits for the read loop; the loop notices the stop
  flag at its next line boundary.  The helper gets SIGTERM, then SIGKILL
  if it is still alive after ``terminate_timeout`` seconds.
* Removing the last subscriber stops the engine.
* A subscriber that raises is **auto-unsubscribed** (logged + removed).
* Failures while running never propagate; see :attr:`last_error`.
* ``STOPPED`` is terminal.  Build a new engine to listen again.
"""

from __future__ import annotations

import itertools
import logging
import os
import subprocess
import threading
from pathlib import Path
from typing import IO, Any

from remotepipe.core.decoder import decode_line
from remotepipe.core.errors import (
    DecodeError,
    EngineStoppedError,
    LaunchError,
    ProvisioningError,
    RemoteError,
    StreamError,
)
from remotepipe.core.interfaces.listener import Subscriber, deliver
from remotepipe.core.models.config import RemoteConfig
from remotepipe.core.models.event import RemoteEvent
from remotepipe.core.models.state import EngineState
from remotepipe.core.registry import SubscriberRegistry
from remotepipe.log_config.logger import ContextualLogger

_log = logging.getLogger(__name__)

_engine_ids = itertools.count(1)


class DispatchEngine:
    """Owns one helper process, its read loop and the subscriber registry.

    Args:
        helper_path: Resolved path of the ``iremotepipe`` executable.
        name: Identifier stamped on every event as ``origin``.
        terminate_timeout: Seconds between SIGTERM and SIGKILL on shutdown.
        log_stderr: Forward the helper's stderr lines to the log.
    """

    def __init__(
        self,
        helper_path: Path | str,
        *,
        name: str | None = None,
        terminate_timeout: float = 2.0,
        log_stderr: bool = True,
    ) -> None:
        self._helper_path = Path(helper_path)
        self._name = name or f"remote-{next(_engine_ids)}"
        self._terminate_timeout = terminate_timeout
        self._log_stderr = log_stderr
        self._log = ContextualLogger(_log, engine=self._name)

        self._registry = SubscriberRegistry(on_empty=self._on_registry_empty)

        self._lock = threading.Lock()
        self._state = EngineState.CREATED
        self._stop_event = threading.Event()
        self._stopped = threading.Event()
        self._process: subprocess.Popen[str] | None = None
        self._reader: threading.Thread | None = None
        self._stderr_reader: threading.Thread | None = None
        self._kill_timer: threading.Timer | None = None
        self._last_error: RemoteError | None = None

    @classmethod
    def from_config(cls, config: RemoteConfig, name: str | None = None) -> DispatchEngine:
        """Build an engine from a validated :class:`RemoteConfig`."""
        # Imported here to avoid a cycle: remotepipe.config imports core models.
        from remotepipe.config.config_manager import resolve_helper_path

        return cls(
            resolve_helper_path(config),
            name=name,
            terminate_timeout=config.helper.terminate_timeout_seconds,
            log_stderr=config.helper.log_stderr,
        )

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def helper_path(self) -> Path:
        return self._helper_path

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is EngineState.RUNNING

    @property
    def last_error(self) -> RemoteError | None:
        """The error that ended (or prevented) the last run, if any."""
        return self._last_error

    @property
    def listeners(self) -> tuple[Any, ...]:
        return self._registry.snapshot()

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    def add_listener(self, subscriber: Subscriber) -> None:
        """Register *subscriber*; adding it twice is a no-op."""
        self._registry.add(subscriber)

    def remove_listener(self, subscriber: Subscriber) -> None:
        """Unregister *subscriber*.  Removing the last one stops the engine."""
        self._registry.remove(subscriber)

    def _on_registry_empty(self) -> None:
        self._log.info("Last listener removed, stopping")
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Verify and launch the helper, then start the read loop.

        Calling ``start()`` again while starting or running does nothing.

        Raises:
            ProvisioningError: The helper is missing or not executable.
            LaunchError: The helper could not be launched.
            EngineStoppedError: The engine has already stopped.
        """
        with self._lock:
            if self._state is EngineState.STOPPED:
                raise EngineStoppedError(f"Engine {self._name} is stopped and cannot be restarted")
            if self._state is not EngineState.CREATED:
                return
            self._state = EngineState.STARTING

        try:
            self._verify_helper()
            process = self._launch()
        except RemoteError as exc:
            self._last_error = exc
            self._log.error("Could not start helper: %s", exc)
            self._mark_stopped()
            raise

        with self._lock:
            self._process = process
            if self._state is EngineState.STARTING:
                self._state = EngineState.RUNNING

        self._log.info("Helper %s started (pid=%d)", self._helper_path, process.pid)

        if process.stderr is not None:
            self._stderr_reader = threading.Thread(
                target=self._drain_stderr,
                args=(process.stderr,),
                name=f"{self._name}-stderr",
                daemon=True,
            )
            self._stderr_reader.start()

        self._reader = threading.Thread(
            target=self._read_loop,
            args=(process,),
            name=f"{self._name}-reader",
            daemon=True,
        )
        self._reader.start()

    def stop(self) -> None:
        """Request shutdown without waiting for it.  Safe to call repeatedly."""
        with self._lock:
            if self._state in (EngineState.STOPPING, EngineState.STOPPED):
                return
            self._stop_event.set()
            if self._state is EngineState.CREATED:
                self._state = EngineState.STOPPED
                self._stopped.set()
                self._log.info("Stopped before start")
                return
            self._state = EngineState.STOPPING
            process = self._process

        self._log.info("Stop requested")
        if process is not None:
            self._request_termination(process)

    def join(self, timeout: float | None = None) -> bool:
        """Block until the engine is ``STOPPED``; return ``False`` on timeout."""
        return self._stopped.wait(timeout)

    # ------------------------------------------------------------------
    # Process handling
    # ------------------------------------------------------------------

    def _verify_helper(self) -> None:
        path = self._helper_path
        if not path.is_file():
            raise ProvisioningError(f"Helper executable not found: {path}")
        if not os.access(path, os.X_OK):
            raise ProvisioningError(f"Helper is not executable: {path}")

    def _launch(self) -> subprocess.Popen[str]:
        stderr = subprocess.PIPE if self._log_stderr else subprocess.DEVNULL
        try:
            return subprocess.Popen(
                [str(self._helper_path)],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=stderr,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as exc:
            raise LaunchError(f"Could not launch {self._helper_path}: {exc}") from exc

    def _request_termination(self, process: subprocess.Popen[str]) -> None:
        """Send SIGTERM and arm a timer that escalates to SIGKILL."""
        if process.poll() is not None:
            return
        try:
            process.terminate()
        except OSError as exc:
            self._log.debug("terminate() failed: %s", exc)
            return

        timer = threading.Timer(self._terminate_timeout, self._kill, args=(process,))
        timer.daemon = True
        timer.name = f"{self._name}-kill"
        with self._lock:
            self._kill_timer = timer
        timer.start()

    def _kill(self, process: subprocess.Popen[str]) -> None:
        if process.poll() is not None:
            return
        self._log.warning("Helper ignored SIGTERM for %.1fs, killing it", self._terminate_timeout)
        try:
            process.kill()
        except OSError as exc:
            self._log.debug("kill() failed: %s", exc)

    def _shutdown(self, process: subprocess.Popen[str]) -> None:
        """Runs on the reader thread once the loop has exited."""
        if process.poll() is None:
            try:
                process.terminate()
                process.wait(timeout=self._terminate_timeout)
            except subprocess.TimeoutExpired:
                self._log.warning("Helper did not exit after SIGTERM, killing it")
                process.kill()
                process.wait()
            except OSError as exc:
                self._log.debug("Could not terminate helper: %s", exc)

        with self._lock:
            timer, self._kill_timer = self._kill_timer, None
        if timer is not None:
            timer.cancel()

        if self._stderr_reader is not None:
            self._stderr_reader.join(timeout=self._terminate_timeout)
        if process.stdout is not None:
            process.stdout.close()

        self._log.info("Helper exited (returncode=%s)", process.returncode)
        self._mark_stopped()

    def _mark_stopped(self) -> None:
        with self._lock:
            self._process = None
            self._state = EngineState.STOPPED
            self._stop_event.set()
        self._stopped.set()

    # ------------------------------------------------------------------
    # Read loop (reader thread)
    # ------------------------------------------------------------------

    def _read_loop(self, process: subprocess.Popen[str]) -> None:
        stdout = process.stdout
        assert stdout is not None
        try:
            while not self._stop_event.is_set():
                try:
                    line = stdout.readline()
                except (OSError, ValueError) as exc:
                    if not self._stop_event.is_set():
                        self._last_error = StreamError(f"Reading helper output failed: {exc}")
                        self._log.exception("Reading helper output failed")
                    break

                if not line:
                    if not self._stop_event.is_set():
                        self._log.info("Helper closed its output")
                    break
                # Lines already buffered when stop() lands are dropped.
                if self._stop_event.is_set():
                    break

                self._dispatch_line(line)
        finally:
            self._shutdown(process)

    def _dispatch_line(self, line: str) -> None:
        try:
            event = decode_line(line, origin=self._name)
        except DecodeError as exc:
            self._log.debug("Skipping line: %s", exc)
            return
        self._deliver(event)

    def _deliver(self, event: RemoteEvent) -> None:
        for subscriber in self._registry.snapshot():
            try:
                deliver(subscriber, event)
            except Exception:
                self._log.exception(
                    "Subscriber %r raised on %s/%s, auto-unsubscribing",
                    subscriber,
                    event.button.value,
                    event.phase.value,
                )
                self._registry.remove(subscriber)

    def _drain_stderr(self, stream: IO[str]) -> None:
        try:
            for line in stream:
                text = line.rstrip()
                if text:
                    self._log.warning("helper stderr: %s", text)
        except (OSError, ValueError) as exc:
            self._log.debug("stderr reader stopped: %s", exc)
        finally:
            stream.close()

    def __repr__(self) -> str:
        return f"DispatchEngine(name={self._name!r}, state={self._state.value}, helper={str(self._helper_path)!r})"
