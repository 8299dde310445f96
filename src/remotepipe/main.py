"""remotepipe console entry point (composition root).

Wires together: Config → logging → DispatchEngine → a listener that logs
every event.  Runs until the helper exits or Ctrl-C.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from pydantic import ValidationError

from remotepipe.config.config_manager import load_config
from remotepipe.core.engine import DispatchEngine
from remotepipe.core.errors import RemoteError
from remotepipe.core.models.event import RemoteEvent
from remotepipe.log_config.logger import get_logger, setup_logging

_log = get_logger(__name__)


class LoggingListener:
    """Logs each event it receives."""

    def handle(self, event: RemoteEvent) -> None:
        _log.info("%s %s  (%s)", event.button.value, event.phase.value, event.raw_line)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="remotepipe", description="Print Apple remote events.")
    parser.add_argument("--config", help="Path to a remote_config.json file")
    parser.add_argument("--log-level", help="Override the configured log level")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    # 1. Console logging until the configured handlers are known
    setup_logging(args.log_level or "INFO", None)

    # 2. Load configuration
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValidationError) as exc:
        _log.error("Invalid configuration: %s", exc)
        return 1
    setup_logging(args.log_level or config.system.log_level, config.system.log_dir)
    _log.info("Starting remotepipe")

    # 3. Build the engine and subscribe
    engine = DispatchEngine.from_config(config)
    engine.add_listener(LoggingListener())

    # 4. Start the helper
    try:
        engine.start()
    except RemoteError as exc:
        _log.error("Could not start: %s", exc)
        return 1

    # 5. Wait for the helper to exit (polling keeps Ctrl-C responsive)
    try:
        while not engine.join(timeout=0.5):
            pass
    except KeyboardInterrupt:
        _log.info("Interrupted, stopping")
        engine.stop()
        engine.join(timeout=5.0)

    if engine.last_error is not None:
        _log.error("Stopped after error: %s", engine.last_error)
        return 1
    _log.info("remotepipe stopped")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
