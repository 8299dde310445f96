"""Config manager: load JSON, apply env overrides, validate to RemoteConfig."""

from __future__ import annotations

import json
import logging
import os
import shutil
from pathlib import Path

from remotepipe.core.models.config import RemoteConfig

_log = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "remote_config.json"

HELPER_FILE_NAME = "iremotepipe"

# Where an installer drops the helper when the config names no path.
DEFAULT_HELPER_PATH = (
    Path.home() / "Library" / "Application Support" / "remotepipe" / HELPER_FILE_NAME
)

# Environment variable → ``(section, field, type)``.
_ENV_OVERRIDES: dict[str, tuple[str, str, type]] = {
    "REMOTEPIPE_LOG_LEVEL": ("system", "log_level", str),
    "REMOTEPIPE_LOG_DIR": ("system", "log_dir", str),
    "REMOTEPIPE_HELPER_PATH": ("helper", "path", str),
    "REMOTEPIPE_LOG_STDERR": ("helper", "log_stderr", bool),
    "REMOTEPIPE_TERMINATE_TIMEOUT": ("helper", "terminate_timeout_seconds", float),
}


def _coerce(value: str, target_type: type) -> object:
    """Coerce a boolean env-var value; other types are left to pydantic."""
    if target_type is bool:
        return value.strip().lower() in ("1", "true", "yes")
    return value


def load_config(config_path: Path | str | None = None) -> RemoteConfig:
    """Load, override, and validate the configuration.

    Args:
        config_path: Path to a JSON config file.  When *None*, falls back to
            the ``REMOTEPIPE_CONFIG_FILE`` env-var and then the packaged
            ``remote_config.json``.

    Returns:
        A validated :class:`RemoteConfig`.

    Raises:
        FileNotFoundError: If the config file does not exist.
        pydantic.ValidationError: If the merged values are invalid.
    """
    path = _resolve_config_path(config_path)
    _log.info("Loading config from %s", path)

    raw = json.loads(path.read_text(encoding="utf-8"))

    for env_key, (section, field, typ) in _ENV_OVERRIDES.items():
        env_val = os.environ.get(env_key)
        if env_val is not None:
            raw.setdefault(section, {})[field] = _coerce(env_val, typ)
            _log.debug("Env override: %s -> %s.%s = %r", env_key, section, field, env_val)

    return RemoteConfig(**raw)


def resolve_helper_path(config: RemoteConfig) -> Path:
    """Return where the helper executable should be.

    Order: ``helper.path`` from the config, the default install location,
    then ``iremotepipe`` on ``PATH``.  When none exists the default install
    location is returned so that the engine reports it as missing.
    """
    if config.helper.path:
        return Path(config.helper.path).expanduser()
    if DEFAULT_HELPER_PATH.is_file():
        return DEFAULT_HELPER_PATH
    found = shutil.which(HELPER_FILE_NAME)
    if found:
        _log.debug("Using %s from PATH", found)
        return Path(found)
    return DEFAULT_HELPER_PATH


def _resolve_config_path(config_path: Path | str | None) -> Path:
    if config_path is not None:
        p = Path(config_path)
    else:
        env = os.environ.get("REMOTEPIPE_CONFIG_FILE")
        p = Path(env) if env else _DEFAULT_CONFIG_PATH
    if not p.is_file():
        raise FileNotFoundError(
            f"Config file not found: {p}\n"
            "Create remote_config.json or set REMOTEPIPE_CONFIG_FILE to a valid path."
        )
    return p
