"""Configuration: config manager and the packaged JSON defaults."""

from remotepipe.config.config_manager import (
    DEFAULT_HELPER_PATH,
    HELPER_FILE_NAME,
    load_config,
    resolve_helper_path,
)

__all__ = [
    "DEFAULT_HELPER_PATH",
    "HELPER_FILE_NAME",
    "load_config",
    "resolve_helper_path",
]
