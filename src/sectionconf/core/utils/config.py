"""Library-level settings for sectionconf itself."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Any, Optional

from dotenv import find_dotenv, load_dotenv

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    """Settings for the package logger."""

    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LibraryConfig:
    """
    Settings that control sectionconf's own behaviour.

    Values start from defaults and are overridden by environment variables,
    which may themselves come from a ``.env`` file in the working directory.
    """

    def __init__(self):
        self.logging = LoggingConfig()
        self._load_from_env()

    def _load_from_env(self):
        """
        Load configuration from environment variables.

        Supported environment variables:
        - SECTIONCONF_LOG_LEVEL: Logging level
        - SECTIONCONF_LOG_FILE: Log file path
        - SECTIONCONF_LOG_FORMAT: Log record format string
        """
        log_level = os.getenv("SECTIONCONF_LOG_LEVEL")
        if log_level and log_level.strip().upper() in VALID_LOG_LEVELS:
            self.logging.level = log_level.strip().upper()

        log_file = os.getenv("SECTIONCONF_LOG_FILE")
        if log_file:
            self.logging.file = log_file

        log_format = os.getenv("SECTIONCONF_LOG_FORMAT")
        if log_format:
            self.logging.format = log_format

    def to_dict(self) -> dict[str, Any]:
        return {"logging": asdict(self.logging)}


# Global configuration instance
_config: LibraryConfig | None = None
_env_loaded = False


def _load_dotenv() -> None:
    global _env_loaded
    if _env_loaded:
        return
    _env_loaded = True
    env_path = find_dotenv(usecwd=True)
    if env_path:
        load_dotenv(dotenv_path=env_path, override=False)


def get_config() -> LibraryConfig:
    """Get the global library configuration instance."""
    global _config
    if _config is None:
        _load_dotenv()
        _config = LibraryConfig()
    return _config


def set_config(config: LibraryConfig) -> None:
    """Set the global library configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Drop the cached configuration so the next access re-reads the environment."""
    global _config
    _config = None
