"""Logging from config and env.

Levels (inclusive):
- ERROR: failed commands and startup errors
- WARNING: best-effort steps that failed, failing subprocesses
- INFO: service messages, ignored comments, command results
- DEBUG: payload details and every spawned process

Configure via config.yaml (logging.level, logging.format) or env (LOGGING_LEVEL, LOGGING_FORMAT).
"""

import logging

from botman.config import LoggingConfig

# Supported levels only (DEBUG, INFO, WARNING, ERROR)
LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty libraries under the shared GitHub session; kept at WARNING unless DEBUG is asked for
NOISY_LOGGERS = ("urllib3",)


def _resolve_level(level: str) -> int:
    """Map level name to logging constant.

    Falls back to INFO if unknown.
    """
    return LEVELS.get(level.upper().strip(), logging.INFO)


class BotmanLogging:
    """Configures root logger from LoggingConfig (YAML + env LOGGING_*)."""

    def __init__(self, config: LoggingConfig) -> None:
        self._level = _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT

    def setup(self) -> None:
        """Apply level and format to the root logger and quiet urllib3."""
        logging.basicConfig(
            level=self._level,
            format=self._format,
            force=True,
        )
        noisy_level = self._level if self._level == logging.DEBUG else max(self._level, logging.WARNING)
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(noisy_level)

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name)
