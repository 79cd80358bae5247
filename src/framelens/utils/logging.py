"""Logging setup utilities for framelens.

Configures the ``framelens`` logger hierarchy from the logging section
of the settings and quiets the chattier third-party loggers (Pillow's
PNG plugin, pytesseract) that would otherwise flood debug output.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from framelens.config.settings import LoggingConfig

PACKAGE_LOGGER = "framelens"
_HANDLER_NAME = "framelens"


def _framelens_handlers(config: LoggingConfig) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        path = Path(config.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    formatter = logging.Formatter(config.format)
    for handler in handlers:
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure logging for the framelens package.

    Only handlers previously installed by this function are replaced, so
    repeated calls (``-v`` after a config load, tests) do not duplicate
    output and handlers attached by the host application survive.

    Args:
        config: Logging configuration. If None, uses defaults
                (INFO level, stderr output).
    """
    if config is None:
        config = LoggingConfig()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))

    for handler in list(package_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(handler)
            handler.close()

    for handler in _framelens_handlers(config):
        package_logger.addHandler(handler)

    for name in config.quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)

    package_logger.info(
        "Logging initialized at %s level%s",
        config.level,
        f", writing to {config.file}" if config.file else "",
    )
