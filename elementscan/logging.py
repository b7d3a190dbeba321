"""Logging utilities for elementscan commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

_LOGGER_NAME = "elementscan"

LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Sub-loggers given their own level by the last configure_logging call.
_tuned: set[str] = set()


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the elementscan hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def parse_level(level: str | int) -> int:
    """Return the numeric level for a name such as ``"debug"``."""
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name not in LEVEL_NAMES:
        raise ValueError(f"Unknown log level {level!r}; expected one of {', '.join(LEVEL_NAMES)}")
    return getattr(logging, name)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    levels: Mapping[str, str | int] | None = None,
) -> logging.Logger:
    """Configure the elementscan logger.

    ``levels`` maps sub-logger names (``"polymer.finder"``,
    ``"analyzers.elements"``) to a level of their own, so one part of the
    pipeline can be traced without turning on debug output everywhere.
    Handlers carry no level of their own; the loggers decide what is emitted.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for name in _tuned:
        get_logger(name).setLevel(logging.NOTSET)
    _tuned.clear()

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter("[elementscan] %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    for name, module_level in (levels or {}).items():
        get_logger(name).setLevel(parse_level(module_level))
        _tuned.add(name)

    return logger


__all__ = ["LEVEL_NAMES", "configure_logging", "get_logger", "parse_level"]
