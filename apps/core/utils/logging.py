from __future__ import annotations

import logging
from typing import Any

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def log_event(logger: logging.Logger, level: str, message: str, *args: Any, **extra: Any) -> None:
    """
    Structured logging helper. ``extra`` keyword arguments travel as the
    record's ``event`` attribute; unknown levels log at INFO.
    """
    logger.log(_LEVELS.get(level, logging.INFO), message, *args, extra={"event": extra})
