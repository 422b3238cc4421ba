from __future__ import annotations

import logging
import os
import sys

import colorlog

HANDLER_NAME = "carmatch"
LOG_FORMAT = "%(log_color)s%(asctime)s %(levelname)-8s [%(name)s]%(reset)s %(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}
QUIET_LOGGERS = ("redis", "urllib3")


def configure_logging(level: int | str | None = None) -> logging.Handler:
    """
    Attach the service's coloured stdout handler to the root logger.

    Safe to call repeatedly: a handler installed by an earlier call is
    replaced, handlers owned by anything else are left in place.
    """
    level = level or os.getenv("LOG_LEVEL", "INFO").upper()

    handler = colorlog.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(colorlog.ColoredFormatter(LOG_FORMAT, datefmt="%H:%M:%S", log_colors=LOG_COLORS))

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
