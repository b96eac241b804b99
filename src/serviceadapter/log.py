from __future__ import annotations

import logging

LOGGER_NAME = "serviceadapter"


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Library modules only ever log through their module loggers; hosts
    that want output call this once.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[serviceadapter] %(levelname)s %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
