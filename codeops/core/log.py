# codeops/core/log.py
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

def configure_logging(level: str = "INFO") -> logging.Logger:
    """Install one handler on the package logger; later calls only adjust the level."""
    logger = logging.getLogger("codeops")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    return logger
