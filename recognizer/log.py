import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    LOG_LEVEL in the environment overrides `level`. Only adds a handler once;
    the level is (re)applied on each call.
    """
    logger = logging.getLogger("recognizer")
    level_name = os.getenv("LOG_LEVEL", level or "WARNING").upper()
    logger.setLevel(getattr(logging, level_name, logging.WARNING))

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
