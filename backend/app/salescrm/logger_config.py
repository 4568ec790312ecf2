"""Console loggers sharing uvicorn's colored level prefix."""

import logging
from typing import Optional

from uvicorn.logging import DefaultFormatter

from configs import settings

FORMAT = "%(levelprefix)s %(asctime)s [%(threadName)s] [%(name)s] %(message)s"


def get_logger(name: str = __name__, level: Optional[str] = None) -> logging.Logger:
    """Return a logger with a single stream handler, at ``LOG_LEVEL`` by default."""
    level = (level or settings.LOG_LEVEL).upper()
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(DefaultFormatter(FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    return logger
