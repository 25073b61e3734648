"""
Logging setup shared by the API process and scripts.
"""
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger("txguard")
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
