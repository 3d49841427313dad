"""Logging setup for Neural Scribe."""

import logging

from neuralscribe.config import LOG_FILE, LOG_LEVEL

logger = logging.getLogger("neuralscribe")


def setup_logging() -> logging.Logger:
    """Set up file and console logging for Neural Scribe."""
    level = getattr(logging, LOG_LEVEL.upper(), logging.INFO)

    if logger.handlers:
        return logger

    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(LOG_FILE)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    ))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    ))

    logger.setLevel(level)
    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    return logger
