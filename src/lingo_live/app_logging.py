"""Logging configuration helpers."""

import logging

LOGGER_NAME = "lingo_live"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Configure the translator's logger once and return it.

    Repeated calls only adjust the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    if logger.handlers:
        return logger
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
    return logger
