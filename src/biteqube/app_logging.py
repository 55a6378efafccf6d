"""Logging configuration helpers."""

import logging

_LOGGER_NAME = "biteqube"
_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def configure_logging(environment: str = "production") -> None:
    """Attach a single stream handler to the biteqube logger.

    Local runs log at DEBUG so the search and scan fallback chains are
    visible step by step; every other environment logs at INFO.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if environment == "local" else logging.INFO)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
