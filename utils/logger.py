"""
utils/logger.py
===============
Shared application loggers (console only), one per name.
"""
import logging

from config import LOG_FORMAT, LOG_LEVEL, LOGGER_NAME


_loggers = {}


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    ch = logging.StreamHandler()
    ch.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    ch.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(ch)

    _loggers[name] = logger
    logger.debug("Logger initialized")
    return logger
