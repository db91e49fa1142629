import logging
import sys
import json

_PACKAGE_LOGGERS: set[str] = set()


def get_logger(name: str = __name__) -> logging.Logger:
    """Return a JSON-configured logger.

    Reuses existing handlers to avoid duplicates when called multiple times.
    """
    logger = logging.getLogger(name)
    _PACKAGE_LOGGERS.add(name)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler(sys.stdout)
    fmt = json.dumps(
        {
            "ts": "%(asctime)s",
            "lvl": "%(levelname)s",
            "mod": "%(name)s",
            "msg": "%(message)s",
        }
    )
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    return logger


def set_log_level(level: str | int) -> None:
    """Apply ``level`` to every logger handed out by :func:`get_logger`."""
    if isinstance(level, str):
        level = level.upper()
    for name in _PACKAGE_LOGGERS:
        logging.getLogger(name).setLevel(level)
