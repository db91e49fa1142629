"""Common decorators for performance logging."""

from __future__ import annotations

import time
from functools import wraps

from ..logging import get_logger


logger = get_logger(__name__)


def log_performance(func):
    """Log execution duration for ``func``."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception:
            duration = time.perf_counter() - start_time
            logger.info("%s call failed after %.3f seconds", func.__name__, duration)
            raise

        duration = time.perf_counter() - start_time
        logger.info("%s executed in %.3f seconds", func.__name__, duration)
        return result

    return wrapper
