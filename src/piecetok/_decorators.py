"""Decorators shared by the trainer."""

import functools
import logging
import time
from typing import Callable

log = logging.getLogger(__name__)


def measure_time(func: Callable) -> Callable:
    """Log the wall time of every call to ``func``, including failed ones."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        outcome = "failed"
        try:
            result = func(*args, **kwargs)
            outcome = "finished"
            return result
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            log.info(f"{func.__qualname__} {outcome} after {elapsed_ms:.1f} ms")

    return wrapper
