import logging
import time
from contextlib import contextmanager

logger = logging.getLogger(__name__)


@contextmanager
def timed(label: str):
    """Log how long the wrapped block took, as `<label>: <ms>ms`."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = (time.perf_counter() - start) * 1000
        logger.info(f"{label}: {elapsed:.0f}ms")
