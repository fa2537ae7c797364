"""Lightweight timing for grid operations.

Usage:
    with timer("PropertyIntrospector.build (Settings)", threshold_ms=5.0):
        ...

Durations at or above the threshold are logged at DEBUG level.
"""
from contextlib import contextmanager
import logging
import time

logger = logging.getLogger(__name__)


@contextmanager
def timer(label: str, threshold_ms: float = 0.0):
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        if elapsed_ms >= threshold_ms:
            logger.debug(f"⏱️ {label}: {elapsed_ms:.2f}ms")
