"""Logging setup and timing helpers"""

import logging
import time
from contextlib import contextmanager
from typing import Iterator


def setup_logging(log_level: str = "INFO") -> None:
    """Configure log format"""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@contextmanager
def log_duration(logger: logging.Logger, action: str) -> Iterator[None]:
    """
    Log how long the wrapped block took.

    Failures are logged at ERROR with the elapsed time and re-raised.
    """
    start_time = time.perf_counter()
    try:
        yield
    except Exception as e:
        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.error(f"{action} failed after {latency_ms:.2f}ms: {e}")
        raise
    latency_ms = (time.perf_counter() - start_time) * 1000
    logger.info(f"{action} ({latency_ms:.2f}ms)")
