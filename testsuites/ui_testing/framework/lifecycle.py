"""
================================================================================
Test Lifecycle Logging
================================================================================

Phase logging for the UI test lifecycle. Each phase is logged with a
millisecond timestamp and the executing thread, which makes interleaving
visible when tests run in parallel.

    [14:30:25.123] [Thread-140245] before_method - Browser: chrome

================================================================================
"""

import threading
from datetime import datetime

from loguru import logger


TIME_FORMAT = "%H:%M:%S.%f"


def format_phase(phase: str) -> str:
    """Render a phase line: ``[HH:MM:SS.mmm] [Thread-<id>] <phase>``."""
    timestamp = datetime.now().strftime(TIME_FORMAT)[:-3]
    return f"[{timestamp}] [Thread-{threading.get_ident()}] {phase}"


def log_phase(phase: str) -> None:
    """Log a lifecycle phase for the calling thread."""
    logger.info(format_phase(phase))


__all__ = [
    "format_phase",
    "log_phase",
]
