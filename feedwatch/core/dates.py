"""Timestamp helpers."""

import time
from datetime import datetime


# Standard format constants
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def now_hires() -> float:
    """
    Get the current time as high-resolution epoch seconds.

    Returns:
        Seconds since the epoch, with sub-second precision
    """
    return time.time()


def format_timestamp(timestamp: float, fmt: str = DATETIME_FORMAT) -> str:
    """
    Format epoch seconds in local time.

    Args:
        timestamp: Epoch seconds
        fmt: strftime format string

    Returns:
        Formatted datetime string
    """
    return datetime.fromtimestamp(timestamp).strftime(fmt)
