"""Core utilities for feedwatch."""

from .dates import DATETIME_FORMAT, format_timestamp, now_hires
from .io import looks_like_text, read_text, save_text

__all__ = [
    # I/O
    "read_text",
    "save_text",
    "looks_like_text",
    # Dates
    "now_hires",
    "format_timestamp",
    "DATETIME_FORMAT",
]
