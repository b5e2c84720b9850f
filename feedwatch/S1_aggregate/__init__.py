"""Step 1: Fetch and parse the raw feed."""

from . import rss
from .rss import fetch, parse_payload

__all__ = ["rss", "fetch", "parse_payload"]
