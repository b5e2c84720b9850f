"""Raw payload cache, one file per feed.

Only the last successfully parsed payload is stored. On startup it is
replayed through ``Feed.refresh`` during cold start, which rebuilds the
known-identity baseline without reporting anything as new.
"""

import logging
from pathlib import Path

from .core import read_text, save_text
from .errors import PersistenceReadFailure, PersistenceWriteFailure

logger = logging.getLogger(__name__)


def _safe_key(feed_key: str) -> str:
    # Sanitize feed_key to prevent path traversal
    safe = "".join(c for c in feed_key if c.isalnum() or c in "-_.").lstrip(".")
    if not safe:
        raise ValueError(f"Unusable feed key: {feed_key!r}")
    return safe


class PayloadCache:
    """Stores raw feed payloads under ``cache_dir/<feed key>``."""

    def __init__(self, cache_dir: str | Path):
        self.cache_dir = Path(cache_dir)

    def path_for(self, feed_key: str) -> Path:
        """Get cache file path for a feed."""
        return self.cache_dir / _safe_key(feed_key)

    def read(self, feed_key: str) -> str:
        """
        Read the cached payload for a feed.

        Raises:
            PersistenceReadFailure: Missing, unreadable, empty or binary file
        """
        try:
            return read_text(self.path_for(feed_key))
        except (OSError, ValueError) as e:
            raise PersistenceReadFailure(str(e)) from e

    def load(self, feed_key: str) -> str | None:
        """Read the cached payload, or None if there is no usable one."""
        try:
            payload = self.read(feed_key)
        except PersistenceReadFailure as e:
            logger.info(f"[{feed_key}] !! Failed to load cached RSS XML: {e}")
            return None
        logger.info(f"[{feed_key}] Loaded cached RSS XML")
        return payload

    def write(self, feed_key: str, payload: str) -> None:
        """
        Write the payload for a feed, replacing the previous one.

        Raises:
            PersistenceWriteFailure: If the file cannot be written
        """
        try:
            save_text(payload, self.path_for(feed_key))
        except (OSError, ValueError) as e:
            raise PersistenceWriteFailure(str(e)) from e

    def save(self, feed_key: str, payload: str | None) -> bool:
        """
        Best-effort write of the payload.

        Returns:
            True if the payload was written, False otherwise
        """
        if not payload:
            return False
        try:
            self.write(feed_key, payload)
        except PersistenceWriteFailure as e:
            logger.error(f"[{feed_key}] Could not cache RSS XML: {e}")
            return False
        logger.info(f"[{feed_key}] Cached RSS XML to {self.path_for(feed_key)}")
        return True
