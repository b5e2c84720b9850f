"""Feed state: remembers what one feed has shown and reports what is new."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from .cache import PayloadCache
from .config import FeedConfig
from .errors import ParseFailure
from .headline import HeadlineExtractor, build_headlines
from .models import HeadlineRecord
from .S1_aggregate import rss
from .S3_dedup.filter import classify

logger = logging.getLogger(__name__)

HUMAN_READABLE_DELAYS = {
    300: "5 minutes",
    600: "10 minutes",
    900: "15 minutes",
    1800: "half an hour",
    3600: "hour",
}


class Feed:
    """
    One watched feed.

    Usage:
        feed = Feed(FeedConfig(name="perl", url=..., cache_dir="/tmp"),
                    cache=PayloadCache("/tmp"))
        with feed.watching():
            while True:
                for headline in feed.poll():
                    print(headline.headline)
                time.sleep(feed.delay)

    ``refresh`` calls on one Feed are serialized; separate Feed objects
    share no state and can run in separate threads.
    """

    def __init__(
        self,
        config: FeedConfig,
        cache: PayloadCache | None = None,
        headline_extractor: HeadlineExtractor | None = None,
    ):
        self.config = config
        self.cache = cache
        if self.cache is None and config.cache_dir:
            self.cache = PayloadCache(config.cache_dir)
        self.headline_extractor = headline_extractor

        self.known_identities: set[str] = set()
        self.cold_start = True
        self.headlines: list[HeadlineRecord] = []
        self.late_breaking_news: list[HeadlineRecord] = []
        self.raw_payload: str | None = None

        # channel metadata from the last good payload
        self.title: str | None = None
        self.link: str | None = None

        self.failed_to_parse = False
        self.failed_to_fetch = False
        self.no_entries_found = False

        self._lock = threading.Lock()

    # ─────────────────────────────────────────────────────────
    # Configuration shortcuts
    # ─────────────────────────────────────────────────────────

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def url(self) -> str | None:
        return self.config.url

    @property
    def delay(self) -> int:
        return self.config.delay

    @property
    def human_readable_delay(self) -> str:
        """Delay as a phrase, e.g. "half an hour" or "45 seconds"."""
        return HUMAN_READABLE_DELAYS.get(self.delay, f"{self.delay} seconds")

    @property
    def num_headlines(self) -> int:
        return len(self.headlines)

    def seen_headline(self, identity: str) -> bool:
        """Check if an identity was part of any earlier refresh."""
        return identity in self.known_identities

    # ─────────────────────────────────────────────────────────
    # Refresh
    # ─────────────────────────────────────────────────────────

    def refresh(self, payload: str | None) -> list[HeadlineRecord]:
        """
        Parse a raw payload and return the headlines that are new.

        Nothing is reported on the first refresh; it only sets the baseline.
        Entries that cannot become headlines are skipped with a warning.
        A payload without usable entries sets ``no_entries_found`` and
        leaves the state as it was.

        Raises:
            ParseFailure: If the payload cannot be parsed; state is unchanged
                apart from ``failed_to_parse``
        """
        with self._lock:
            try:
                parsed = rss.parse_payload(payload)
            except ParseFailure as e:
                self.failed_to_parse = True
                logger.warning(f"[{self.name}] !! Failed to parse RSS XML -> {e}")
                raise
            logger.debug(f"[{self.name}] Parsed RSS XML")

            records = build_headlines(
                parsed.entries,
                feed_name=self.name,
                headline_as_id=self.config.headline_as_id,
                first_seen=self.config.first_seen,
                headline_extractor=self.headline_extractor,
            )

            new_records, all_records = classify(records, self.known_identities, self.cold_start)
            self.failed_to_parse = False
            if not all_records:
                self.no_entries_found = True
                logger.warning(f"[{self.name}] !! No Headlines Found")
                return []

            self.known_identities.update(record.identity for record in all_records)
            self.cold_start = False
            self.headlines = all_records
            self.late_breaking_news = new_records
            self.raw_payload = payload
            self.no_entries_found = False
            if parsed.title and parsed.title.strip():
                self.title = parsed.title.strip()
            self.link = parsed.link or self.link

            logger.info(f"[{self.name}] {len(all_records)} Headlines Found")
            logger.info(f"[{self.name}] {len(new_records)} New Headlines Found")
            return new_records

    def poll(self, fetcher: Callable[..., str | None] | None = None) -> list[HeadlineRecord]:
        """
        Fetch the configured URL and refresh.

        Args:
            fetcher: Called as fetcher(url, timeout=..., name=...); defaults
                to rss.fetch

        Returns:
            New headlines; empty when fetching or parsing failed
        """
        if not self.url:
            raise ValueError(f"[{self.name}] no url configured")

        fetcher = fetcher or rss.fetch
        payload = fetcher(self.url, timeout=self.config.timeout, name=self.name)
        if payload is None:
            self.failed_to_fetch = True
            return []
        self.failed_to_fetch = False

        try:
            return self.refresh(payload)
        except ParseFailure:
            return []

    # ─────────────────────────────────────────────────────────
    # Persistence
    # ─────────────────────────────────────────────────────────

    def load_cached(self) -> bool:
        """
        Replay the cached payload to rebuild the baseline.

        Only done during cold start, so nothing is reported as new.

        Returns:
            True if a cached payload was replayed
        """
        if self.cache is None or not self.cold_start:
            return False

        payload = self.cache.load(self.name)
        if payload is None:
            return False

        try:
            self.refresh(payload)
        except ParseFailure:
            return False
        return not self.cold_start

    def persist(self) -> bool:
        """Write the last good payload to the cache (best effort)."""
        if self.cache is None or self.raw_payload is None:
            return False
        return self.cache.save(self.name, self.raw_payload)

    @contextmanager
    def watching(self) -> Iterator[Feed]:
        """
        Restore the baseline on entry and cache the payload on exit.

        The cache is written on every exit path, including exceptions and
        KeyboardInterrupt.
        """
        self.load_cached()
        try:
            yield self
        finally:
            self.persist()
