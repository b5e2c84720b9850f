"""RSS fetching and parsing."""

import io
import logging

import feedparser
import httpx

from ..errors import ParseFailure
from ..models import FeedEntry, ParsedFeed

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
}

# Keys feedparser uses for the fields the core reads
CORE_KEYS = ("title", "link", "summary", "description")

# The payload is handed over as UTF-8 bytes, so its declared charset is ignored
_RESPONSE_HEADERS = {"content-type": "application/xml; charset=utf-8"}


def fetch(url: str, timeout: float = 30, name: str = "") -> str | None:
    """
    Download a feed.

    Args:
        url: Feed URL
        timeout: Request timeout in seconds
        name: Feed name used in log messages

    Returns:
        Response body, or None on HTTP or transport errors
    """
    try:
        resp = httpx.get(url, headers=HEADERS, follow_redirects=True, timeout=timeout)
    except httpx.HTTPError as e:
        logger.warning(f"[{name}] Fetch error: {e}")
        return None

    if resp.status_code != 200:
        logger.warning(f"[{name}] HTTP {resp.status_code}")
        return None
    return resp.text


def parse_payload(payload: str | None) -> ParsedFeed:
    """
    Parse raw RSS/Atom text.

    feedparser recovers from almost anything, so its ``bozo`` flag decides:
    a payload is rejected when the XML is broken (anything beyond a
    charset/content-type complaint) or no feed format was recognized.

    Raises:
        ParseFailure: If the payload is not a usable feed
    """
    if not payload or not payload.strip():
        raise ParseFailure("empty payload")

    feed = feedparser.parse(
        io.BytesIO(payload.encode("utf-8")),
        response_headers=_RESPONSE_HEADERS,
    )

    if feed.bozo and not isinstance(feed.bozo_exception, feedparser.ThingsNobodyCaresAboutButMe):
        raise ParseFailure(f"malformed feed: {feed.bozo_exception}")
    if not feed.version:
        raise ParseFailure("unrecognized feed format")

    return ParsedFeed(
        title=feed.feed.get("title"),
        link=feed.feed.get("link"),
        entries=[_to_entry(entry) for entry in feed.entries],
    )


def _to_entry(entry: dict) -> FeedEntry:
    """Map a feedparser entry onto FeedEntry, keeping unknown keys."""
    return FeedEntry(
        title=entry.get("title") or None,
        link=entry.get("link") or None,
        description=entry.get("summary") or entry.get("description") or None,
        extensions={k: v for k, v in entry.items() if k not in CORE_KEYS},
    )
