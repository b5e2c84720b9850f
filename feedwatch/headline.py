"""Build HeadlineRecord values from parsed feed entries."""

import logging
from collections.abc import Callable, Iterable

from .core import now_hires
from .errors import EmptyHeadline, MissingRequiredField, RecordError
from .models import FeedEntry, HeadlineRecord
from .S2_clean.html import decode_entities, description_headline
from .S3_dedup.fingerprint import canonicalize_url, resolve_identity

logger = logging.getLogger(__name__)

# Pulls headline text out of an entry, e.g. from its extension fields
HeadlineExtractor = Callable[[FeedEntry], str | None]


def build_headline(
    *,
    item: FeedEntry | None = None,
    headline: str | None = None,
    url: str | None = None,
    description: str | None = None,
    headline_as_id: bool = False,
    first_seen: float | None = None,
    headline_extractor: HeadlineExtractor | None = None,
) -> HeadlineRecord:
    """
    Build a headline either from a parsed entry or from explicit fields.

    Args:
        item: Parsed entry; needs a link plus a title or description
        headline: Explicit headline text (used when ``item`` is None)
        url: Explicit link (used when ``item`` is None)
        description: Explicit description (used when ``item`` is None)
        headline_as_id: Use the headline hash as identity instead of the link
        first_seen: Fixed first-seen time; defaults to now
        headline_extractor: Replaces ``item.title`` as the headline source

    Raises:
        MissingRequiredField: Minimum field combination not present
        EmptyHeadline: No headline text left after all fallbacks
    """
    if item is not None:
        if not ((item.title or item.description) and item.link):
            raise MissingRequiredField("item must contain either title/link or description/link")
        url = item.link
        headline = headline_extractor(item) if headline_extractor else item.title
        description = item.description
    elif not (url and (headline or description)):
        raise MissingRequiredField("either item, url/headline or url/description are required")

    headline_text = decode_entities(headline).strip()
    description_text = decode_entities(description) or None

    if not headline_text and description_text:
        headline_text = description_headline(description_text) or ""
    if not headline_text:
        raise EmptyHeadline(f"failed to set headline for {url}")

    link = canonicalize_url(url)
    if not link:
        raise MissingRequiredField(f"blank link for {headline_text!r}")

    identity = resolve_identity(headline_text, link, headline_as_id)
    if not identity:
        raise EmptyHeadline(f"failed to compute identity for {link}")

    return HeadlineRecord(
        identity=identity,
        headline=headline_text,
        url=link,
        description=description_text,
        first_seen=first_seen if first_seen is not None else now_hires(),
    )


def build_headlines(
    entries: Iterable[FeedEntry],
    *,
    feed_name: str = "",
    headline_as_id: bool = False,
    first_seen: float | None = None,
    headline_extractor: HeadlineExtractor | None = None,
) -> list[HeadlineRecord]:
    """Build headlines for all entries, skipping the ones that fail."""
    records = []
    for entry in entries:
        try:
            records.append(build_headline(
                item=entry,
                headline_as_id=headline_as_id,
                first_seen=first_seen,
                headline_extractor=headline_extractor,
            ))
        except RecordError as e:
            logger.warning(f"[{feed_name}] Skipped entry: {e}")
    return records
