"""Data models for feedwatch."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field


class FeedEntry(BaseModel):
    """
    One item as produced by the feed parser.

    Only title/link/description are read by the core. Everything else the
    parser found (namespaced elements, dates, ``*_detail`` dicts) is kept in
    ``extensions`` for custom headline extractors.
    """

    title: str | None = None
    link: str | None = None
    description: str | None = None
    extensions: dict[str, Any] = Field(default_factory=dict)


class ParsedFeed(BaseModel):
    """Channel metadata plus entries, newest first."""

    title: str | None = None
    link: str | None = None
    entries: list[FeedEntry] = Field(default_factory=list)


class HeadlineRecord(BaseModel):
    """
    A headline seen in the feed on one refresh.

    Immutable after construction. A headline that shows up again on a later
    refresh is a new record with a new ``first_seen`` but the same identity.
    """

    model_config = ConfigDict(frozen=True)

    identity: str               # canonical url, or md5 of the headline
    headline: str
    url: str | None = None
    description: str | None = None
    first_seen: float           # epoch seconds, high resolution

    @computed_field
    @property
    def first_seen_int(self) -> int:
        """First-seen time truncated to whole seconds."""
        return int(self.first_seen)

    @property
    def multiline_headline(self) -> list[str]:
        """Headline split on newlines (custom extractors may join fields)."""
        return self.headline.split("\n")
