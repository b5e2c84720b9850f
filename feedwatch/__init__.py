"""feedwatch - report the headlines a feed has not shown before."""

from .cache import PayloadCache
from .config import FeedConfig, load_config
from .errors import (
    EmptyHeadline,
    FeedwatchError,
    MissingRequiredField,
    ParseFailure,
    PersistenceReadFailure,
    PersistenceWriteFailure,
)
from .feed import Feed
from .headline import build_headline
from .models import FeedEntry, HeadlineRecord

__version__ = "0.1.0"

__all__ = [
    "Feed",
    "FeedConfig",
    "load_config",
    "PayloadCache",
    "FeedEntry",
    "HeadlineRecord",
    "build_headline",
    "FeedwatchError",
    "MissingRequiredField",
    "EmptyHeadline",
    "ParseFailure",
    "PersistenceReadFailure",
    "PersistenceWriteFailure",
]
