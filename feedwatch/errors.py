"""Error kinds raised by feedwatch.

Per-record errors are contained by ``Feed.refresh``; persistence errors are
contained by ``PayloadCache.load`` / ``PayloadCache.save``. Only
``ParseFailure`` leaves ``refresh``.
"""


class FeedwatchError(Exception):
    """Base class for all feedwatch errors."""


class RecordError(FeedwatchError, ValueError):
    """A single feed entry could not be turned into a headline."""


class MissingRequiredField(RecordError):
    """Entry lacks the minimum title/description/link combination."""


class EmptyHeadline(RecordError):
    """No usable headline text after all fallbacks."""


class ParseFailure(FeedwatchError):
    """The parser rejected the whole payload."""


class PersistenceError(FeedwatchError, OSError):
    """Cache file could not be read or written."""


class PersistenceReadFailure(PersistenceError):
    pass


class PersistenceWriteFailure(PersistenceError):
    pass
