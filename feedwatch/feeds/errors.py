"""Exception hierarchy for feed loading, fetching and caching."""

from __future__ import annotations


class FeedWatchError(Exception):
    """Base class for every error raised by the feed pipeline.

    ``feed_name`` optionally records which feed the error belongs to so that
    callers can report it without threading the name through every frame.
    """

    def __init__(self, message: str, *, feed_name: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.feed_name = feed_name

    def with_feed(self, feed_name: str) -> "FeedWatchError":
        """Attach ``feed_name`` context and return ``self`` for re-raising."""

        self.feed_name = feed_name
        return self

    def __str__(self) -> str:
        if self.feed_name is None:
            return self.message
        return f"{self.message}: feed[{self.feed_name}]"


class InvalidUrlError(FeedWatchError):
    """A feed definition did not contain an absolute URL."""

    def __init__(self, reason: str, raw: str) -> None:
        super().__init__(f"{reason} for {raw.strip()!r}")
        self.reason = reason
        self.raw = raw


class DuplicateFeedError(FeedWatchError):
    def __init__(self, name: str) -> None:
        super().__init__(f"feed {name} is defined more than once")
        self.name = name


class InvalidFilenameError(FeedWatchError):
    def __init__(self, raw_name: str) -> None:
        super().__init__(f"filename must be representable as utf-8: {raw_name!r}")
        self.raw_name = raw_name


class FeedIOError(FeedWatchError):
    """Filesystem failure while reading definitions or cache files."""


class CacheMissError(FeedIOError):
    """No cached snapshot exists yet for a feed."""


class CacheDirectoryError(FeedIOError):
    """The cache directory is missing and cannot be created, or is not a directory."""


class HttpError(FeedWatchError):
    """Transport-level failure while retrieving a feed."""


class FeedParseError(FeedWatchError):
    """A document could not be handled as a supported syndication format."""


class UnrecognizedFeedError(FeedParseError):
    def __init__(self, feed_name: str | None = None) -> None:
        super().__init__("feed is neither atom nor rss", feed_name=feed_name)


class AmbiguousFeedError(FeedParseError):
    def __init__(self, feed_name: str | None = None) -> None:
        super().__init__("feed parsed as both atom and rss", feed_name=feed_name)


class FeedSerializeError(FeedParseError):
    pass


class InvalidCacheError(FeedWatchError):
    """A cache file exists but is not a readable feed document."""

    def __init__(self, name: str) -> None:
        super().__init__("cache file is neither atom nor rss", feed_name=name)
        self.name = name


__all__ = [
    "FeedWatchError",
    "InvalidUrlError",
    "DuplicateFeedError",
    "InvalidFilenameError",
    "FeedIOError",
    "CacheMissError",
    "CacheDirectoryError",
    "HttpError",
    "FeedParseError",
    "UnrecognizedFeedError",
    "AmbiguousFeedError",
    "FeedSerializeError",
    "InvalidCacheError",
]
