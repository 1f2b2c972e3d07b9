"""Feed loading, fetching, caching and diffing."""

from feedwatch.feeds.cache import FeedCacheReader, FeedCacheStore, FeedCacheWriter
from feedwatch.feeds.diff import new_links
from feedwatch.feeds.document import AtomFeed, FeedDocument, Rss2Feed, parse_feed, serialize_feed
from feedwatch.feeds.fetcher import FeedSource, HttpFeedFetcher
from feedwatch.feeds.loader import FeedDefinition, load_feed_definitions
from feedwatch.feeds.pipeline import FeedOutcome, FeedWatchPipeline, WatchReport, process_feed

__all__ = [
    "AtomFeed",
    "FeedCacheReader",
    "FeedCacheStore",
    "FeedCacheWriter",
    "FeedDefinition",
    "FeedDocument",
    "FeedOutcome",
    "FeedSource",
    "FeedWatchPipeline",
    "HttpFeedFetcher",
    "Rss2Feed",
    "WatchReport",
    "load_feed_definitions",
    "new_links",
    "parse_feed",
    "process_feed",
    "serialize_feed",
]
