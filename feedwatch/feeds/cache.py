"""On-disk snapshots of the most recently fetched document for each feed."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from loguru import logger

from .document import FeedDocument, parse_feed, serialize_feed
from .errors import (
    CacheDirectoryError,
    CacheMissError,
    FeedIOError,
    InvalidCacheError,
    UnrecognizedFeedError,
)


class FeedCacheReader(Protocol):
    def read(self, feed_name: str) -> FeedDocument:
        """Return the cached document or raise :class:`CacheMissError`."""


class FeedCacheWriter(Protocol):
    def write(self, feed_name: str, document: FeedDocument) -> None:
        """Replace the cached document for ``feed_name``."""


@dataclass(slots=True)
class FeedCacheStore:
    """One file per feed under ``cache_dir``, named after the feed."""

    cache_dir: Path

    def path_for(self, feed_name: str) -> Path:
        return self.cache_dir / feed_name

    def prepare(self) -> None:
        """Ensure the cache directory exists, creating it when absent."""

        if self.cache_dir.exists():
            if not self.cache_dir.is_dir():
                raise CacheDirectoryError(
                    f"cache directory path exists and is not a directory: {self.cache_dir}"
                )
            return

        logger.debug("Creating cache directory at {}", self.cache_dir)
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheDirectoryError(f"unable to create cache directory {self.cache_dir}: {exc}") from exc

    def read(self, feed_name: str) -> FeedDocument:
        path = self.path_for(feed_name)
        try:
            payload = path.read_bytes()
        except FileNotFoundError as exc:
            raise CacheMissError(f"no cache file at {path}", feed_name=feed_name) from exc
        except OSError as exc:
            raise FeedIOError(str(exc), feed_name=feed_name) from exc

        try:
            return parse_feed(payload, feed_name=feed_name)
        except UnrecognizedFeedError as exc:
            raise InvalidCacheError(feed_name) from exc

    def write(self, feed_name: str, document: FeedDocument) -> None:
        path = self.path_for(feed_name)
        payload = serialize_feed(document, feed_name=feed_name)
        logger.debug("Writing cache for feed[{}] to {}", feed_name, path)
        try:
            path.write_bytes(payload)
        except OSError as exc:
            raise FeedIOError(str(exc), feed_name=feed_name) from exc


__all__ = ["FeedCacheReader", "FeedCacheWriter", "FeedCacheStore"]
