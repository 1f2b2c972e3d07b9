"""Fan out the read-cache, fetch, diff, write-cache unit over every feed."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Iterable

from loguru import logger

from feedwatch.config import WatchSettings

from .cache import FeedCacheReader, FeedCacheStore, FeedCacheWriter
from .diff import new_links
from .errors import CacheMissError, FeedWatchError
from .fetcher import FeedSource, HttpFeedFetcher
from .loader import FeedDefinition, load_feed_definitions


@dataclass(slots=True)
class FeedOutcome:
    """Result of processing a single feed."""

    name: str
    new_links: set[str] = field(default_factory=set)
    error: Exception | None = None
    had_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class WatchReport:
    """Aggregated output of one run across all feeds."""

    new_links: list[str]
    outcomes: dict[str, FeedOutcome]

    def failures(self) -> dict[str, Exception]:
        return {
            name: outcome.error
            for name, outcome in self.outcomes.items()
            if outcome.error is not None
        }

    def first_runs(self) -> list[str]:
        return sorted(name for name, outcome in self.outcomes.items() if outcome.ok and not outcome.had_cache)


def process_feed(
    definition: FeedDefinition,
    *,
    cache_reader: FeedCacheReader,
    fetcher: FeedSource,
    cache_writer: FeedCacheWriter,
) -> FeedOutcome:
    """Run one unit for ``definition`` and return the links it newly reports.

    A missing snapshot is the first-run branch: the fresh document is cached
    as the baseline and no links are reported. Any other failure propagates.
    """

    name = definition.name
    try:
        cached = cache_reader.read(name)
    except CacheMissError:
        logger.debug("Cache file not found for {}", name)
        cached = None
    else:
        logger.debug("Cache file found for {}", name)

    fresh = fetcher.fetch(name, definition.url)

    if cached is None:
        cache_writer.write(name, fresh)
        return FeedOutcome(name=name, had_cache=False)

    links = new_links(cached, fresh)
    cache_writer.write(name, fresh)
    return FeedOutcome(name=name, new_links=links, had_cache=True)


class FeedWatchPipeline:
    """Process every configured feed on a bounded thread pool.

    Each unit touches only its own cache file, so units run without any
    shared state or locking. A failing unit is logged and contributes no
    links; it never aborts the others.
    """

    def __init__(
        self,
        settings: WatchSettings,
        *,
        cache_reader: FeedCacheReader | None = None,
        fetcher: FeedSource | None = None,
        cache_writer: FeedCacheWriter | None = None,
    ) -> None:
        self.settings = settings
        self.store = FeedCacheStore(settings.cache_path)
        self.cache_reader: FeedCacheReader = cache_reader or self.store
        self.cache_writer: FeedCacheWriter = cache_writer or self.store
        self.fetcher: FeedSource = fetcher or HttpFeedFetcher(
            timeout=settings.request_timeout,
            user_agent=settings.user_agent,
        )

    def load_definitions(self) -> dict[str, FeedDefinition]:
        conf_path = self.settings.conf_path
        if conf_path is None:
            raise FeedWatchError("no feed configuration directory configured")
        return load_feed_definitions(conf_path)

    def run(self, definitions: Iterable[FeedDefinition]) -> WatchReport:
        definitions = list(definitions)
        outcomes: dict[str, FeedOutcome] = {}

        if definitions:
            max_workers = min(self.settings.max_workers, len(definitions))
            with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="feedwatch") as executor:
                futures = {executor.submit(self._run_unit, definition): definition for definition in definitions}
                for future in as_completed(futures):
                    outcome = future.result()
                    outcomes[outcome.name] = outcome

        collected: set[str] = set()
        for name in sorted(outcomes):
            outcome = outcomes[name]
            if outcome.error is not None:
                logger.error("[{}]: {}", name, outcome.error)
                continue
            collected.update(outcome.new_links)

        report = WatchReport(new_links=sorted(collected), outcomes=dict(sorted(outcomes.items())))
        logger.info(
            "Checked {} feeds: {} new links, {} failures",
            len(outcomes),
            len(report.new_links),
            len(report.failures()),
        )
        return report

    def check(self) -> WatchReport:
        """Prepare the cache directory, load definitions and run every feed.

        Errors raised here are fatal for the whole run; per-feed errors are
        captured in the returned report.
        """

        self.store.prepare()
        definitions = self.load_definitions()
        return self.run(definitions.values())

    def _run_unit(self, definition: FeedDefinition) -> FeedOutcome:
        try:
            return process_feed(
                definition,
                cache_reader=self.cache_reader,
                fetcher=self.fetcher,
                cache_writer=self.cache_writer,
            )
        except FeedWatchError as exc:
            return FeedOutcome(name=definition.name, error=exc)
        except Exception as exc:  # noqa: BLE001 - isolate unexpected failures to their feed
            logger.opt(exception=exc).debug("Unexpected failure while processing {}", definition.name)
            return FeedOutcome(name=definition.name, error=exc)


__all__ = ["FeedOutcome", "WatchReport", "FeedWatchPipeline", "process_feed"]
