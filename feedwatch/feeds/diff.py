"""Link-level comparison between a cached and a freshly fetched document."""

from __future__ import annotations

from .document import FeedDocument


def new_links(cached: FeedDocument | None, fresh: FeedDocument) -> set[str]:
    """Return links present in ``fresh`` but absent from ``cached``.

    A missing snapshot counts as an empty link set.
    """

    cached_links = cached.links() if cached is not None else set()
    return fresh.links() - cached_links


__all__ = ["new_links"]
