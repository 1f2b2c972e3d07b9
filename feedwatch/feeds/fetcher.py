"""Retrieve live feeds over HTTP."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import requests
from loguru import logger

from feedwatch.config.settings import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

from .document import UTF8_BOM, FeedDocument, parse_feed
from .errors import HttpError


def _declares_charset(response: requests.Response) -> bool:
    content_type = response.headers.get("Content-Type", "")
    return "charset=" in content_type.lower()


def _http_get(url: str, *, timeout: float = DEFAULT_TIMEOUT, user_agent: str = DEFAULT_USER_AGENT) -> bytes:
    response = requests.get(url, headers={"User-Agent": user_agent}, timeout=timeout)
    response.raise_for_status()
    body = response.content
    # Undeclared XML is parsed as UTF-8; re-encode from the header charset.
    if _declares_charset(response) and not body.lstrip(UTF8_BOM).lstrip().startswith(b"<?xml"):
        return response.text.encode("utf-8")
    return body


class FeedSource(Protocol):
    def fetch(self, feed_name: str, url: str) -> FeedDocument:
        """Retrieve the current document for ``feed_name`` from ``url``."""


@dataclass(slots=True)
class HttpFeedFetcher:
    """Single-attempt blocking fetcher; no retries are performed."""

    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    def fetch(self, feed_name: str, url: str) -> FeedDocument:
        logger.debug("Fetching feed[{}] from {}", feed_name, url)
        try:
            payload = _http_get(url, timeout=self.timeout, user_agent=self.user_agent)
        except requests.RequestException as exc:
            raise HttpError(str(exc), feed_name=feed_name) from exc
        return parse_feed(payload, feed_name=feed_name)


__all__ = ["FeedSource", "HttpFeedFetcher"]
