"""Load feed definitions from a directory of one-URL-per-file entries."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from loguru import logger
from pydantic import ValidationError

from .document import parse_absolute_url
from .errors import DuplicateFeedError, FeedIOError, InvalidFilenameError, InvalidUrlError


@dataclass(frozen=True, slots=True)
class FeedDefinition:
    """A named feed and the absolute URL it is fetched from."""

    name: str
    url: str


def _iter_feed_files(conf_dir: Path) -> Iterator[os.DirEntry[str]]:
    """Yield regular files directly inside ``conf_dir``.

    Symlinks, directories and entries whose metadata cannot be read are
    skipped.
    """

    with os.scandir(conf_dir) as entries:
        for entry in entries:
            try:
                is_file = entry.is_file(follow_symlinks=False)
            except OSError as exc:
                logger.debug("Skipping unreadable entry {}: {}", entry.path, exc)
                continue
            if is_file:
                yield entry


def _decode_name(entry: os.DirEntry[str]) -> str:
    # Undecodable bytes survive os.scandir as lone surrogates.
    try:
        entry.name.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidFilenameError(entry.name) from exc
    return entry.name


def _read_definition(entry: os.DirEntry[str], name: str) -> FeedDefinition:
    try:
        contents = Path(entry.path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FeedIOError(f"unable to read {entry.path}: {exc}", feed_name=name) from exc

    try:
        url = parse_absolute_url(contents.strip())
    except ValidationError as exc:
        reason = exc.errors()[0]["msg"] if exc.errors() else str(exc)
        raise InvalidUrlError(reason, contents).with_feed(name) from exc

    return FeedDefinition(name=name, url=url)


def load_feed_definitions(conf_dir: Path) -> dict[str, FeedDefinition]:
    """Read every feed definition in ``conf_dir``.

    The load is all-or-nothing: the first invalid entry raises and no partial
    mapping is returned. The result is ordered by feed name.
    """

    definitions: dict[str, FeedDefinition] = {}
    try:
        for entry in _iter_feed_files(conf_dir):
            name = _decode_name(entry)
            definition = _read_definition(entry, name)
            if name in definitions:
                raise DuplicateFeedError(name)
            definitions[name] = definition
    except OSError as exc:
        raise FeedIOError(f"unable to list {conf_dir}: {exc}") from exc

    logger.debug("Loaded {} feed definitions from {}", len(definitions), conf_dir)
    return dict(sorted(definitions.items()))


__all__ = ["FeedDefinition", "load_feed_definitions"]
