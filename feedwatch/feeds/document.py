"""RSS 2.0 / Atom documents and their XML codec."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union
from xml.etree import ElementTree as ET

from pydantic import AnyUrl, TypeAdapter, ValidationError

from .errors import AmbiguousFeedError, FeedSerializeError, UnrecognizedFeedError


ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"
NAMESPACES = {"atom": ATOM_NAMESPACE}
UTF8_BOM = b"\xef\xbb\xbf"

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def parse_absolute_url(value: str) -> str:
    """Parse ``value`` as an absolute URL and return its normalised form.

    Raises :class:`pydantic.ValidationError` when the value is relative or
    otherwise malformed.
    """

    return str(_URL_ADAPTER.validate_python(value))


def _collect_links(candidates: list[str | None]) -> set[str]:
    links: set[str] = set()
    for candidate in candidates:
        if not candidate:
            continue
        try:
            links.add(parse_absolute_url(candidate.strip()))
        except ValidationError:
            continue
    return links


@dataclass(frozen=True, slots=True)
class Rss2Feed:
    """An RSS 2.0 ``<rss><channel>`` document."""

    root: ET.Element

    @property
    def kind(self) -> str:
        return "rss2"

    def links(self) -> set[str]:
        channel = self.root.find("channel")
        if channel is None:
            return set()
        return _collect_links([item.findtext("link") for item in channel.findall("item")])


@dataclass(frozen=True, slots=True)
class AtomFeed:
    """An Atom ``<feed>`` document."""

    root: ET.Element

    @property
    def kind(self) -> str:
        return "atom"

    def links(self) -> set[str]:
        hrefs = [
            link.get("href")
            for entry in self.root.findall("atom:entry", NAMESPACES)
            for link in entry.findall("atom:link", NAMESPACES)
        ]
        return _collect_links(hrefs)


FeedDocument = Union[Rss2Feed, AtomFeed]


def _parse_tree(payload: bytes) -> ET.Element | None:
    # Some servers emit a BOM or blank lines ahead of the XML declaration.
    try:
        return ET.fromstring(payload.lstrip(UTF8_BOM).lstrip())
    except ET.ParseError:
        return None


def _read_rss2(root: ET.Element | None) -> Rss2Feed | None:
    if root is None or root.tag != "rss":
        return None
    if root.find("channel") is None:
        return None
    return Rss2Feed(root)


def _read_atom(root: ET.Element | None) -> AtomFeed | None:
    if root is None or root.tag != f"{{{ATOM_NAMESPACE}}}feed":
        return None
    return AtomFeed(root)


def parse_feed(payload: bytes, *, feed_name: str | None = None) -> FeedDocument:
    """Parse ``payload`` as RSS 2.0, then as Atom.

    Exactly one format is expected to match. A payload accepted by both
    readers raises :class:`AmbiguousFeedError`; one accepted by neither raises
    :class:`UnrecognizedFeedError`.
    """

    root = _parse_tree(payload)
    rss = _read_rss2(root)
    atom = _read_atom(root)

    if rss is not None and atom is not None:
        raise AmbiguousFeedError(feed_name)
    if rss is not None:
        return rss
    if atom is not None:
        return atom
    raise UnrecognizedFeedError(feed_name)


def serialize_feed(document: FeedDocument, *, feed_name: str | None = None) -> bytes:
    """Render ``document`` back to UTF-8 XML suitable for :func:`parse_feed`."""

    try:
        return ET.tostring(document.root, encoding="utf-8", xml_declaration=True)
    except (TypeError, ValueError) as exc:
        raise FeedSerializeError(f"unable to serialise {document.kind} feed: {exc}", feed_name=feed_name) from exc


__all__ = [
    "ATOM_NAMESPACE",
    "AtomFeed",
    "FeedDocument",
    "Rss2Feed",
    "parse_absolute_url",
    "parse_feed",
    "serialize_feed",
]
