"""Feed fixtures shared across test modules."""

from __future__ import annotations

from typing import Iterable


def rss_payload(links: Iterable[str | None], *, title: str = "Example RSS") -> bytes:
    """Build a minimal RSS 2.0 document; ``None`` produces an item without a link."""

    items = []
    for index, link in enumerate(links):
        link_xml = f"<link>{link}</link>" if link is not None else ""
        items.append(f"<item><title>Item {index}</title>{link_xml}</item>")
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel>'
        f"<title>{title}</title><link>http://example.com/</link>"
        "<description>test feed</description>"
        f"{''.join(items)}"
        "</channel></rss>"
    ).encode("utf-8")


def atom_payload(links: Iterable[str], *, title: str = "Example Atom") -> bytes:
    entries = "".join(
        f"<entry><id>urn:entry:{index}</id><title>Entry {index}</title>"
        f'<updated>2024-01-01T00:00:00Z</updated><link href="{link}"/></entry>'
        for index, link in enumerate(links)
    )
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<feed xmlns="http://www.w3.org/2005/Atom">'
        f"<title>{title}</title><id>urn:feed</id><updated>2024-01-01T00:00:00Z</updated>"
        f"{entries}"
        "</feed>"
    ).encode("utf-8")
