"""Fetching and parsing RSS feeds."""

from __future__ import annotations

import html
import urllib.request
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

USER_AGENT = "gator"
DEFAULT_TIMEOUT = 10.0


@dataclass
class RSSItem:
    title: str = ""
    link: str = ""
    description: str = ""
    pub_date: str = ""


@dataclass
class RSSChannel:
    title: str = ""
    link: str = ""
    description: str = ""
    items: list[RSSItem] = field(default_factory=list)


@dataclass
class RSSFeed:
    channel: RSSChannel = field(default_factory=RSSChannel)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str):
    return (child for child in element if _local(child.tag) == name)


def _text(element: ET.Element, name: str) -> str:
    found = next(_children(element, name), None)
    return "".join(found.itertext()) if found is not None else ""


def parse_feed(data: bytes | str) -> RSSFeed:
    """Parse an RSS document; titles and descriptions are HTML-unescaped.

    Raises ``ValueError`` on malformed XML.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise ValueError(f"invalid feed XML: {exc}") from exc

    channel_el = next(_children(root, "channel"), None)
    if channel_el is None:
        return RSSFeed()

    description = html.unescape(_text(channel_el, "description"))
    items = [
        RSSItem(
            title=html.unescape(_text(item, "title")),
            link=_text(item, "link"),
            description=html.unescape(_text(item, "description")),
            pub_date=_text(item, "pubDate"),
        )
        for item in _children(channel_el, "item")
    ]
    channel = RSSChannel(
        # The channel title is taken from its description.
        title=description,
        link=_text(channel_el, "link"),
        description=description,
        items=items,
    )
    return RSSFeed(channel=channel)


def fetch_feed(feed_url: str, timeout: float = DEFAULT_TIMEOUT) -> RSSFeed:
    """Download the feed at ``feed_url`` and parse it."""
    request = urllib.request.Request(feed_url, headers={"User-Agent": USER_AGENT})
    with urllib.request.urlopen(request, timeout=timeout) as response:
        data = response.read()
    return parse_feed(data)