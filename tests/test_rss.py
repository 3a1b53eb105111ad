import http.server
import threading
import urllib.error

import pytest

from gator.rss import RSSItem, fetch_feed, parse_feed

SAMPLE = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Example Blog</title>
    <link>https://example.com/</link>
    <description>Notes &amp;amp; thoughts</description>
    <item>
      <title>First &amp;lt;post&amp;gt;</title>
      <link>https://example.com/first</link>
      <description>Hello &amp;quot;world&amp;quot;</description>
      <pubDate>Mon, 01 Jan 2024 00:00:00 +0000</pubDate>
    </item>
    <item>
      <title>Second</title>
      <link>https://example.com/second</link>
      <description><![CDATA[plain text]]></description>
      <pubDate>Tue, 02 Jan 2024 00:00:00 +0000</pubDate>
    </item>
  </channel>
</rss>
"""


def test_parse_items_in_order_and_unescaped():
    feed = parse_feed(SAMPLE)
    assert feed.channel.items == [
        RSSItem(
            title="First <post>",
            link="https://example.com/first",
            description='Hello "world"',
            pub_date="Mon, 01 Jan 2024 00:00:00 +0000",
        ),
        RSSItem(
            title="Second",
            link="https://example.com/second",
            description="plain text",
            pub_date="Tue, 02 Jan 2024 00:00:00 +0000",
        ),
    ]


def test_parse_channel_fields():
    channel = parse_feed(SAMPLE).channel
    assert channel.link == "https://example.com/"
    assert channel.description == "Notes & thoughts"
    assert channel.title == channel.description


def test_parse_accepts_text():
    assert parse_feed(SAMPLE.decode("utf-8")) == parse_feed(SAMPLE)


def test_parse_without_channel_is_empty():
    feed = parse_feed("<rss></rss>")
    assert feed.channel.items == []
    assert feed.channel.link == ""


def test_parse_malformed_raises():
    with pytest.raises(ValueError):
        parse_feed(b"<rss><channel>")


class _Handler(http.server.BaseHTTPRequestHandler):
    seen_agents: list = []

    def do_GET(self):
        type(self).seen_agents.append(self.headers.get("User-Agent"))
        if self.path != "/index.xml":
            self.send_error(404)
            return
        self.send_response(200)
        self.send_header("Content-Type", "application/rss+xml")
        self.send_header("Content-Length", str(len(SAMPLE)))
        self.end_headers()
        self.wfile.write(SAMPLE)

    def log_message(self, *args):
        pass


@pytest.fixture
def server():
    _Handler.seen_agents = []
    httpd = http.server.HTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()


def test_fetch_feed_downloads_and_parses(server):
    feed = fetch_feed(f"{server}/index.xml", timeout=5)
    assert feed == parse_feed(SAMPLE)
    assert _Handler.seen_agents == ["gator"]


def test_fetch_feed_http_error(server):
    with pytest.raises(urllib.error.HTTPError):
        fetch_feed(f"{server}/missing.xml", timeout=5)