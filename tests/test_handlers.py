import json
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from gator.commands import Command
from gator.config import Config
from gator.database import connect
from gator.handlers import (
    AGG_FEED_URL,
    State,
    UsageError,
    handler_add_feed,
    handler_agg,
    handler_delete_all,
    handler_get_feeds,
    handler_get_users,
    handler_login,
    handler_register,
)


@pytest.fixture
def state(tmp_path):
    db = connect(":memory:")
    cfg = Config(db_url=":memory:", path=tmp_path / "cfg.json")
    yield State(db=db, cfg=cfg)
    db.close()


def _saved_user(state):
    data = json.loads(state.cfg.path.read_text(encoding="utf-8"))
    return data["current_user_name"]


def test_register_creates_user_and_sets_current(state):
    handler_register(state, Command("register", ("alice",)))
    assert state.db.get_user("alice").name == "alice"
    assert state.cfg.user_name == "alice"
    assert _saved_user(state) == "alice"


@pytest.mark.parametrize("args", [(), ("a", "b")])
def test_register_usage(state, args):
    with pytest.raises(UsageError, match="usage: register <name>"):
        handler_register(state, Command("register", args))


def test_register_duplicate_fails(state):
    handler_register(state, Command("register", ("alice",)))
    with pytest.raises(RuntimeError, match="couldn't create user"):
        handler_register(state, Command("register", ("alice",)))


def test_login_switches_user(state):
    handler_register(state, Command("register", ("alice",)))
    handler_register(state, Command("register", ("bob",)))
    handler_login(state, Command("login", ("alice",)))
    assert state.cfg.user_name == "alice"
    assert _saved_user(state) == "alice"


def test_login_unknown_user(state):
    with pytest.raises(RuntimeError, match="couldn't find user"):
        handler_login(state, Command("login", ("nobody",)))


def test_login_usage(state):
    with pytest.raises(UsageError, match="usage: login <name>"):
        handler_login(state, Command("login", ()))


def test_reset_deletes_users_and_clears_current(state):
    handler_register(state, Command("register", ("alice",)))
    handler_delete_all(state, Command("reset"))
    assert state.db.get_all_users() == []
    assert state.cfg.user_name == ""
    assert _saved_user(state) == ""


def test_users_marks_current(state, capsys):
    handler_register(state, Command("register", ("alice",)))
    handler_register(state, Command("register", ("bob",)))
    capsys.readouterr()
    handler_get_users(state, Command("users"))
    lines = sorted(capsys.readouterr().out.splitlines())
    assert lines == ["* alice ", "* bob (current)"]


def test_add_feed_and_list_feeds(state, capsys):
    handler_register(state, Command("register", ("alice",)))
    handler_add_feed(state, Command("addfeed", ("Blog", "https://example.com/rss")))
    feed = state.db.get_feed_by_url("https://example.com/rss")
    assert feed.name == "Blog"
    assert feed.user_id == state.db.get_id("alice")

    capsys.readouterr()
    handler_get_feeds(state, Command("feeds"))
    out = capsys.readouterr().out
    assert out == "* Blog\n* https://example.com/rss\n* alice\n "


def test_add_feed_usage(state):
    with pytest.raises(UsageError, match="usage: addfeed <name> <url>"):
        handler_add_feed(state, Command("addfeed", ("only-name",)))


def test_add_feed_without_user(state):
    with pytest.raises(RuntimeError, match="couldn't get id"):
        handler_add_feed(state, Command("addfeed", ("Blog", "https://example.com/rss")))


def test_add_feed_duplicate_url(state):
    handler_register(state, Command("register", ("alice",)))
    handler_add_feed(state, Command("addfeed", ("Blog", "https://example.com/rss")))
    with pytest.raises(RuntimeError, match="couldn't create feed"):
        handler_add_feed(state, Command("addfeed", ("Other", "https://example.com/rss")))


def test_feeds_empty_prints_nothing(state, capsys):
    handler_get_feeds(state, Command("feeds"))
    assert capsys.readouterr().out == ""


RSS = b"""<?xml version="1.0"?>
<rss version="2.0"><channel>
<title>Ignored</title>
<link>https://example.com/</link>
<description>Hello &amp;amp; world</description>
<item><title>Post</title><link>https://example.com/p</link></item>
</channel></rss>"""


def test_agg_prints_channel(state, capsys):
    with patch("urllib.request.urlopen") as urlopen:
        response = MagicMock()
        response.read.return_value = RSS
        urlopen.return_value.__enter__.return_value = response
        handler_agg(state, Command("agg"))
        request = urlopen.call_args.args[0]

    assert request.full_url == AGG_FEED_URL
    out = capsys.readouterr().out
    assert out.startswith("Feed: RSSChannel(")
    assert "Hello & world" in out
    assert "https://example.com/p" in out


def test_agg_fetch_failure(state):
    with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("down")):
        with pytest.raises(RuntimeError, match="couldn't fetch feed"):
            handler_agg(state, Command("agg"))