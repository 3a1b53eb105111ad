"""Handlers for the user and feed commands."""

from __future__ import annotations

import sqlite3
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from gator.commands import Command
from gator.config import Config
from gator.database import Queries
from gator.rss import fetch_feed

AGG_FEED_URL = "https://www.wagslane.dev/index.xml"

_DB_ERRORS = (LookupError, sqlite3.Error)


@dataclass
class State:
    """What every handler works with: the database and the configuration."""

    db: Queries
    cfg: Config


class UsageError(ValueError):
    """Raised when a command is given the wrong number of arguments."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


def handler_agg(state: State, cmd: Command) -> None:
    """Fetch the aggregation feed and print its channel."""
    try:
        feed = fetch_feed(AGG_FEED_URL)
    except (OSError, ValueError) as exc:
        raise RuntimeError(f"couldn't fetch feed: {exc}") from exc
    print(f"Feed: {feed.channel}")


def handler_add_feed(state: State, cmd: Command) -> None:
    """Add a feed owned by the current user: ``addfeed <name> <url>``."""
    if len(cmd.args) != 2:
        raise UsageError(f"usage: {cmd.name} <name> <url>")
    name, url = cmd.args

    try:
        user_id = state.db.get_id(state.cfg.user_name)
    except _DB_ERRORS as exc:
        raise RuntimeError(f"couldn't get id: {exc}") from exc

    now = _now()
    try:
        state.db.create_feed(uuid.uuid4(), now, now, name, url, user_id)
    except _DB_ERRORS as exc:
        raise RuntimeError(f"couldn't create feed: {exc}") from exc


def handler_get_feeds(state: State, cmd: Command) -> None:
    """Print every feed with its URL and the name of the user who added it."""
    try:
        feeds = state.db.get_feed_name_url_user()
    except _DB_ERRORS as exc:
        raise RuntimeError(f"couldn't get users: {exc}") from exc

    for feed in feeds:
        try:
            user = state.db.get_user_with_id(feed.user_id)
        except _DB_ERRORS as exc:
            raise RuntimeError("couldnt find user when getting feeds") from exc
        print(f"* {feed.name}")
        print(f"* {feed.url}")
        print(f"* {user.name}\n ", end="")


def handler_register(state: State, cmd: Command) -> None:
    """Create a user and make it the current one: ``register <name>``."""
    if len(cmd.args) != 1:
        raise UsageError(f"usage: {cmd.name} <name>")
    (name,) = cmd.args

    now = _now()
    try:
        user = state.db.create_user(uuid.uuid4(), now, now, name)
    except _DB_ERRORS as exc:
        raise RuntimeError(f"couldn't create user: {exc}") from exc

    try:
        state.cfg.set_user(user.name)
    except OSError as exc:
        raise RuntimeError(f"couldn't set current user: {exc}") from exc


def handler_login(state: State, cmd: Command) -> None:
    """Switch the current user to an existing one: ``login <name>``."""
    if len(cmd.args) != 1:
        raise UsageError(f"usage: {cmd.name} <name>")
    (name,) = cmd.args

    try:
        state.db.get_user(name)
    except _DB_ERRORS as exc:
        raise RuntimeError(f"couldn't find user: {exc}") from exc

    try:
        state.cfg.set_user(name)
    except OSError as exc:
        raise RuntimeError(f"couldn't set current user: {exc}") from exc


def handler_delete_all(state: State, cmd: Command) -> None:
    """Delete every user and clear the current user."""
    try:
        state.db.delete_users()
    except _DB_ERRORS as exc:
        raise RuntimeError(f"couldn't delete users: {exc}") from exc

    try:
        state.cfg.set_user("")
    except OSError as exc:
        raise RuntimeError(f"couldn't unset current user: {exc}") from exc


def handler_get_users(state: State, cmd: Command) -> None:
    """List all users, marking the current one."""
    try:
        users = state.db.get_all_users()
    except _DB_ERRORS as exc:
        raise RuntimeError(f"couldn't get users: {exc}") from exc

    for user in users:
        current = "(current)" if state.cfg.user_name == user.name else ""
        print(f"* {user.name} {current}")