"""Storage of users and feeds in an SQLite database."""

from __future__ import annotations

import sqlite3
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    name TEXT NOT NULL UNIQUE
);
CREATE TABLE IF NOT EXISTS feeds (
    id TEXT PRIMARY KEY,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    name TEXT NOT NULL,
    url TEXT NOT NULL UNIQUE,
    user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE
);
CREATE TABLE IF NOT EXISTS feed_follows (
    id TEXT PRIMARY KEY,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    feed_id TEXT NOT NULL REFERENCES feeds(id) ON DELETE CASCADE,
    UNIQUE (user_id, feed_id)
);
"""

_NO_ROWS = "no rows in result set"


@dataclass(frozen=True)
class User:
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    name: str


@dataclass(frozen=True)
class Feed:
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    name: str
    url: str
    user_id: uuid.UUID


@dataclass(frozen=True)
class FeedFollow:
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    user_id: uuid.UUID
    feed_id: uuid.UUID


@dataclass(frozen=True)
class FeedNameUrlUser:
    name: str
    url: str
    user_id: uuid.UUID


def _user(row: sqlite3.Row) -> User:
    return User(
        id=uuid.UUID(row["id"]),
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
        name=row["name"],
    )


def _feed(row: sqlite3.Row) -> Feed:
    return Feed(
        id=uuid.UUID(row["id"]),
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
        name=row["name"],
        url=row["url"],
        user_id=uuid.UUID(row["user_id"]),
    )


class Queries:
    """Typed queries over an open SQLite connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        self._conn = conn

    def __enter__(self) -> Queries:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    def create_schema(self) -> None:
        """Create the tables if they do not exist yet."""
        self._conn.executescript(_SCHEMA)

    def _one(self, sql: str, params: tuple = ()) -> sqlite3.Row:
        row = self._conn.execute(sql, params).fetchone()
        if row is None:
            raise LookupError(_NO_ROWS)
        return row

    # feeds

    def create_feed(
        self,
        id: uuid.UUID,
        created_at: datetime,
        updated_at: datetime,
        name: str,
        url: str,
        user_id: uuid.UUID,
    ) -> Feed:
        with self._conn:
            self._conn.execute(
                "INSERT INTO feeds (id, created_at, updated_at, name, url, user_id) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    str(id),
                    created_at.isoformat(),
                    updated_at.isoformat(),
                    name,
                    url,
                    str(user_id),
                ),
            )
        return self.get_feed_by_url(url)

    def delete_feeds(self) -> None:
        with self._conn:
            self._conn.execute("DELETE FROM feeds")

    def get_all_feed_names(self) -> list[str]:
        return [row["name"] for row in self._conn.execute("SELECT name FROM feeds")]

    def get_feed_by_url(self, url: str) -> Feed:
        return _feed(
            self._one(
                "SELECT id, created_at, updated_at, name, url, user_id "
                "FROM feeds WHERE url = ?",
                (url,),
            )
        )

    def get_feed_name_url_user(self) -> list[FeedNameUrlUser]:
        rows = self._conn.execute("SELECT name, url, user_id FROM feeds")
        return [
            FeedNameUrlUser(name=row["name"], url=row["url"], user_id=uuid.UUID(row["user_id"]))
            for row in rows
        ]

    # users

    def create_user(
        self,
        id: uuid.UUID,
        created_at: datetime,
        updated_at: datetime,
        name: str,
    ) -> User:
        with self._conn:
            self._conn.execute(
                "INSERT INTO users (id, created_at, updated_at, name) VALUES (?, ?, ?, ?)",
                (str(id), created_at.isoformat(), updated_at.isoformat(), name),
            )
        return self.get_user_with_id(id)

    def delete_users(self) -> None:
        with self._conn:
            self._conn.execute("DELETE FROM users")

    def get_all_users(self) -> list[User]:
        rows = self._conn.execute("SELECT id, created_at, updated_at, name FROM users")
        return [_user(row) for row in rows]

    def get_id(self, name: str) -> uuid.UUID:
        row = self._one("SELECT id FROM users WHERE name = ? LIMIT 1", (name,))
        return uuid.UUID(row["id"])

    def get_user(self, name: str) -> User:
        return _user(
            self._one(
                "SELECT id, created_at, updated_at, name FROM users WHERE name = ? LIMIT 1",
                (name,),
            )
        )

    def get_user_with_id(self, id: uuid.UUID) -> User:
        return _user(
            self._one(
                "SELECT id, created_at, updated_at, name FROM users WHERE id = ? LIMIT 1",
                (str(id),),
            )
        )


def _database_location(db_url: str) -> str:
    if db_url in ("", ":memory:", "sqlite://", "sqlite:///:memory:"):
        return ":memory:"
    if db_url.startswith("sqlite:///"):
        return db_url[len("sqlite:///"):]
    if "://" in db_url:
        raise ValueError(f"unsupported database URL: {db_url}")
    return str(Path(db_url))


def connect(db_url: str) -> Queries:
    """Open the database named by ``db_url`` and make sure its tables exist.

    Accepts ``sqlite:///<path>``, ``sqlite://`` or ``:memory:``, or a plain file path.
    """
    queries = Queries(sqlite3.connect(_database_location(db_url)))
    queries.create_schema()
    return queries