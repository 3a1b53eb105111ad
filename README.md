# gator

`gator` is a small command-line RSS aggregator. It keeps users and the feeds
they have added in a local SQLite database, remembers which user is logged in,
and can fetch an RSS feed and print its channel.

It uses only the Python standard library.

## Installation

```
pip install .
```

This installs the `gator` command.

## Configuration

`gator` reads its settings from `.gatorconfig.json` in your home directory.
The file must exist before any command is run; if it is missing or is not a
JSON object, `gator` reports `error reading config: ...` and exits with
status 1.

```json
{
  "db_url": "gator.db",
  "current_user_name": ""
}
```

- `db_url` names the SQLite database. It may be a plain file path,
  `sqlite:///<path>`, or `sqlite://` / `:memory:` (or an empty string) for an
  in-memory database. Any other `scheme://` URL is rejected. The tables are
  created automatically when the database is opened.
- `current_user_name` is the logged-in user. `gator` rewrites the file itself
  (with just these two keys) when you register, log in or reset.

## Usage

```
gator <command> [args...]
```

| Command                      | What it does                                                   |
|------------------------------|----------------------------------------------------------------|
| `gator register <name>`      | Create a user and make it the current user.                    |
| `gator login <name>`         | Switch to an existing user.                                    |
| `gator users`                | List all users; the current one is marked `(current)`.         |
| `gator reset`                | Delete every user (and their feeds) and clear the current user.|
| `gator addfeed <name> <url>` | Add a feed owned by the current user.                          |
| `gator feeds`                | List every feed with its name, URL and the user who added it.  |
| `gator agg`                  | Fetch `https://www.wagslane.dev/index.xml` and print its channel. |

Messages and errors go to standard error. Run with no command, `gator` prints
`Usage: cli <command> [args...]` and exits with status 0. A command given the
wrong number of arguments reports a usage line such as
`usage: addfeed <name> <url>`; that, an unknown command (`command not found`)
or any other failure exits with status 1. Success exits with status 0.

User names and feed URLs are unique; registering a name twice or adding the
same URL twice fails.

### Example

```
$ gator register alice
$ gator addfeed "Example Blog" https://example.com/index.xml
$ gator feeds
* Example Blog
* https://example.com/index.xml
* alice
$ gator users
* alice (current)
```

## Using it from Python

```python
from gator.config import read, config_path
from gator.database import connect
from gator.rss import parse_feed

cfg = read(config_path())          # gator.config.Config(db_url, user_name)
with connect(cfg.db_url) as queries:   # gator.database.Queries
    for user in queries.get_all_users():
        print(user.name)

feed = parse_feed(b"<rss><channel><description>A &amp; B</description></channel></rss>")
print(feed.channel.description)    # "A & B"
```

- `gator.config`: `read(path=None)`, `config_path()`, and `Config` with
  `set_user(user_name)` and `write()`.
- `gator.database`: `connect(db_url)` returns `Queries`, with
  `create_user`, `get_user`, `get_user_with_id`, `get_id`, `get_all_users`,
  `delete_users`, `create_feed`, `get_feed_by_url`, `get_all_feed_names`,
  `get_feed_name_url_user` and `delete_feeds`. Lookups that find nothing raise
  `LookupError`. Rows come back as the `User`, `Feed` and `FeedNameUrlUser`
  dataclasses.
- `gator.rss`: `parse_feed(data)` and `fetch_feed(feed_url, timeout=10.0)`
  return an `RSSFeed` whose `channel` (`RSSChannel`) holds `RSSItem`s. Titles
  and descriptions are HTML-unescaped. The channel's `title` is filled from
  its description. Malformed XML raises `ValueError`.
- `gator.commands`: `Command`, `Commands` (`register`, `run`) and
  `CommandNotFoundError`.
- `gator.handlers`: `State` and the `handler_*` functions behind each command.
- `gator.cli`: `build_commands()` and `main(argv=None)`.

## What it does not do

- There is no command to follow or unfollow feeds. A `feed_follows` table is
  created, and a `FeedFollow` dataclass exists, but no query reads or writes
  it.
- `agg` fetches one fixed feed and prints it; it does not fetch the feeds you
  have added, and it stores no posts.
- Only SQLite databases are supported.

## Running the tests

```
pip install .[test]
pytest
```