"""Command-line entry point."""

from __future__ import annotations

import sys

from gator import config
from gator.commands import Command, Commands
from gator.database import connect
from gator.handlers import (
    State,
    handler_add_feed,
    handler_agg,
    handler_delete_all,
    handler_get_feeds,
    handler_get_users,
    handler_login,
    handler_register,
)


def build_commands() -> Commands:
    """Return a registry holding every known command."""
    cmds = Commands()
    cmds.register("login", handler_login)
    cmds.register("register", handler_register)
    cmds.register("reset", handler_delete_all)
    cmds.register("users", handler_get_users)
    cmds.register("agg", handler_agg)
    cmds.register("addfeed", handler_add_feed)
    cmds.register("feeds", handler_get_feeds)
    return cmds


def _log(message: object) -> None:
    print(message, file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Run one command from ``argv`` (defaults to the process arguments)."""
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        cfg = config.read()
    except (OSError, ValueError) as exc:
        _log(f"error reading config: {exc}")
        return 1

    try:
        db = connect(cfg.db_url)
    except Exception as exc:  # any failure to open the database is reported
        _log(exc)
        return 1

    with db:
        cmds = build_commands()

        if not args:
            _log("Usage: cli <command> [args...]")
            return 0

        cmd = Command(name=args[0], args=tuple(args[1:]))
        try:
            cmds.run(State(db=db, cfg=cfg), cmd)
        except Exception as exc:
            _log(exc)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())