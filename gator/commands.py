"""Named commands and the registry that dispatches them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass(frozen=True)
class Command:
    """A command name together with its positional arguments."""

    name: str
    args: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))


class CommandNotFoundError(LookupError):
    """Raised when no handler is registered under a command's name."""

    def __init__(self, name: str = "") -> None:
        super().__init__("command not found")
        self.name = name


Handler = Callable[[Any, Command], Any]


class Commands:
    """Registry mapping command names to handler functions."""

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def register(self, name: str, handler: Handler) -> None:
        """Register ``handler`` under ``name``, replacing any earlier one."""
        self._handlers[name] = handler

    def run(self, state: Any, cmd: Command) -> Any:
        """Run the handler registered for ``cmd.name``."""
        try:
            handler = self._handlers[cmd.name]
        except KeyError:
            raise CommandNotFoundError(cmd.name) from None
        return handler(state, cmd)