"""Reading and writing the user's gator configuration file."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_FILE_NAME = ".gatorconfig.json"


def config_path() -> Path:
    """Return the location of the configuration file in the user's home directory."""
    return Path.home() / CONFIG_FILE_NAME


@dataclass
class Config:
    """Database URL and the name of the user currently logged in."""

    db_url: str = ""
    user_name: str = ""
    path: Path | None = field(default=None, compare=False, repr=False)

    def set_user(self, user_name: str) -> None:
        """Make ``user_name`` the current user and save the configuration."""
        self.user_name = user_name
        self.write()

    def write(self) -> None:
        """Save the configuration as JSON to its file."""
        target = self.path if self.path is not None else config_path()
        payload = {"db_url": self.db_url, "current_user_name": self.user_name}
        Path(target).write_text(
            json.dumps(payload, separators=(",", ":")), encoding="utf-8"
        )
        self.path = Path(target)

    def to_dict(self) -> dict[str, str]:
        return {"db_url": self.db_url, "current_user_name": self.user_name}


def read(path: str | Path | None = None) -> Config:
    """Load the configuration from ``path``, or from the home directory by default.

    Raises ``FileNotFoundError`` when the file is missing and ``ValueError``
    when it does not hold a JSON object.
    """
    location = Path(path) if path is not None else config_path()
    text = location.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid config file {location}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"invalid config file {location}: expected a JSON object")

    def _text(key: str) -> str:
        value = data.get(key)
        return value if isinstance(value, str) else ""

    return Config(
        db_url=_text("db_url"),
        user_name=_text("current_user_name"),
        path=location,
    )