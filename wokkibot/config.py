"""Loading and saving of the bot's JSON configuration."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

PathLike = Union[str, "os.PathLike[str]"]

DEFAULT_CONFIG_PATH = "config.json"


@dataclass
class LavalinkConfig:
    """Audio node settings."""

    enabled: bool = False
    nodes: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class WebConfig:
    """OAuth settings for the admin web interface."""

    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = ""


@dataclass
class Config:
    """Top-level bot configuration."""

    token: str = ""
    guild_id: str = ""
    trivia_token: str = ""
    admins: list[int] = field(default_factory=list)
    lavalink: LavalinkConfig = field(default_factory=LavalinkConfig)
    web: WebConfig = field(default_factory=WebConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Build a configuration from decoded JSON."""
        lavalink = data.get("lavalink") or {}
        web = data.get("web") or {}
        return cls(
            token=data.get("token", ""),
            guild_id=data.get("guildid", ""),
            trivia_token=data.get("trivia_token", ""),
            admins=[int(admin) for admin in data.get("admins") or []],
            lavalink=LavalinkConfig(
                enabled=bool(lavalink.get("enabled", False)),
                nodes=list(lavalink.get("nodes") or []),
            ),
            web=WebConfig(
                client_id=web.get("client_id", ""),
                client_secret=web.get("client_secret", ""),
                redirect_uri=web.get("redirect_uri", ""),
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form, with snowflakes as strings."""
        return {
            "token": self.token,
            "guildid": self.guild_id,
            "trivia_token": self.trivia_token,
            "admins": [str(admin) for admin in self.admins],
            "lavalink": {"enabled": self.lavalink.enabled, "nodes": list(self.lavalink.nodes)},
            "web": {
                "client_id": self.web.client_id,
                "client_secret": self.web.client_secret,
                "redirect_uri": self.web.redirect_uri,
            },
        }


def load_config(path: PathLike = DEFAULT_CONFIG_PATH) -> Config:
    """Read the configuration file."""
    with open(path, encoding="utf-8") as handle:
        return Config.from_dict(json.load(handle))


def save_config(config: Config, path: PathLike = DEFAULT_CONFIG_PATH) -> None:
    """Write the configuration file, replacing its contents."""
    text = json.dumps(config.to_dict(), indent=1, ensure_ascii=False)
    target = Path(path)
    with target.open("w", encoding="utf-8") as handle:
        handle.write(text)
        handle.flush()
        os.fsync(handle.fileno())