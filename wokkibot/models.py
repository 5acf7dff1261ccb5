"""Plain data records shared across the bot."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Any, Mapping

STATISTIC_NAMES = (
    "video_downloads",
    "names_given",
    "songs_played",
    "pizzas_generated",
    "coins_flipped",
    "dice_rolled",
    "trivia_games_played",
    "trivia_games_won",
    "trivia_games_lost",
)


def _row_to_dict(row: Any) -> dict[str, Any]:
    if isinstance(row, Mapping):
        return dict(row)
    return {key: row[key] for key in row.keys()}


def _parse_time(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    return datetime.fromisoformat(str(value))


def _snowflake(value: Any) -> int:
    if value is None or value == "":
        return 0
    return int(value)


@dataclass
class Command:
    """A custom chat command defined by a guild member."""

    name: str
    prefix: str
    description: str
    output: str
    author: int
    guild_id: int


@dataclass
class Guild:
    """Per-guild settings."""

    id: int
    pin_channel: int = 0
    trivia_token: str = ""
    convert_x_links: bool = True


@dataclass
class Reminder:
    """A message to deliver to a user at a given time."""

    user_id: int
    channel_id: int
    message: str
    remind_at: datetime
    guild_id: int = 0
    id: int = 0

    @classmethod
    def from_row(cls, row: Any) -> "Reminder":
        """Build a reminder from a database row or mapping."""
        data = _row_to_dict(row)
        return cls(
            id=int(data.get("id") or 0),
            user_id=_snowflake(data["user_id"]),
            channel_id=_snowflake(data["channel_id"]),
            guild_id=_snowflake(data.get("guild_id")),
            message=data["message"],
            remind_at=_parse_time(data["remind_at"]),
        )


@dataclass
class Statistics:
    """Global usage counters."""

    video_downloads: int = 0
    names_given: int = 0
    songs_played: int = 0
    pizzas_generated: int = 0
    coins_flipped: int = 0
    dice_rolled: int = 0
    trivia_games_played: int = 0
    trivia_games_won: int = 0
    trivia_games_lost: int = 0

    @classmethod
    def from_row(cls, row: Any) -> "Statistics":
        """Build statistics from a database row or mapping."""
        data = _row_to_dict(row)
        names = {f.name for f in fields(cls)}
        return cls(**{key: int(value or 0) for key, value in data.items() if key in names})