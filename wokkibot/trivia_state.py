"""Trivia questions and per-guild game state."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any


@dataclass
class TriviaQuestion:
    """One question as returned by the trivia API."""

    type: str
    difficulty: str
    category: str
    question: str
    correct_answer: str
    incorrect_answers: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TriviaQuestion":
        return cls(
            type=data.get("type", ""),
            difficulty=data.get("difficulty", ""),
            category=data.get("category", ""),
            question=data.get("question", ""),
            correct_answer=data.get("correct_answer", ""),
            incorrect_answers=list(data.get("incorrect_answers") or []),
        )


@dataclass
class Trivia:
    """Whether a guild currently has a game running."""

    is_active: bool = False

    def set_status(self, status: bool) -> None:
        self.is_active = status


class TriviaManager:
    """Hands out one Trivia state per guild, creating it on first use."""

    def __init__(self) -> None:
        self._trivias: dict[int, Trivia] = {}
        self._lock = threading.Lock()

    def get(self, guild_id: int) -> Trivia:
        with self._lock:
            return self._trivias.setdefault(guild_id, Trivia())