"""Per-guild track queues for music playback."""

from __future__ import annotations

import threading
from typing import Any, Iterator


class Queue:
    """An ordered list of tracks waiting to be played."""

    def __init__(self) -> None:
        self.tracks: list[Any] = []

    def add(self, *tracks: Any) -> None:
        """Append tracks to the end of the queue."""
        self.tracks.extend(tracks)

    def next(self) -> Any | None:
        """Remove and return the first track, or None if the queue is empty."""
        if not self.tracks:
            return None
        return self.tracks.pop(0)

    def skip(self) -> Any | None:
        """Drop the first track and return the one now at the front, if any."""
        if not self.tracks:
            return None
        self.tracks.pop(0)
        return self.tracks[0] if self.tracks else None

    def clear(self) -> None:
        self.tracks = []

    def __len__(self) -> int:
        return len(self.tracks)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.tracks)


class QueueManager:
    """Hands out one queue per guild, creating it on first use."""

    def __init__(self) -> None:
        self._queues: dict[int, Queue] = {}
        self._lock = threading.Lock()

    def get(self, guild_id: int) -> Queue:
        with self._lock:
            queue = self._queues.get(guild_id)
            if queue is None:
                queue = self._queues[guild_id] = Queue()
            return queue

    def delete(self, guild_id: int) -> None:
        with self._lock:
            self._queues.pop(guild_id, None)