"""Bounded log of gameplay events (chunk transitions, kills, respawns)."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GameEvent:
    """A single gameplay event."""

    tick: int
    category: str                   # "chunk", "combat", "player"
    message: str
    chunk_ids: tuple[str, ...] = ()  # Chunks involved in this event


class EventLog:
    """Keeps the most recent *capacity* events; older ones fall off the front."""

    __slots__ = ("_buffer",)

    def __init__(self, capacity: int = 1000) -> None:
        self._buffer: deque[GameEvent] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._buffer)

    def append(self, event: GameEvent) -> None:
        self._buffer.append(event)

    def append_many(self, events: list[GameEvent]) -> None:
        self._buffer.extend(events)

    def since_tick(self, tick: int) -> list[GameEvent]:
        """Return all events with tick >= *tick*."""
        return [e for e in self._buffer if e.tick >= tick]

    def by_category(self, category: str) -> list[GameEvent]:
        return [e for e in self._buffer if e.category == category]

    def latest(self, count: int = 50) -> list[GameEvent]:
        """Return the *count* most recent events."""
        return list(self._buffer)[-count:]

    def clear(self) -> None:
        self._buffer.clear()
