"""Per-tick player input and a scripted source for headless sessions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from chunkrealm.core.models import Vec2


@dataclass(frozen=True, slots=True)
class PlayerInput:
    """What the player asked for this tick (already polled by the input layer)."""

    move_x: float = 0.0
    move_y: float = 0.0
    attack_pressed: bool = False
    restart_pressed: bool = False

    @property
    def direction(self) -> Vec2:
        return Vec2(self.move_x, self.move_y)


IDLE = PlayerInput()


class ScriptedInput:
    """Replays ``(ticks, PlayerInput)`` segments, then idles forever."""

    __slots__ = ("_segments",)

    def __init__(self, segments: Sequence[tuple[int, PlayerInput]]) -> None:
        self._segments = list(segments)

    @classmethod
    def walking(cls, dx: float, dy: float, ticks: int, attack_every: int = 0) -> ScriptedInput:
        """Walk in one direction, pressing attack every *attack_every* ticks."""
        if attack_every <= 0:
            return cls([(ticks, PlayerInput(dx, dy))])
        segments: list[tuple[int, PlayerInput]] = []
        remaining = ticks
        while remaining > 0:
            segments.append((1, PlayerInput(dx, dy, attack_pressed=True)))
            run = min(attack_every - 1, remaining - 1)
            if run > 0:
                segments.append((run, PlayerInput(dx, dy)))
            remaining -= 1 + max(run, 0)
        return cls(segments)

    def __iter__(self) -> Iterator[PlayerInput]:
        for count, inp in self._segments:
            for _ in range(count):
                yield inp
        while True:
            yield IDLE
