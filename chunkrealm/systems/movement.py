"""Movement/collision resolver with wall sliding.

One resolver serves every actor. A ``MoveProfile`` says how an actor is
tested against the world:

- player: four box corners at +-radius, plus the reduced-speed diagonal
  slide when both axis attempts fail
- monster: a single centre point, axis fallback only
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from chunkrealm.core.models import Vec2

WalkableQuery = Callable[[Vec2], bool]


@dataclass(frozen=True, slots=True)
class MoveProfile:
    """How an actor's candidate positions are tested."""

    radius: float | None = None     # None = single-point check
    diagonal_slide: bool = False

    @classmethod
    def box(cls, radius: float) -> MoveProfile:
        return cls(radius=radius, diagonal_slide=True)

    @classmethod
    def point(cls) -> MoveProfile:
        return cls(radius=None, diagonal_slide=False)


class MovementResolver:
    """Constrains a desired displacement to walkable space."""

    __slots__ = ("_is_walkable", "_slide_factor")

    def __init__(self, is_walkable: WalkableQuery, slide_factor: float = 0.3) -> None:
        self._is_walkable = is_walkable
        self._slide_factor = slide_factor

    def is_clear(self, pos: Vec2, profile: MoveProfile) -> bool:
        """Feasibility of a candidate position: every sample point walkable."""
        r = profile.radius
        if r is None:
            return self._is_walkable(pos)
        return (
            self._is_walkable(Vec2(pos.x - r, pos.y - r))
            and self._is_walkable(Vec2(pos.x + r, pos.y - r))
            and self._is_walkable(Vec2(pos.x - r, pos.y + r))
            and self._is_walkable(Vec2(pos.x + r, pos.y + r))
        )

    def resolve(
        self,
        position: Vec2,
        direction: Vec2,
        speed: float,
        dt: float,
        profile: MoveProfile,
    ) -> Vec2:
        """Return the legal position after trying to move along *direction*.

        *direction* need not be normalized; a zero vector means no movement.
        """
        if direction.is_zero():
            return position

        unit = direction.normalized()
        step = speed * dt
        desired = position + unit * step
        if self.is_clear(desired, profile):
            return desired

        # Axis-separated sliding: horizontal from the current position, then
        # vertical from the (possibly updated) x.
        final_x, final_y = position.x, position.y
        if direction.x != 0.0:
            candidate = Vec2(position.x + unit.x * step, position.y)
            if self.is_clear(candidate, profile):
                final_x = candidate.x
        if direction.y != 0.0:
            candidate = Vec2(final_x, position.y + unit.y * step)
            if self.is_clear(candidate, profile):
                final_y = candidate.y
        final = Vec2(final_x, final_y)

        if (
            profile.diagonal_slide
            and final == position
            and direction.x != 0.0
            and direction.y != 0.0
        ):
            return self._diagonal_slide(position, direction, step, profile)
        return final

    def _diagonal_slide(self, position: Vec2, direction: Vec2, step: float, profile: MoveProfile) -> Vec2:
        """Slide along one axis at reduced speed, larger input component first."""
        slide = step * self._slide_factor
        along_x = Vec2(position.x + _sign(direction.x) * slide, position.y)
        along_y = Vec2(position.x, position.y + _sign(direction.y) * slide)
        order = (along_x, along_y) if abs(direction.x) > abs(direction.y) else (along_y, along_x)
        for candidate in order:
            if self.is_clear(candidate, profile):
                return candidate
        return position


def _sign(value: float) -> float:
    if value > 0.0:
        return 1.0
    if value < 0.0:
        return -1.0
    return 0.0
