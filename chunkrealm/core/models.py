"""Core data models: Vec2, Player, ActiveMonster, LootAward."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chunkrealm.core.enums import Facing

if TYPE_CHECKING:
    from chunkrealm.core.templates import MonsterTemplate


@dataclass(frozen=True, slots=True)
class Vec2:
    """Immutable continuous 2D position or displacement (pixels)."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scale: float) -> Vec2:
        return Vec2(self.x * scale, self.y * scale)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vec2:
        """Unit vector in the same direction; the zero vector stays zero."""
        n = self.length()
        if n == 0.0:
            return Vec2()
        return Vec2(self.x / n, self.y / n)

    def distance(self, other: Vec2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0

    def __repr__(self) -> str:
        return f"({self.x:.1f}, {self.y:.1f})"


def circles_overlap(a: Vec2, radius_a: float, b: Vec2, radius_b: float) -> bool:
    """True when two bounding circles intersect (touching does not count)."""
    return a.distance(b) < radius_a + radius_b


@dataclass(frozen=True, slots=True)
class LootAward:
    """What the player earns from a single kill."""

    gold: int
    item_dropped: bool = False


@dataclass(slots=True)
class ActiveMonster:
    """A live monster instance spawned from a template inside a chunk."""

    template: MonsterTemplate
    position: Vec2
    current_hp: int
    spawn_position: Vec2 = field(default_factory=Vec2)
    is_dead: bool = False
    respawn_timer: float = 0.0

    @classmethod
    def spawn(cls, template: MonsterTemplate, position: Vec2) -> ActiveMonster:
        return cls(
            template=template, position=position,
            current_hp=template.hp, spawn_position=position,
        )

    @property
    def alive(self) -> bool:
        return not self.is_dead

    @property
    def hp_ratio(self) -> float:
        return self.current_hp / self.template.hp if self.template.hp > 0 else 0.0

    def take_damage(self, amount: int) -> bool:
        """Apply *amount* damage, clamped at zero. Returns True on the killing blow."""
        if self.is_dead:
            return False
        self.current_hp = max(0, self.current_hp - amount)
        return self.current_hp == 0

    def copy(self) -> ActiveMonster:
        return ActiveMonster(
            template=self.template, position=self.position,
            current_hp=self.current_hp, spawn_position=self.spawn_position,
            is_dead=self.is_dead, respawn_timer=self.respawn_timer,
        )


@dataclass(slots=True)
class Player:
    """The single player actor."""

    position: Vec2
    hp: int = 100
    max_hp: int = 100
    attack: int = 15
    radius: float = 10.0
    attack_cooldown: float = 0.0
    is_attacking: bool = False
    facing: Facing = Facing.RIGHT
    animation_phase: float = 0.0
    is_moving: bool = False
    gold: int = 0
    items_found: int = 0

    @property
    def alive(self) -> bool:
        return self.hp > 0

    @property
    def walk_frame(self) -> str:
        """Sprite frame name for the current animation phase."""
        if self.is_moving and math.sin(self.animation_phase) > 0.0:
            return "walk1"
        return "idle"

    def copy(self) -> Player:
        return Player(
            position=self.position, hp=self.hp, max_hp=self.max_hp,
            attack=self.attack, radius=self.radius,
            attack_cooldown=self.attack_cooldown, is_attacking=self.is_attacking,
            facing=self.facing, animation_phase=self.animation_phase,
            is_moving=self.is_moving, gold=self.gold, items_found=self.items_found,
        )
