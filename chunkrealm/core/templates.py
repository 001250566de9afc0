"""Monster templates — static species data shared by every spawned instance."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from chunkrealm.core.enums import MonsterKind

AGGRESSIVE = "aggressive"

# Display name -> sprite tag
KIND_BY_NAME: dict[str, MonsterKind] = {
    "Forest Goblin": MonsterKind.FOREST_GOBLIN,
    "Wild Boar": MonsterKind.WILD_BOAR,
    "Wolf": MonsterKind.WOLF,
    "Sand Scorpion": MonsterKind.SAND_SCORPION,
    "Desert Bandit": MonsterKind.DESERT_BANDIT,
    "Dust Devil": MonsterKind.DUST_DEVIL,
    "Oasis Guardian": MonsterKind.OASIS_GUARDIAN,
}


def kind_for_name(name: str) -> MonsterKind:
    """Resolve the sprite tag for a species name; unknown names use the goblin sprite."""
    return KIND_BY_NAME.get(name, MonsterKind.FOREST_GOBLIN)


@dataclass(frozen=True, slots=True)
class LootTable:
    gold: int = 0
    item_chance: float = 0.0


@dataclass(frozen=True, slots=True)
class MonsterTemplate:
    """Immutable blueprint for one monster species."""

    name: str
    species: str
    hp: int
    attack: int
    speed: float
    color: str = "white"
    behavior: frozenset[str] = field(default_factory=frozenset)
    loot: LootTable = field(default_factory=LootTable)
    kind: MonsterKind = MonsterKind.FOREST_GOBLIN

    @classmethod
    def build(
        cls,
        name: str,
        species: str,
        hp: int,
        attack: int,
        speed: float,
        color: str = "white",
        behavior: Iterable[str] = (),
        gold: int = 0,
        item_chance: float = 0.0,
    ) -> MonsterTemplate:
        """Create a template with its sprite tag resolved from *name*."""
        return cls(
            name=name, species=species, hp=hp, attack=attack, speed=speed,
            color=color, behavior=frozenset(behavior),
            loot=LootTable(gold=gold, item_chance=item_chance),
            kind=kind_for_name(name),
        )

    @property
    def is_aggressive(self) -> bool:
        return AGGRESSIVE in self.behavior


def find_template(templates: Iterable[MonsterTemplate], name: str) -> MonsterTemplate | None:
    """Exact, case-sensitive name lookup. First match wins."""
    for template in templates:
        if template.name == name:
            return template
    return None


def default_templates() -> list[MonsterTemplate]:
    """Fallback species list used when no template file can be read."""
    return [
        MonsterTemplate.build(
            name="Default Goblin", species="goblin", hp=30, attack=10, speed=1.5,
            color="green", behavior=(AGGRESSIVE,), gold=5, item_chance=0.1,
        ),
    ]
