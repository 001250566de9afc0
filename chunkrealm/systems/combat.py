"""Contact combat: touch damage, attack presses, kills, loot and respawn."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chunkrealm.core.enums import Domain
from chunkrealm.core.models import LootAward, circles_overlap

if TYPE_CHECKING:
    from chunkrealm.config import RealmConfig
    from chunkrealm.core.chunk import Chunk
    from chunkrealm.core.models import ActiveMonster, Player
    from chunkrealm.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

# Slack for accumulated float error in respawn countdowns
_TIMER_EPSILON = 1e-9


@dataclass(frozen=True, slots=True)
class CombatOutcome:
    """Something that happened to one monster during a combat pass."""

    kind: str                   # "hit", "kill" or "respawn"
    chunk_id: str
    monster_index: int
    monster_name: str
    damage: int = 0
    loot: LootAward | None = None


class CombatSystem:
    """Resolves player-vs-monster contact for one resident chunk at a time."""

    __slots__ = ("_config", "_rng")

    def __init__(self, config: RealmConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng

    def update_chunk(self, player: Player, chunk: Chunk, dt: float, tick: int) -> list[CombatOutcome]:
        """Run contact damage for live monsters and respawn timers for dead ones.

        Touching a live monster costs the player ``contact_damage`` every
        tick. A pending attack is spent on the first monster touched.
        """
        cfg = self._config
        outcomes: list[CombatOutcome] = []
        for idx, monster in enumerate(chunk.monsters):
            if monster.is_dead:
                if self.tick_respawn(monster, dt):
                    outcomes.append(CombatOutcome("respawn", chunk.chunk_id, idx, monster.template.name))
                continue

            if not circles_overlap(player.position, player.radius, monster.position, cfg.monster_radius):
                continue

            player.hp = max(0, player.hp - cfg.contact_damage)

            if player.is_attacking:
                player.is_attacking = False
                killed = monster.take_damage(player.attack)
                outcomes.append(CombatOutcome(
                    "hit", chunk.chunk_id, idx, monster.template.name, damage=player.attack,
                ))
                if killed:
                    loot = self.kill(player, monster, chunk.chunk_id, idx, tick)
                    outcomes.append(CombatOutcome(
                        "kill", chunk.chunk_id, idx, monster.template.name, loot=loot,
                    ))
        return outcomes

    def kill(self, player: Player, monster: ActiveMonster, chunk_id: str, index: int, tick: int) -> LootAward:
        """Mark *monster* dead, start its respawn countdown and pay out loot."""
        monster.is_dead = True
        monster.current_hp = 0
        monster.respawn_timer = self._config.respawn_seconds

        loot_table = monster.template.loot
        key = self._rng.key_for(f"{chunk_id}:{index}")
        dropped = loot_table.item_chance > 0.0 and self._rng.next_bool(Domain.LOOT, key, tick, loot_table.item_chance)
        award = LootAward(gold=loot_table.gold, item_dropped=dropped)

        player.gold += award.gold
        if dropped:
            player.items_found += 1
        logger.debug("%s killed in %s: +%d gold%s", monster.template.name, chunk_id, award.gold,
                     " +item" if dropped else "")
        return award

    def tick_respawn(self, monster: ActiveMonster, dt: float) -> bool:
        """Count down a dead monster's timer. Returns True when it comes back."""
        monster.respawn_timer -= dt
        if monster.respawn_timer > _TIMER_EPSILON:
            return False
        monster.respawn_timer = 0.0
        monster.is_dead = False
        monster.current_hp = monster.template.hp
        if self._config.respawn_at_spawn_point:
            monster.position = monster.spawn_position
        return True
