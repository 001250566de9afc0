"""Immutable snapshot of a session for renderers and tests."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from chunkrealm.core.models import ActiveMonster, Player

if TYPE_CHECKING:
    from chunkrealm.engine.game_loop import GameLoop


@dataclass(frozen=True, slots=True)
class RealmSnapshot:
    """Read-only view of one tick: deep-copied player and monsters."""

    tick: int
    player: Player
    current_chunk: str | None
    loaded_chunk_ids: tuple[str, ...]
    monsters: Mapping[str, tuple[ActiveMonster, ...]]
    game_over: bool

    @classmethod
    def capture(cls, loop: GameLoop) -> RealmSnapshot:
        chunks = loop.chunks
        monsters = {c.chunk_id: tuple(m.copy() for m in c.monsters) for c in chunks.chunks()}
        return cls(
            tick=loop.tick_count,
            player=loop.player.copy(),
            current_chunk=chunks.current_chunk,
            loaded_chunk_ids=tuple(chunks.loaded_chunk_ids()),
            monsters=MappingProxyType(monsters),
            game_over=loop.game_over,
        )

    @property
    def gold(self) -> int:
        return self.player.gold

    def living_monster_count(self) -> int:
        return sum(1 for group in self.monsters.values() for m in group if not m.is_dead)
