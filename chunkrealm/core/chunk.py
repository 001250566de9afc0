"""A resident chunk: its map plus the monsters living in it."""

from __future__ import annotations

from dataclasses import dataclass, field

from chunkrealm.core.models import ActiveMonster
from chunkrealm.core.tile_map import MapData


@dataclass(slots=True)
class Chunk:
    """Created by ``ChunkManager.load_chunk``, dropped by ``unload_chunk``."""

    chunk_id: str
    world_x: int
    world_y: int
    map_data: MapData
    monsters: list[ActiveMonster] = field(default_factory=list)
    is_loaded: bool = True

    def living_monsters(self) -> list[ActiveMonster]:
        return [m for m in self.monsters if not m.is_dead]
