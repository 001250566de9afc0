"""Entity spawn resolver — turns a chunk's spawn list into live monsters."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from chunkrealm.core.models import ActiveMonster
from chunkrealm.core.templates import find_template

if TYPE_CHECKING:
    from chunkrealm.core.coords import CoordinateTranslator
    from chunkrealm.core.templates import MonsterTemplate
    from chunkrealm.core.tile_map import MapData

logger = logging.getLogger(__name__)


class SpawnResolver:
    """Resolves spawn descriptors against templates by exact name."""

    __slots__ = ("_coords",)

    def __init__(self, coords: CoordinateTranslator) -> None:
        self._coords = coords

    def spawn_for_chunk(
        self,
        chunk_id: str,
        chunk_x: int,
        chunk_y: int,
        map_data: MapData,
        templates: Sequence[MonsterTemplate],
    ) -> list[ActiveMonster]:
        """Create one ActiveMonster per spawn whose monster_type names a template.

        Position = chunk origin + spawn tile offset scaled by the map's tile
        size. Unknown names are dropped.
        """
        monsters: list[ActiveMonster] = []
        for spawn in map_data.spawns:
            template = find_template(templates, spawn.monster_type)
            if template is None:
                logger.info(
                    "Chunk %s: no template named '%s', spawn at (%.1f, %.1f) dropped",
                    chunk_id, spawn.monster_type, spawn.x, spawn.y,
                )
                continue
            pos = self._coords.tile_offset_to_world(chunk_x, chunk_y, spawn.x, spawn.y, map_data.tile_size)
            monsters.append(ActiveMonster.spawn(template, pos))
        return monsters
