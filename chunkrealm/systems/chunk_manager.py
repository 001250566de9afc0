"""ChunkManager — owns the resident chunk set and streams chunks around the player.

Residency per chunk: UNLOADED -> LOADING -> RESIDENT -> UNLOADED. Loading is
synchronous inside ``load_chunk``; a failed load returns to UNLOADED and is
retried on every update while the chunk stays inside the view window.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterator, Sequence

from chunkrealm.core.chunk import Chunk
from chunkrealm.core.coords import CoordinateTranslator
from chunkrealm.core.enums import Biome, ChunkState, RecoveryPolicy
from chunkrealm.core.tile_map import default_map
from chunkrealm.data.loader import load_map
from chunkrealm.data.recovery import RecoveryTable
from chunkrealm.systems.spawner import SpawnResolver

if TYPE_CHECKING:
    from chunkrealm.core.models import Vec2
    from chunkrealm.core.templates import MonsterTemplate
    from chunkrealm.core.tile_map import MapData
    from chunkrealm.core.world_layout import WorldLayout
    from chunkrealm.data.recovery import LoadResult

logger = logging.getLogger(__name__)

MapLoader = Callable[[str], "LoadResult[MapData]"]
EventSink = Callable[[str, str, tuple[str, ...]], None]


def _no_events(category: str, message: str, chunk_ids: tuple[str, ...]) -> None:
    return None


class ChunkManager:
    """Single owner of chunk residency and per-chunk monster lists.

    Other components read through ``get_chunk`` / ``chunks`` and query
    walkability through ``is_walkable``; nothing else adds or removes
    chunks.
    """

    __slots__ = (
        "_layout",
        "_coords",
        "_map_loader",
        "_recovery",
        "_spawner",
        "_chunks",
        "_loaded_ids",
        "_loading",
        "_current_chunk",
        "_on_event",
    )

    def __init__(
        self,
        layout: WorldLayout,
        map_loader: MapLoader = load_map,
        on_map_failure: RecoveryPolicy = RecoveryPolicy.SKIP,
        on_event: EventSink | None = None,
    ) -> None:
        self._layout = layout
        self._coords = CoordinateTranslator(layout.chunk_size, layout.tile_size)
        self._map_loader = map_loader
        self._recovery = RecoveryTable.uniform(on_map_failure)
        self._spawner = SpawnResolver(self._coords)
        self._chunks: dict[str, Chunk] = {}
        self._loaded_ids: list[str] = []
        self._loading: set[str] = set()
        self._current_chunk: str | None = None
        self._on_event: EventSink = on_event or _no_events

    # -- properties --

    @property
    def layout(self) -> WorldLayout:
        return self._layout

    @property
    def coords(self) -> CoordinateTranslator:
        return self._coords

    @property
    def current_chunk(self) -> str | None:
        return self._current_chunk

    @property
    def is_ready(self) -> bool:
        """True once at least one chunk is resident."""
        return bool(self._loaded_ids)

    def set_event_sink(self, on_event: EventSink | None) -> None:
        """Route chunk transition events to *on_event*; None silences them."""
        self._on_event = on_event or _no_events

    # -- lifecycle --

    def initialize(self, templates: Sequence[MonsterTemplate]) -> bool:
        """Load the spawn chunk and make it current.

        Returns False (after logging) when the spawn chunk could not be
        loaded; the caller then runs with an empty world.
        """
        spawn_id = self._layout.spawn_chunk
        loaded = self.load_chunk(spawn_id, templates)
        self._current_chunk = spawn_id
        if not loaded:
            logger.warning("Spawn chunk %s could not be loaded, world is empty", spawn_id)
        return loaded

    def spawn_position(self) -> Vec2:
        """Player start: spawn chunk origin + spawn offset in tiles."""
        desc = self._layout.descriptor(self._layout.spawn_chunk)
        cx, cy = (desc.world_x, desc.world_y) if desc is not None else (0, 0)
        ox, oy = self._layout.spawn_offset
        return self._coords.tile_offset_to_world(cx, cy, ox, oy)

    # -- lookup --

    def chunk_id_at(self, world_pos: Vec2) -> str | None:
        cx, cy = self._coords.world_to_chunk(world_pos)
        return self._layout.id_at(cx, cy)

    def biome_at(self, world_pos: Vec2) -> Biome | None:
        cid = self.chunk_id_at(world_pos)
        desc = self._layout.descriptor(cid) if cid is not None else None
        return desc.biome if desc is not None else None

    def location_name_at(self, world_pos: Vec2) -> str | None:
        cid = self.chunk_id_at(world_pos)
        desc = self._layout.descriptor(cid) if cid is not None else None
        return desc.name if desc is not None else None

    def loaded_chunk_ids(self) -> list[str]:
        return list(self._loaded_ids)

    def get_chunk(self, chunk_id: str) -> Chunk | None:
        return self._chunks.get(chunk_id)

    def chunks(self) -> Iterator[Chunk]:
        """Resident chunks in load order."""
        for cid in list(self._loaded_ids):
            chunk = self._chunks.get(cid)
            if chunk is not None:
                yield chunk

    def chunk_state(self, chunk_id: str) -> ChunkState:
        if chunk_id in self._loading:
            return ChunkState.LOADING
        if chunk_id in self._chunks:
            return ChunkState.RESIDENT
        return ChunkState.UNLOADED

    # -- streaming --

    def target_set(self, center_x: int, center_y: int) -> list[str]:
        """Chunk ids inside the Chebyshev view window around a grid cell.

        The centre comes first, then the rest of the window row by row,
        clipped to the grid and to ids that have a descriptor.
        """
        layout = self._layout
        ids: list[str] = []
        center = layout.id_at(center_x, center_y)
        if center is not None and layout.descriptor(center) is not None:
            ids.append(center)
        dist = layout.view_distance
        for dy in range(-dist, dist + 1):
            for dx in range(-dist, dist + 1):
                cid = layout.id_at(center_x + dx, center_y + dy)
                if cid is None or cid in ids or layout.descriptor(cid) is None:
                    continue
                ids.append(cid)
        return ids

    def update_loaded_chunks(self, player_pos: Vec2, templates: Sequence[MonsterTemplate]) -> None:
        """Bring residency in line with the view window around *player_pos*.

        Outside the grid nothing changes. Loads and unloads are idempotent,
        so calling this twice with the same position is a no-op the second
        time (apart from retrying failed loads).
        """
        cx, cy = self._coords.world_to_chunk(player_pos)
        chunk_id = self._layout.id_at(cx, cy)
        if chunk_id is None:
            return

        if chunk_id != self._current_chunk:
            previous = self._current_chunk
            self._current_chunk = chunk_id
            logger.info("Entered chunk: %s", chunk_id)
            self._on_event("chunk", f"Entered chunk {chunk_id}", tuple(c for c in (previous, chunk_id) if c))

        wanted = self.target_set(cx, cy)
        wanted_set = set(wanted)

        for loaded_id in [cid for cid in self._loaded_ids if cid not in wanted_set]:
            self.unload_chunk(loaded_id)

        for cid in wanted:
            if cid not in self._chunks:
                self.load_chunk(cid, templates)

    def load_chunk(self, chunk_id: str, templates: Sequence[MonsterTemplate]) -> bool:
        """Load *chunk_id* and spawn its monsters. No-op when already resident.

        Returns True when the chunk is resident afterwards.
        """
        if chunk_id in self._chunks:
            return True
        desc = self._layout.descriptor(chunk_id)
        if desc is None:
            logger.warning("No descriptor for chunk %s, not loaded", chunk_id)
            return False

        self._loading.add(chunk_id)
        try:
            map_data = self._recovery.resolve(self._map_loader(desc.map_file), default_map)
            if map_data is None:
                logger.warning("Failed to load chunk %s (map %s)", chunk_id, desc.map_file)
                return False
            monsters = self._spawner.spawn_for_chunk(chunk_id, desc.world_x, desc.world_y, map_data, templates)
            self._chunks[chunk_id] = Chunk(
                chunk_id=chunk_id, world_x=desc.world_x, world_y=desc.world_y,
                map_data=map_data, monsters=monsters,
            )
            self._loaded_ids.append(chunk_id)
        finally:
            self._loading.discard(chunk_id)

        logger.info("Loaded chunk: %s (%d monsters)", chunk_id, len(monsters))
        self._on_event("chunk", f"Loaded chunk {chunk_id}", (chunk_id,))
        return True

    def unload_chunk(self, chunk_id: str) -> bool:
        """Drop a resident chunk and its monsters. No-op when not resident."""
        chunk = self._chunks.pop(chunk_id, None)
        if chunk is None:
            return False
        chunk.is_loaded = False
        self._loaded_ids.remove(chunk_id)
        logger.info("Unloaded chunk: %s", chunk_id)
        self._on_event("chunk", f"Unloaded chunk {chunk_id}", (chunk_id,))
        return True

    # -- walkability --

    def is_walkable(self, world_pos: Vec2) -> bool:
        """True when *world_pos* lies on a walkable tile of a resident chunk."""
        chunk_id = self.chunk_id_at(world_pos)
        if chunk_id is None:
            return False
        chunk = self._chunks.get(chunk_id)
        if chunk is None:
            return False
        local = self._coords.world_to_local(world_pos, chunk.world_x, chunk.world_y)
        return chunk.map_data.is_walkable_local(local.x, local.y)
