"""Static world layout: the chunk grid and its per-chunk descriptors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Mapping, Sequence

from chunkrealm.core.enums import Biome


@dataclass(frozen=True, slots=True)
class ChunkDescriptor:
    """Where a chunk sits in the grid and which map fills it."""

    chunk_id: str
    world_x: int        # Chunk grid column (not pixels)
    world_y: int        # Chunk grid row
    biome: Biome
    map_file: str
    name: str


@dataclass(frozen=True)
class WorldLayout:
    """Chunk grid loaded once per session."""

    name: str
    chunk_size: int             # Tiles per chunk side
    tile_size: float            # Pixels per tile
    chunks_x: int
    chunks_y: int
    view_distance: int          # Chebyshev radius in chunks
    chunk_layout: tuple[tuple[str, ...], ...]
    chunks: Mapping[str, ChunkDescriptor]
    spawn_chunk: str
    spawn_offset: tuple[float, float] = (0.0, 0.0)   # Tiles from the spawn chunk origin
    _cells: dict[tuple[int, int], str] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for y, row in enumerate(self.chunk_layout):
            for x, cid in enumerate(row):
                self._cells[(x, y)] = cid

    @classmethod
    def build(
        cls,
        name: str,
        chunk_size: int,
        tile_size: float,
        view_distance: int,
        chunk_layout: Sequence[Sequence[str]],
        chunks: Sequence[ChunkDescriptor],
        spawn_chunk: str,
        spawn_offset: tuple[float, float] = (0.0, 0.0),
    ) -> WorldLayout:
        layout = tuple(tuple(row) for row in chunk_layout)
        return cls(
            name=name, chunk_size=chunk_size, tile_size=tile_size,
            chunks_x=max((len(r) for r in layout), default=0), chunks_y=len(layout),
            view_distance=view_distance, chunk_layout=layout,
            chunks={c.chunk_id: c for c in chunks},
            spawn_chunk=spawn_chunk, spawn_offset=spawn_offset,
        )

    @property
    def chunk_pixel_size(self) -> float:
        return self.chunk_size * self.tile_size

    def id_at(self, cx: int, cy: int) -> str | None:
        """Chunk id at grid cell (cx, cy), or None outside the grid."""
        return self._cells.get((cx, cy))

    def descriptor(self, chunk_id: str) -> ChunkDescriptor | None:
        return self.chunks.get(chunk_id)

    def iter_cells(self) -> Iterator[tuple[int, int, str]]:
        for y, row in enumerate(self.chunk_layout):
            for x, cid in enumerate(row):
                yield x, y, cid

    def validate(self) -> list[str]:
        """Return a list of invariant violations (empty when the layout is sound)."""
        problems: list[str] = []
        widths = {len(row) for row in self.chunk_layout}
        if len(widths) > 1:
            problems.append(f"chunk_layout is not rectangular (row widths {sorted(widths)})")
        for x, y, cid in self.iter_cells():
            desc = self.chunks.get(cid)
            if desc is None:
                problems.append(f"chunk '{cid}' at ({x}, {y}) has no descriptor")
            elif (desc.world_x, desc.world_y) != (x, y):
                problems.append(
                    f"chunk '{cid}' sits at ({x}, {y}) but its descriptor says "
                    f"({desc.world_x}, {desc.world_y})"
                )
        if self.spawn_chunk not in self.chunks:
            problems.append(f"spawn chunk '{self.spawn_chunk}' has no descriptor")
        if self.view_distance < 0:
            problems.append(f"view_distance must be >= 0, got {self.view_distance}")
        if self.chunk_size <= 0 or self.tile_size <= 0:
            problems.append("chunk_size and tile_size must be positive")
        return problems
