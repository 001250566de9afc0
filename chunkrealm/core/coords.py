"""Translation between continuous world pixels and discrete chunk/tile indices."""

from __future__ import annotations

import math

from chunkrealm.core.models import Vec2


class CoordinateTranslator:
    """Pure, stateless conversions for one world's chunk geometry.

    A position exactly on a chunk boundary belongs to the higher-index
    chunk. Negative positions floor to negative indices; callers validate
    indices against the grid.
    """

    __slots__ = ("_chunk_pixel_size", "_tile_size")

    def __init__(self, chunk_tiles: int, tile_size: float) -> None:
        self._tile_size = float(tile_size)
        self._chunk_pixel_size = chunk_tiles * self._tile_size

    @property
    def chunk_pixel_size(self) -> float:
        return self._chunk_pixel_size

    @property
    def tile_size(self) -> float:
        return self._tile_size

    def world_to_chunk(self, pos: Vec2) -> tuple[int, int]:
        size = self._chunk_pixel_size
        return math.floor(pos.x / size), math.floor(pos.y / size)

    def chunk_to_world(self, chunk_x: int, chunk_y: int) -> Vec2:
        """Top-left corner of chunk (chunk_x, chunk_y) in world space."""
        size = self._chunk_pixel_size
        return Vec2(chunk_x * size, chunk_y * size)

    def world_to_local(self, pos: Vec2, chunk_x: int, chunk_y: int) -> Vec2:
        return pos - self.chunk_to_world(chunk_x, chunk_y)

    def tile_offset_to_world(self, chunk_x: int, chunk_y: int, tx: float, ty: float, tile_size: float | None = None) -> Vec2:
        """World position of a chunk-relative tile coordinate (top-left of the tile)."""
        size = self._tile_size if tile_size is None else tile_size
        return self.chunk_to_world(chunk_x, chunk_y) + Vec2(tx * size, ty * size)
