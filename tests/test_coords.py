"""Tests for world/chunk coordinate translation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from chunkrealm.core.coords import CoordinateTranslator
from chunkrealm.core.models import Vec2


def _make_translator(chunk_tiles: int = 16, tile_size: float = 32.0) -> CoordinateTranslator:
    return CoordinateTranslator(chunk_tiles, tile_size)


class TestWorldToChunk:

    def test_chunk_pixel_size(self):
        assert _make_translator().chunk_pixel_size == 512.0

    def test_origin_is_chunk_zero(self):
        assert _make_translator().world_to_chunk(Vec2(0.0, 0.0)) == (0, 0)

    def test_interior_point(self):
        t = _make_translator()
        assert t.world_to_chunk(Vec2(700.0, 1100.0)) == (1, 2)

    def test_boundary_belongs_to_higher_chunk(self):
        t = _make_translator()
        assert t.world_to_chunk(Vec2(512.0, 511.999)) == (1, 0)

    def test_corner_round_trip(self):
        t = _make_translator()
        for cx in range(4):
            for cy in range(4):
                assert t.world_to_chunk(t.chunk_to_world(cx, cy)) == (cx, cy)

    def test_negative_positions_floor_below_zero(self):
        t = _make_translator()
        assert t.world_to_chunk(Vec2(-1.0, -600.0)) == (-1, -2)


class TestChunkToWorld:

    def test_top_left_corner(self):
        t = _make_translator()
        assert t.chunk_to_world(2, 1) == Vec2(1024.0, 512.0)

    def test_world_to_local(self):
        t = _make_translator()
        assert t.world_to_local(Vec2(530.0, 40.0), 1, 0) == Vec2(18.0, 40.0)

    def test_tile_offset_uses_translator_tile_size(self):
        t = _make_translator()
        assert t.tile_offset_to_world(1, 1, 2.0, 3.0) == Vec2(512.0 + 64.0, 512.0 + 96.0)

    def test_tile_offset_with_explicit_tile_size(self):
        t = _make_translator()
        assert t.tile_offset_to_world(0, 0, 2.0, 2.0, tile_size=16.0) == Vec2(32.0, 32.0)
