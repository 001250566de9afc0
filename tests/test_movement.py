"""Tests for the movement resolver: feasibility, wall sliding, diagonal slide."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from chunkrealm.core.models import Vec2
from chunkrealm.core.tile_map import MapData, TileType, rows_from_text
from chunkrealm.systems.movement import MovementResolver, MoveProfile

_TILES = {".": TileType("grass", True), "#": TileType("wall", False)}

_BOX = MoveProfile.box(4.0)
_POINT = MoveProfile.point()


def _make_resolver(text: str, tile_size: float = 10.0, slide_factor: float = 0.3) -> MovementResolver:
    rows = rows_from_text(text)
    m = MapData("t", len(rows[0]), len(rows), tile_size, _TILES, rows)
    return MovementResolver(lambda p: m.is_walkable_local(p.x, p.y), slide_factor)


_OPEN = """
..........
..........
..........
..........
..........
"""

_ROOM = """
#####
#...#
#...#
#####
"""


class TestFreeMovement:

    def test_moves_along_direction(self):
        r = _make_resolver(_OPEN)
        assert r.resolve(Vec2(20.0, 20.0), Vec2(1.0, 0.0), 100.0, 0.1, _BOX) == Vec2(30.0, 20.0)

    def test_direction_is_normalized(self):
        r = _make_resolver(_OPEN)
        out = r.resolve(Vec2(20.0, 20.0), Vec2(3.0, 4.0), 100.0, 0.1, _BOX)
        assert out.x == pytest.approx(26.0)
        assert out.y == pytest.approx(28.0)

    def test_zero_direction_skips(self):
        r = _make_resolver(_OPEN)
        start = Vec2(20.0, 20.0)
        assert r.resolve(start, Vec2(0.0, 0.0), 100.0, 0.1, _BOX) is start


class TestFeasibility:

    def test_box_rejects_any_corner_in_wall(self):
        r = _make_resolver(_ROOM)
        assert r.is_clear(Vec2(25.0, 20.0), _BOX)
        assert not r.is_clear(Vec2(37.0, 20.0), _BOX)   # right corners at x=41
        assert not r.is_clear(Vec2(25.0, 13.0), _BOX)   # top corners at y=9

    def test_point_only_checks_centre(self):
        r = _make_resolver(_ROOM)
        assert r.is_clear(Vec2(38.0, 12.0), _POINT)
        assert not r.is_clear(Vec2(38.0, 12.0), _BOX)


class TestWallSliding:

    def test_blocked_diagonal_slides_along_wall(self):
        r = _make_resolver("""
            .....#
            .....#
            .....#
            .....#
        """)
        out = r.resolve(Vec2(44.0, 15.0), Vec2(1.0, 1.0), 100.0, 0.1, _BOX)
        assert out.x == 44.0
        assert out.y == pytest.approx(15.0 + 10.0 / 2 ** 0.5)

    def test_single_tile_room_never_penetrated(self):
        r = _make_resolver("""
            ###
            #.#
            ###
        """)
        start = Vec2(15.0, 15.0)
        for d in (Vec2(1, 0), Vec2(-1, 0), Vec2(0, 1), Vec2(0, -1), Vec2(1, 1), Vec2(-1, 1), Vec2(1, -1), Vec2(-1, -1)):
            assert r.resolve(start, d, 100.0, 0.1, _BOX) == start

    def test_diagonal_corner_resolves_to_pure_axis_move(self):
        # Wall only on the up-right diagonal neighbour
        r = _make_resolver("""
            ..#
            ...
            ...
        """, tile_size=20.0)
        r_box = MoveProfile.box(5.0)
        out = r.resolve(Vec2(30.0, 30.0), Vec2(1.0, -1.0), 100.0, 0.1, r_box)
        assert out.y == 30.0
        assert out.x == pytest.approx(30.0 + 10.0 / 2 ** 0.5)
        assert r.is_clear(out, r_box)

    def test_horizontal_resolved_before_vertical(self):
        # Moving right is open; the vertical test starts from the new x.
        r = _make_resolver("""
            .....
            .....
            ..##.
            .....
        """)
        out = r.resolve(Vec2(15.0, 15.0), Vec2(1.0, 1.0), 100.0, 0.1, _BOX)
        assert out.x == pytest.approx(15.0 + 10.0 / 2 ** 0.5)
        assert out.y == 15.0


class TestDiagonalSlide:

    def test_concave_corner_slides_at_reduced_speed(self):
        r = _make_resolver(_ROOM)
        out = r.resolve(Vec2(31.0, 19.0), Vec2(1.0, -1.0), 100.0, 0.1, _BOX)
        # equal components: the vertical axis is tried first
        assert out.x == 31.0
        assert out.y == pytest.approx(16.0)

    def test_larger_component_axis_first(self):
        r = _make_resolver(_ROOM)
        out = r.resolve(Vec2(31.0, 19.0), Vec2(2.0, -1.0), 150.0, 0.1, _BOX)
        assert out.x == pytest.approx(35.5)
        assert out.y == 19.0

    def test_point_profile_has_no_diagonal_slide(self):
        r = _make_resolver(_ROOM)
        start = Vec2(38.0, 12.0)
        assert r.resolve(start, Vec2(1.0, -1.0), 100.0, 0.1, _POINT) == start

    def test_point_profile_uses_axis_fallback(self):
        r = _make_resolver(_ROOM)
        out = r.resolve(Vec2(35.0, 25.0), Vec2(1.0, -1.0), 100.0, 0.1, _POINT)
        assert out.x == 35.0
        assert out.y == pytest.approx(25.0 - 10.0 / 2 ** 0.5)

    def test_slide_factor_is_configurable(self):
        r = _make_resolver(_ROOM, slide_factor=0.2)
        out = r.resolve(Vec2(31.0, 19.0), Vec2(1.0, -1.0), 100.0, 0.1, _BOX)
        assert out.y == pytest.approx(17.0)
