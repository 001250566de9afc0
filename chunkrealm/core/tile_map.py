"""Per-chunk tile layout and walkability lookup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence


@dataclass(frozen=True, slots=True)
class TileType:
    name: str
    walkable: bool
    color: str = "white"


@dataclass(frozen=True, slots=True)
class MonsterSpawn:
    """Spawn point in tile units, relative to the chunk's top-left corner."""

    x: float
    y: float
    monster_type: str


class MapData:
    """Immutable tile layout of one chunk.

    Rows are strings with one character per tile; each character is looked
    up in ``tile_types``. Characters missing from the table are impassable.
    """

    __slots__ = ("name", "width", "height", "tile_size", "spawn_point", "_tile_types", "_rows", "_spawns")

    def __init__(
        self,
        name: str,
        width: int,
        height: int,
        tile_size: float,
        tile_types: Mapping[str, TileType],
        rows: Sequence[str],
        spawns: Sequence[MonsterSpawn] = (),
        spawn_point: tuple[float, float] = (0.0, 0.0),
    ) -> None:
        self.name = name
        self.width = width
        self.height = height
        self.tile_size = tile_size
        self.spawn_point = spawn_point
        self._tile_types: dict[str, TileType] = dict(tile_types)
        self._rows: tuple[str, ...] = tuple(rows)
        self._spawns: tuple[MonsterSpawn, ...] = tuple(spawns)

    # -- access --

    @property
    def rows(self) -> tuple[str, ...]:
        return self._rows

    @property
    def spawns(self) -> tuple[MonsterSpawn, ...]:
        return self._spawns

    @property
    def tile_types(self) -> Mapping[str, TileType]:
        return dict(self._tile_types)

    @property
    def pixel_width(self) -> float:
        return self.width * self.tile_size

    @property
    def pixel_height(self) -> float:
        return self.height * self.tile_size

    def in_bounds_xy(self, tx: int, ty: int) -> bool:
        return 0 <= tx < self.width and 0 <= ty < len(self._rows)

    def char_at(self, tx: int, ty: int) -> str | None:
        if not self.in_bounds_xy(tx, ty):
            return None
        row = self._rows[ty]
        if tx >= len(row):
            return None
        return row[tx]

    def tile_at(self, tx: int, ty: int) -> TileType | None:
        ch = self.char_at(tx, ty)
        if ch is None:
            return None
        return self._tile_types.get(ch)

    def is_walkable_xy(self, tx: int, ty: int) -> bool:
        tile = self.tile_at(tx, ty)
        return tile is not None and tile.walkable

    def is_walkable_local(self, lx: float, ly: float) -> bool:
        """Walkability of a chunk-local pixel position."""
        if lx < 0.0 or ly < 0.0:
            return False
        return self.is_walkable_xy(int(lx // self.tile_size), int(ly // self.tile_size))

    def unknown_chars(self) -> set[str]:
        """Layout characters with no tile-type entry (treated as walls)."""
        seen = {ch for row in self._rows for ch in row}
        return seen - self._tile_types.keys()

    def __repr__(self) -> str:
        return f"MapData({self.name!r}, {self.width}x{self.height}, tile={self.tile_size})"


DEFAULT_TILE_TYPES: dict[str, TileType] = {
    ".": TileType(name="grass", walkable=True, color="green"),
    "#": TileType(name="wall", walkable=False, color="gray"),
}


def default_map(width: int = 20, height: int = 15, tile_size: float = 32.0) -> MapData:
    """A grass room walled on every side."""
    wall = "#" * width
    inner = "#" + "." * (width - 2) + "#"
    rows = [wall] + [inner] * (height - 2) + [wall]
    return MapData(
        name="Default Map", width=width, height=height, tile_size=tile_size,
        tile_types=DEFAULT_TILE_TYPES, rows=rows,
        spawn_point=(width / 2.0, height / 2.0),
    )


def rows_from_text(text: str) -> list[str]:
    """Split a multi-line layout literal, dropping blank edge lines."""
    return [line.strip() for line in text.strip().splitlines() if line.strip()]

