"""Readers for world, map and monster data files.

Every reader returns a ``LoadResult`` instead of raising, so the caller
decides (through a ``RecoveryTable``) whether a bad file means a default,
a hole, or a hard error.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

import yaml
from pydantic import ValidationError

from chunkrealm.core.enums import Biome, LoadFailure, RecoveryPolicy, parse_biome
from chunkrealm.core.templates import MonsterTemplate, default_templates
from chunkrealm.core.tile_map import MapData, MonsterSpawn, TileType, default_map
from chunkrealm.core.world_layout import ChunkDescriptor, WorldLayout
from chunkrealm.data.recovery import LoadResult, RecoveryTable
from chunkrealm.data.schemas import MapFileSchema, MonsterFileSchema, WorldConfigSchema

logger = logging.getLogger(__name__)

# Map reference that resolves to the built-in walled room
DEFAULT_MAP_FILE = "<default>"


def _read_document(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as fh:
        if path.suffix.lower() == ".json":
            return json.load(fh)
        return yaml.safe_load(fh)


def _load_document(path: str | Path) -> tuple[Any, LoadResult | None]:
    """Read and parse *path*. On failure the second item is the failed result."""
    p = Path(path)
    try:
        return _read_document(p), None
    except FileNotFoundError as exc:
        return None, LoadResult.failed(str(path), LoadFailure.MISSING_FILE, str(exc))
    except OSError as exc:
        return None, LoadResult.failed(str(path), LoadFailure.MISSING_FILE, f"read error: {exc}")
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as exc:
        return None, LoadResult.failed(str(path), LoadFailure.MALFORMED_DATA, f"parse error: {exc}")


# ---------------------------------------------------------------------------
# Maps
# ---------------------------------------------------------------------------

def map_from_schema(schema: MapFileSchema) -> MapData:
    tile_types: dict[str, TileType] = {}
    for key, tt in schema.tile_types.items():
        if len(key) != 1:
            raise ValueError(f"tile key {key!r} must be a single character")
        tile_types[key] = TileType(name=tt.name or key, walkable=tt.walkable, color=tt.color)
    spawns = [
        MonsterSpawn(x=s.x, y=s.y, monster_type=s.monster_type)
        for s in (schema.monster_spawns or [])
    ]
    info = schema.map_info
    return MapData(
        name=info.name, width=info.width, height=info.height, tile_size=info.tile_size,
        tile_types=tile_types, rows=schema.layout, spawns=spawns,
        spawn_point=(info.spawn_point.x, info.spawn_point.y),
    )


def load_map(path: str | Path) -> LoadResult[MapData]:
    """Load one chunk map (YAML or JSON)."""
    if str(path) == DEFAULT_MAP_FILE:
        return LoadResult.success(DEFAULT_MAP_FILE, default_map())
    raw, failed = _load_document(path)
    if failed is not None:
        return failed
    try:
        data = map_from_schema(MapFileSchema.model_validate(raw))
    except (ValidationError, ValueError) as exc:
        return LoadResult.failed(str(path), LoadFailure.MALFORMED_DATA, str(exc))
    unknown = data.unknown_chars()
    if unknown:
        logger.info("Map %s uses tiles with no type entry (impassable): %s", path, "".join(sorted(unknown)))
    return LoadResult.success(str(path), data)


# ---------------------------------------------------------------------------
# World layout
# ---------------------------------------------------------------------------

def _resolve_map_file(map_file: str, base_dir: Path) -> str:
    candidate = Path(map_file)
    if candidate.is_absolute() or map_file == DEFAULT_MAP_FILE:
        return map_file
    return str(base_dir / candidate)


def world_from_schema(schema: WorldConfigSchema, base_dir: Path = Path(".")) -> WorldLayout:
    """Build a WorldLayout; grid dimensions come from ``chunk_layout``.

    The declared ``chunks_x``/``chunks_y`` are informational only, a
    mismatch is logged and otherwise ignored.
    """
    info = schema.world_info
    descriptors = [
        ChunkDescriptor(
            chunk_id=cid, world_x=c.world_x, world_y=c.world_y,
            biome=parse_biome(c.biome),
            map_file=_resolve_map_file(c.map_file, base_dir),
            name=c.name or cid,
        )
        for cid, c in schema.chunks.items()
    ]
    layout = WorldLayout.build(
        name=info.name, chunk_size=info.chunk_size, tile_size=info.tile_size,
        view_distance=info.view_distance, chunk_layout=schema.chunk_layout,
        chunks=descriptors, spawn_chunk=schema.spawn_chunk,
        spawn_offset=(schema.spawn_position.x, schema.spawn_position.y),
    )
    if (info.chunks_x, info.chunks_y) != (layout.chunks_x, layout.chunks_y):
        logger.warning(
            "World '%s' declares a %dx%d grid but chunk_layout is %dx%d; using the layout",
            info.name, info.chunks_x, info.chunks_y, layout.chunks_x, layout.chunks_y,
        )
    problems = layout.validate()
    if problems:
        raise ValueError("; ".join(problems))
    return layout


def load_world_layout(path: str | Path) -> LoadResult[WorldLayout]:
    """Load and validate the world layout file (JSON or YAML)."""
    raw, failed = _load_document(path)
    if failed is not None:
        return failed
    try:
        layout = world_from_schema(WorldConfigSchema.model_validate(raw), Path(path).parent)
    except (ValidationError, ValueError) as exc:
        return LoadResult.failed(str(path), LoadFailure.MALFORMED_DATA, str(exc))
    logger.info(
        "World '%s' loaded: %dx%d chunks, view distance %d",
        layout.name, layout.chunks_x, layout.chunks_y, layout.view_distance,
    )
    return LoadResult.success(str(path), layout)


def default_world() -> WorldLayout:
    """Single-chunk world filled with the default walled room."""
    room = default_map()
    return WorldLayout.build(
        name="Default World", chunk_size=room.width, tile_size=room.tile_size,
        view_distance=0, chunk_layout=[["default"]],
        chunks=[ChunkDescriptor(
            chunk_id="default", world_x=0, world_y=0, biome=Biome.FOREST,
            map_file=DEFAULT_MAP_FILE, name="Default Room",
        )],
        spawn_chunk="default", spawn_offset=room.spawn_point,
    )


# ---------------------------------------------------------------------------
# Monster templates
# ---------------------------------------------------------------------------

def load_monster_file(path: str | Path) -> LoadResult[list[MonsterTemplate]]:
    raw, failed = _load_document(path)
    if failed is not None:
        return failed
    try:
        schema = MonsterFileSchema.model_validate(raw)
    except ValidationError as exc:
        return LoadResult.failed(str(path), LoadFailure.MALFORMED_DATA, str(exc))
    templates = [
        MonsterTemplate.build(
            name=m.name, species=m.species, hp=m.hp, attack=m.attack, speed=m.speed,
            color=m.color, behavior=m.behavior, gold=m.loot.gold, item_chance=m.loot.item_chance,
        )
        for m in schema.monsters
    ]
    logger.info("Monster data loaded from %s (%d types)", path, len(templates))
    return LoadResult.success(str(path), templates)


def load_monster_templates(paths: Iterable[str | Path], recovery: RecoveryTable) -> list[MonsterTemplate]:
    """Merge templates from several files in order.

    Failed files are resolved per *recovery*; if nothing loads and any
    failure was allowed to substitute a default, the default species list
    is returned.
    """
    merged: list[MonsterTemplate] = []
    wants_default = False
    for path in paths:
        result = load_monster_file(path)
        if not result.ok:
            assert result.failure is not None
            wants_default |= recovery.policy_for(result.failure) == RecoveryPolicy.SUBSTITUTE_DEFAULT
        loaded = recovery.resolve(result, list)
        merged.extend(loaded or [])
    if not merged and wants_default:
        merged = default_templates()
    return merged


@dataclass(frozen=True, slots=True)
class SessionData:
    """Everything the engine needs from disk to start a session."""

    layout: WorldLayout
    templates: list[MonsterTemplate]


def load_session_data(world_file: str | Path, monster_files: Iterable[str | Path], recovery: RecoveryTable) -> SessionData | None:
    """Load layout and templates; None when the world is skipped by policy."""
    layout = recovery.resolve(load_world_layout(world_file), default_world)
    if layout is None:
        return None
    return SessionData(layout=layout, templates=load_monster_templates(monster_files, recovery))
