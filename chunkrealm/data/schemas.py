"""Pydantic models for the world, map and monster data files."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- World file ---

class WorldInfoSchema(BaseModel):
    name: str = "World"
    chunk_size: int = Field(gt=0)
    tile_size: float = Field(gt=0)
    chunks_x: int = Field(ge=0)
    chunks_y: int = Field(ge=0)
    view_distance: int = Field(1, ge=0)


class ChunkConfigSchema(BaseModel):
    world_x: int = Field(ge=0)
    world_y: int = Field(ge=0)
    biome: str = "forest"
    map_file: str
    name: str = ""


class PointSchema(BaseModel):
    x: float = 0.0
    y: float = 0.0


class WorldConfigSchema(BaseModel):
    world_info: WorldInfoSchema
    chunk_layout: list[list[str]]
    chunks: dict[str, ChunkConfigSchema]
    spawn_chunk: str
    spawn_position: PointSchema = Field(default_factory=PointSchema)


# --- Map file ---

class MapInfoSchema(BaseModel):
    name: str = "Map"
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    tile_size: float = Field(32.0, gt=0)
    spawn_point: PointSchema = Field(default_factory=PointSchema)


class TileTypeSchema(BaseModel):
    name: str = ""
    walkable: bool
    color: str = "white"


class MonsterSpawnSchema(BaseModel):
    x: float
    y: float
    monster_type: str


class MapFileSchema(BaseModel):
    map_info: MapInfoSchema
    tile_types: dict[str, TileTypeSchema]
    layout: list[str]
    monster_spawns: list[MonsterSpawnSchema] | None = None


# --- Monster file ---

class LootSchema(BaseModel):
    gold: int = 0
    item_chance: float = Field(0.0, ge=0.0, le=1.0)


class MonsterSchema(BaseModel):
    name: str
    species: str = ""
    hp: int = Field(gt=0)
    attack: int = 0
    speed: float = 1.0
    color: str = "white"
    behavior: list[str] = Field(default_factory=list)
    loot: LootSchema = Field(default_factory=LootSchema)


class MonsterFileSchema(BaseModel):
    monsters: list[MonsterSchema]
