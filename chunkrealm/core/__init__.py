"""Core data models and world representation."""

from chunkrealm.core.chunk import Chunk
from chunkrealm.core.coords import CoordinateTranslator
from chunkrealm.core.enums import Biome, ChunkState, Facing, LoadFailure, MonsterKind, RecoveryPolicy
from chunkrealm.core.models import ActiveMonster, LootAward, Player, Vec2
from chunkrealm.core.templates import MonsterTemplate
from chunkrealm.core.tile_map import MapData
from chunkrealm.core.world_layout import ChunkDescriptor, WorldLayout

__all__ = [
    "ActiveMonster",
    "Biome",
    "Chunk",
    "ChunkDescriptor",
    "ChunkState",
    "CoordinateTranslator",
    "Facing",
    "LoadFailure",
    "LootAward",
    "MapData",
    "MonsterKind",
    "MonsterTemplate",
    "Player",
    "RecoveryPolicy",
    "Vec2",
    "WorldLayout",
]
