"""Enumerations used throughout the realm."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Biome(IntEnum):
    """Biome tag carried by each chunk descriptor."""

    UNKNOWN = 0
    FOREST = 1
    DESERT = 2


@unique
class Facing(IntEnum):
    """Horizontal facing of the player sprite."""

    RIGHT = 0
    LEFT = 1


@unique
class MonsterKind(IntEnum):
    """Sprite tag for a monster species, resolved once at template load."""

    FOREST_GOBLIN = 0
    WILD_BOAR = 1
    WOLF = 2
    SAND_SCORPION = 3
    DESERT_BANDIT = 4
    DUST_DEVIL = 5
    OASIS_GUARDIAN = 6


@unique
class ChunkState(IntEnum):
    """Residency of a chunk inside the ChunkManager.

    LOADING is synchronous: it only exists between the start and end of
    a single ``load_chunk`` call.
    """

    UNLOADED = 0
    LOADING = 1
    RESIDENT = 2


@unique
class LoadFailure(IntEnum):
    """Why a data file could not be turned into a usable structure."""

    MISSING_FILE = 0
    MALFORMED_DATA = 1


@unique
class RecoveryPolicy(IntEnum):
    """What to do when a load fails."""

    SUBSTITUTE_DEFAULT = 0   # Continue with a default structure
    SKIP = 1                 # Continue without the structure
    RAISE = 2                # Strict mode: surface the error


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    LOOT = 0


# Lowercase file tags -> Biome
BIOME_TAGS: dict[str, Biome] = {
    "forest": Biome.FOREST,
    "desert": Biome.DESERT,
}


def parse_biome(tag: str) -> Biome:
    return BIOME_TAGS.get(tag.strip().lower(), Biome.UNKNOWN)
