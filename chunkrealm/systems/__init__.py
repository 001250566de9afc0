"""Game systems: chunk streaming, movement, combat, spawning, RNG."""

from chunkrealm.systems.chunk_manager import ChunkManager
from chunkrealm.systems.combat import CombatSystem
from chunkrealm.systems.movement import MovementResolver, MoveProfile
from chunkrealm.systems.rng import DeterministicRNG

__all__ = ["ChunkManager", "CombatSystem", "DeterministicRNG", "MoveProfile", "MovementResolver"]
