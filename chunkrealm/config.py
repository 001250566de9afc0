"""Realm configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass

from chunkrealm.core.enums import RecoveryPolicy


@dataclass(frozen=True)
class RealmConfig:
    """Immutable configuration for a play session."""

    # Data files
    world_file: str = "data/world_config.json"
    monster_files: tuple[str, ...] = (
        "data/monsters/forest_monsters.yaml",
        "data/monsters/desert_monsters.yaml",
    )

    # Timing
    fixed_dt: float = 1.0 / 60.0   # Seconds per tick for headless runs
    max_ticks: int = 3600
    seed: int = 42

    # Player
    player_max_hp: int = 100
    player_attack: int = 15
    player_radius: float = 10.0    # Half-extent of the collision box (px)
    player_speed: float = 200.0    # px/s
    attack_cooldown: float = 0.5
    animation_rate: float = 5.0    # Animation phase advance per second while moving

    # Movement
    slide_factor: float = 0.3      # Speed fraction for the stuck-diagonal slide

    # Monsters
    monster_radius: float = 15.0
    monster_speed_scale: float = 30.0   # template speed * scale = px/s
    aggro_range: float = 300.0

    # Combat
    contact_damage: int = 1        # HP lost per tick while touching a live monster
    respawn_seconds: float = 5.0
    respawn_at_spawn_point: bool = False   # False: monsters respawn where they died

    # Load recovery
    on_missing_file: RecoveryPolicy = RecoveryPolicy.SUBSTITUTE_DEFAULT
    on_malformed_data: RecoveryPolicy = RecoveryPolicy.SUBSTITUTE_DEFAULT
    on_chunk_map_failure: RecoveryPolicy = RecoveryPolicy.SKIP

    # Logging
    event_log_capacity: int = 1000
    log_level: str = "INFO"
