"""GameLoop — the fixed-order per-frame tick.

Phase cycle:
  1. Streaming: update resident chunks for the player's position
  2. Player movement: resolve input against walkability
  3. Attack input: arm the attack flag, run the cooldown
  4. Monster movement: aggressive monsters chase the player
  5. Combat: contact damage, kills, loot, respawn countdowns
  6. Game-over check, advance tick

Streaming runs first so chunks loaded this tick are already walkable for
the movement phases.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from chunkrealm.core.enums import Facing
from chunkrealm.core.models import Player
from chunkrealm.data.loader import load_map, load_session_data
from chunkrealm.data.recovery import RecoveryTable
from chunkrealm.engine.input import PlayerInput
from chunkrealm.systems.chunk_manager import ChunkManager, MapLoader
from chunkrealm.systems.combat import CombatSystem
from chunkrealm.systems.movement import MovementResolver, MoveProfile
from chunkrealm.systems.rng import DeterministicRNG
from chunkrealm.utils.event_log import EventLog, GameEvent

if TYPE_CHECKING:
    from chunkrealm.config import RealmConfig
    from chunkrealm.core.templates import MonsterTemplate

logger = logging.getLogger(__name__)


class GameLoop:
    """Single-threaded driver for one play session.

    Owns the player and the ChunkManager; all world mutation happens
    inside ``tick``.
    """

    __slots__ = (
        "_config",
        "_chunks",
        "_templates",
        "_player",
        "_spawn_pos",
        "_resolver",
        "_player_profile",
        "_monster_profile",
        "_combat",
        "_event_log",
        "_tick_events",
        "_tick",
        "_game_over",
    )

    def __init__(
        self,
        config: RealmConfig,
        chunks: ChunkManager,
        templates: Iterable[MonsterTemplate],
        event_log: EventLog | None = None,
        rng: DeterministicRNG | None = None,
    ) -> None:
        self._config = config
        self._chunks = chunks
        self._templates = list(templates)
        self._spawn_pos = chunks.spawn_position()
        self._player = self._new_player()
        self._resolver = MovementResolver(chunks.is_walkable, config.slide_factor)
        self._player_profile = MoveProfile.box(config.player_radius)
        self._monster_profile = MoveProfile.point()
        self._combat = CombatSystem(config, rng if rng is not None else DeterministicRNG(config.seed))
        self._event_log = event_log if event_log is not None else EventLog(config.event_log_capacity)
        self._tick_events: list[GameEvent] = []
        self._tick = 0
        self._game_over = False

    # -- properties --

    @property
    def config(self) -> RealmConfig:
        return self._config

    @property
    def chunks(self) -> ChunkManager:
        return self._chunks

    @property
    def templates(self) -> list[MonsterTemplate]:
        return self._templates

    @property
    def player(self) -> Player:
        return self._player

    @property
    def resolver(self) -> MovementResolver:
        return self._resolver

    @property
    def tick_count(self) -> int:
        return self._tick

    @property
    def game_over(self) -> bool:
        return self._game_over

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def tick_events(self) -> list[GameEvent]:
        """Events emitted during the most recent tick."""
        return self._tick_events

    def record_event(self, category: str, message: str, chunk_ids: tuple[str, ...] = ()) -> None:
        """Queue an event stamped with the current tick; flushed to the log at tick end."""
        self._tick_events.append(GameEvent(
            tick=self._tick, category=category, message=message, chunk_ids=chunk_ids,
        ))

    def _new_player(self) -> Player:
        cfg = self._config
        return Player(
            position=self._spawn_pos, hp=cfg.player_max_hp, max_hp=cfg.player_max_hp,
            attack=cfg.player_attack, radius=cfg.player_radius,
        )

    # -- lifecycle --

    def start(self) -> bool:
        """Load the spawn chunk. Returns False when the world starts empty."""
        self._tick_events = []
        ready = self._chunks.initialize(self._templates)
        self._event_log.append_many(self._tick_events)
        return ready

    def restart(self) -> None:
        """Reset the player after game over; the world keeps its state."""
        self._player = self._new_player()
        self._game_over = False
        self.record_event("player", "Restarted at spawn")
        logger.info("Player restarted at %s", self._spawn_pos)

    def tick(self, inp: PlayerInput, dt: float) -> None:
        """Advance the session by one frame of *dt* seconds."""
        self._tick_events = []

        self._phase_streaming()
        if self._game_over:
            if inp.restart_pressed:
                self.restart()
        else:
            self._phase_player_movement(inp, dt)
            self._phase_attack_input(inp, dt)
            self._phase_monster_movement(dt)
            self._phase_combat(dt)
            self._phase_game_over()

        self._event_log.append_many(self._tick_events)
        self._tick += 1

    def tick_once(self, inp: PlayerInput) -> bool:
        """Execute a single fixed-dt tick. Returns False if the session should stop."""
        if self._tick >= self._config.max_ticks:
            logger.info("Tick %d: Max ticks reached.", self._tick)
            return False
        self.tick(inp, self._config.fixed_dt)
        return True

    def run(self, inputs: Iterable[PlayerInput]) -> None:
        """Run fixed-dt ticks until max_ticks or the input source ends."""
        logger.info("=== Session started (seed=%d) ===", self._config.seed)
        for inp in inputs:
            if not self.tick_once(inp):
                break
            if self._tick % 600 == 0:
                p = self._player
                logger.info(
                    "Tick %d: pos=%s chunk=%s resident=%d hp=%d gold=%d",
                    self._tick, p.position, self._chunks.current_chunk,
                    len(self._chunks.loaded_chunk_ids()), p.hp, p.gold,
                )
        logger.info("=== Session finished at tick %d ===", self._tick)

    # -- phases --

    def _phase_streaming(self) -> None:
        self._chunks.update_loaded_chunks(self._player.position, self._templates)

    def _phase_player_movement(self, inp: PlayerInput, dt: float) -> None:
        player = self._player
        direction = inp.direction
        player.is_moving = not direction.is_zero()
        if not player.is_moving:
            return
        if direction.x < 0.0:
            player.facing = Facing.LEFT
        elif direction.x > 0.0:
            player.facing = Facing.RIGHT
        player.animation_phase += dt * self._config.animation_rate
        player.position = self._resolver.resolve(
            player.position, direction, self._config.player_speed, dt, self._player_profile,
        )

    def _phase_attack_input(self, inp: PlayerInput, dt: float) -> None:
        player = self._player
        if inp.attack_pressed and player.attack_cooldown <= 0.0:
            player.is_attacking = True
            player.attack_cooldown = self._config.attack_cooldown
        if player.attack_cooldown > 0.0:
            player.attack_cooldown -= dt

    def _phase_monster_movement(self, dt: float) -> None:
        cfg = self._config
        target = self._player.position
        for chunk in self._chunks.chunks():
            for monster in chunk.living_monsters():
                if not monster.template.is_aggressive:
                    continue
                to_player = target - monster.position
                dist = to_player.length()
                if dist <= 0.0 or dist >= cfg.aggro_range:
                    continue
                monster.position = self._resolver.resolve(
                    monster.position, to_player, monster.template.speed * cfg.monster_speed_scale,
                    dt, self._monster_profile,
                )

    def _phase_combat(self, dt: float) -> None:
        for chunk in self._chunks.chunks():
            for outcome in self._combat.update_chunk(self._player, chunk, dt, self._tick):
                if outcome.kind == "hit":
                    msg = f"{outcome.monster_name} hit for {outcome.damage}"
                elif outcome.kind == "kill":
                    loot = outcome.loot
                    msg = f"{outcome.monster_name} defeated: +{loot.gold if loot else 0} gold"
                    if loot is not None and loot.item_dropped:
                        msg += " and an item"
                else:
                    msg = f"{outcome.monster_name} respawned"
                self.record_event("combat", msg, (outcome.chunk_id,))

    def _phase_game_over(self) -> None:
        if self._player.hp <= 0:
            self._game_over = True
            self.record_event("player", "Game over")
            logger.info("Tick %d: player defeated, game over (gold %d)", self._tick, self._player.gold)


def build_session(
    config: RealmConfig,
    map_loader: MapLoader = load_map,
    world_file: str | Path | None = None,
) -> GameLoop | None:
    """Load session data per the config's recovery policies and wire a GameLoop.

    Returns None when the world file failed and its policy is SKIP.
    """
    recovery = RecoveryTable.from_config(config)
    data = load_session_data(world_file or config.world_file, config.monster_files, recovery)
    if data is None:
        logger.warning("No world loaded from %s, nothing to run", world_file or config.world_file)
        return None
    chunks = ChunkManager(data.layout, map_loader=map_loader, on_map_failure=config.on_chunk_map_failure)
    loop = GameLoop(config, chunks, data.templates, event_log=EventLog(config.event_log_capacity))
    chunks.set_event_sink(loop.record_event)
    return loop
