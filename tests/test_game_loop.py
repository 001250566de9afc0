"""Tests for the per-tick game loop: phase order, input, chase, game over."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from dataclasses import replace
from itertools import islice

import pytest

from tests.helpers.realm_fixture import DictMapLoader, RealmArena, chunk_id, make_layout, make_map, make_template
from chunkrealm.config import RealmConfig
from chunkrealm.core.enums import Facing
from chunkrealm.core.models import Vec2
from chunkrealm.core.snapshot import RealmSnapshot
from chunkrealm.core.tile_map import MonsterSpawn
from chunkrealm.engine.game_loop import GameLoop, build_session
from chunkrealm.engine.input import IDLE, PlayerInput, ScriptedInput
from chunkrealm.systems.chunk_manager import ChunkManager
from chunkrealm.utils.event_log import EventLog

_DATA = os.path.join(os.path.dirname(__file__), "..", "data")

_RIGHT = PlayerInput(1.0, 0.0)
_LEFT = PlayerInput(-1.0, 0.0)
_SPAWN = Vec2(192.0, 192.0)


def _make_arena(spawns=None, templates=(), **config_overrides) -> RealmArena:
    arena = RealmArena.open_grid(
        3, 3, view_distance=1, spawn=(1, 1), templates=templates,
        spawns={chunk_id(1, 1): spawns} if spawns else None, **config_overrides,
    )
    arena.start()
    return arena


class TestStreaming:

    def test_start_loads_spawn_chunk_only(self):
        arena = _make_arena()
        assert arena.loop.chunks.loaded_chunk_ids() == ["c_1_1"]
        assert arena.player.position == _SPAWN

    def test_first_tick_streams_view_window(self):
        arena = _make_arena()
        arena.run_ticks(1)
        assert len(arena.loop.chunks.loaded_chunk_ids()) == 9

    def test_walking_across_boundary_changes_chunk(self):
        arena = _make_arena()
        arena.run_ticks(30, _RIGHT)
        assert arena.player.position.x == pytest.approx(292.0)
        arena.run_ticks(1)
        assert arena.loop.chunks.current_chunk == "c_2_1"
        assert any(e.message == "Entered chunk c_2_1" for e in arena.events)

    def test_view_distance_zero_blocks_at_unloaded_edge(self):
        arena = RealmArena.open_grid(3, 1, view_distance=0, spawn=(0, 0))
        arena.start()
        arena.run_ticks(60, _RIGHT)
        x = arena.player.position.x
        assert 110.0 < x < 118.0 + 1e-9
        assert arena.loop.chunks.loaded_chunk_ids() == ["c_0_0"]


class TestPlayerInput:

    def test_facing_follows_horizontal_input(self):
        arena = _make_arena()
        arena.run_ticks(1, _LEFT)
        assert arena.player.facing == Facing.LEFT
        arena.run_ticks(1, PlayerInput(0.0, 1.0))
        assert arena.player.facing == Facing.LEFT
        arena.run_ticks(1, _RIGHT)
        assert arena.player.facing == Facing.RIGHT

    def test_animation_advances_only_while_moving(self):
        arena = _make_arena()
        arena.run_ticks(6, _RIGHT, dt=0.1)
        assert arena.player.animation_phase == pytest.approx(3.0)
        assert arena.player.is_moving
        arena.run_ticks(1)
        assert arena.player.animation_phase == pytest.approx(3.0)
        assert arena.player.walk_frame == "idle"

    def test_attack_press_sets_flag_and_cooldown(self):
        arena = _make_arena()
        press = PlayerInput(attack_pressed=True)
        arena.run_ticks(1, press, dt=0.1)
        assert arena.player.is_attacking
        assert arena.player.attack_cooldown == pytest.approx(0.4)
        arena.run_ticks(1, press, dt=0.1)
        assert arena.player.attack_cooldown == pytest.approx(0.3)
        arena.run_ticks(3, dt=0.1)
        assert arena.player.attack_cooldown == pytest.approx(0.0, abs=1e-9)
        arena.run_ticks(1, dt=0.1)
        assert arena.player.attack_cooldown < 0.0
        arena.run_ticks(1, press, dt=0.1)
        assert arena.player.attack_cooldown == pytest.approx(0.4)


class TestMonsterChase:

    def _arena(self, **overrides):
        spawns = [MonsterSpawn(0.0, 2.0, "Hunter"), MonsterSpawn(2.0, 0.0, "Grazer")]
        templates = [make_template("Hunter", aggressive=True), make_template("Grazer")]
        return _make_arena(spawns=spawns, templates=templates, **overrides)

    def test_aggressive_monster_moves_toward_player(self):
        arena = self._arena()
        hunter, grazer = arena.loop.chunks.get_chunk("c_1_1").monsters
        assert hunter.position == Vec2(128.0, 192.0)
        arena.run_ticks(1)
        assert hunter.position.x == pytest.approx(128.0 + 1.5 * 30.0 / 60.0)
        assert hunter.position.y == pytest.approx(192.0)
        assert grazer.position == Vec2(192.0, 128.0)

    def test_dead_monster_does_not_chase(self):
        arena = self._arena()
        hunter = arena.loop.chunks.get_chunk("c_1_1").monsters[0]
        hunter.current_hp = 0
        hunter.is_dead = True
        hunter.respawn_timer = 5.0
        arena.run_ticks(3)
        assert hunter.position == Vec2(128.0, 192.0)

    def test_out_of_aggro_range_stays_put(self):
        arena = self._arena(aggro_range=50.0)
        hunter = arena.loop.chunks.get_chunk("c_1_1").monsters[0]
        arena.run_ticks(5)
        assert hunter.position == Vec2(128.0, 192.0)


class TestCombatAndGameOver:

    def test_kill_awards_gold_and_logs_event(self):
        spawns = [MonsterSpawn(2.25, 2.0, "Imp")]
        arena = _make_arena(spawns=spawns, templates=[make_template("Imp", hp=10, gold=7)])
        arena.run_ticks(1, PlayerInput(attack_pressed=True))
        assert arena.player.gold == 7
        combat = arena.loop.event_log.by_category("combat")
        assert any("defeated" in e.message for e in combat)

    def test_game_over_freezes_player_until_restart(self):
        spawns = [MonsterSpawn(2.25, 2.0, "Imp")]
        arena = _make_arena(spawns=spawns, templates=[make_template("Imp")])
        arena.player.hp = 1
        arena.player.gold = 12
        arena.run_ticks(1)
        assert arena.loop.game_over
        assert arena.player.hp == 0
        arena.run_ticks(10, _RIGHT)
        assert arena.player.position == _SPAWN
        assert arena.player.hp == 0

        arena.run_ticks(1, PlayerInput(restart_pressed=True))
        assert not arena.loop.game_over
        assert arena.player.hp == 100
        assert arena.player.gold == 0
        assert arena.player.position == _SPAWN
        messages = [e.message for e in arena.loop.event_log.by_category("player")]
        assert messages == ["Game over", "Restarted at spawn"]

    def test_events_carry_tick(self):
        spawns = [MonsterSpawn(2.25, 2.0, "Imp")]
        arena = _make_arena(spawns=spawns, templates=[make_template("Imp", hp=10)])
        arena.run_ticks(3)
        arena.run_ticks(1, PlayerInput(attack_pressed=True))
        kill = [e for e in arena.loop.event_log.by_category("combat") if "defeated" in e.message]
        assert kill[0].tick == 3
        assert kill[0].chunk_ids == ("c_1_1",)


class TestEventLog:

    def _loop(self, **kwargs) -> GameLoop:
        layout = make_layout(2, 1, view_distance=1)
        loader = DictMapLoader({cid: make_map() for cid in layout.chunks})
        return GameLoop(RealmConfig(), ChunkManager(layout, map_loader=loader), [], **kwargs)

    def test_supplied_empty_log_is_kept(self):
        mine = EventLog(10)
        loop = self._loop(event_log=mine)
        assert loop.event_log is mine
        loop.chunks.set_event_sink(loop.record_event)
        loop.start()
        assert [e.message for e in mine.latest()] == ["Loaded chunk c_0_0"]

    def test_record_event_stamps_current_tick(self):
        loop = self._loop()
        loop.start()
        loop.tick(IDLE, 0.1)
        loop.record_event("player", "hello", ("c_0_0",))
        assert loop.tick_events[-1].tick == 1
        assert loop.tick_events[-1].chunk_ids == ("c_0_0",)


class TestRunAndSnapshot:

    def test_run_stops_at_max_ticks(self):
        arena = _make_arena(max_ticks=5)
        arena.loop.run(ScriptedInput.walking(1.0, 0.0, 100))
        assert arena.loop.tick_count == 5

    def test_snapshot_is_detached(self):
        spawns = [MonsterSpawn(0.0, 2.0, "Imp")]
        arena = _make_arena(spawns=spawns, templates=[make_template("Imp")])
        arena.run_ticks(2)
        snap = RealmSnapshot.capture(arena.loop)
        assert snap.tick == 2
        assert snap.current_chunk == "c_1_1"
        assert len(snap.loaded_chunk_ids) == 9
        assert snap.living_monster_count() == 1
        arena.player.hp = 5
        arena.loop.chunks.get_chunk("c_1_1").monsters[0].current_hp = 1
        assert snap.player.hp == 100
        assert snap.monsters["c_1_1"][0].current_hp == 30

    def test_scripted_attack_cadence(self):
        script = ScriptedInput.walking(1.0, 0.0, 7, attack_every=3)
        pressed = [inp.attack_pressed for inp in islice(script, 8)]
        assert pressed == [True, False, False, True, False, False, True, False]

    def test_scripted_input_idles_after_segments(self):
        script = ScriptedInput([(2, _RIGHT)])
        assert list(islice(script, 4)) == [_RIGHT, _RIGHT, IDLE, IDLE]


class TestSampleSession:

    def test_walk_east_enters_desert(self):
        config = replace(
            RealmConfig(),
            world_file=os.path.join(_DATA, "world_config.json"),
            monster_files=(
                os.path.join(_DATA, "monsters", "forest_monsters.yaml"),
                os.path.join(_DATA, "monsters", "desert_monsters.yaml"),
            ),
            max_ticks=120,
        )
        loop = build_session(config)
        assert loop is not None
        assert loop.start()
        assert loop.player.position == Vec2(768.0, 816.0)
        loop.run(ScriptedInput.walking(1.0, 0.0, 120, attack_every=20))
        assert loop.chunks.current_chunk == "desert_e"
        chunk_events = [e.message for e in loop.event_log.by_category("chunk")]
        assert "Loaded chunk forest_center" in chunk_events
        assert "Entered chunk desert_e" in chunk_events
        assert not loop.game_over
