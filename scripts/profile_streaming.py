#!/usr/bin/env python3
"""Chunk streaming profiler.

Usage:
    python scripts/profile_streaming.py --ticks 3600
    python scripts/profile_streaming.py --ticks 3600 --cprofile streaming.prof

Walks the player around a square circuit of the sample world so chunks
stream in and out, then reports:
    - Per-tick timing statistics (min, max, p50, p95, p99)
    - Per-phase breakdown (streaming, movement, monsters, combat)
    - Resident chunk count and chunk loads/unloads
    - Optional: cProfile dump
"""

from __future__ import annotations

import argparse
import cProfile
import io
import os
import pstats
import statistics
import sys
import time
from dataclasses import replace

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from chunkrealm.config import RealmConfig
from chunkrealm.engine.game_loop import GameLoop, build_session
from chunkrealm.engine.input import PlayerInput, ScriptedInput

_DATA = os.path.join(os.path.dirname(__file__), "..", "data")


def _circuit(leg_ticks: int) -> ScriptedInput:
    """Right, down, left, up; attacking every 20 ticks."""
    segments: list[tuple[int, PlayerInput]] = []
    for dx, dy in ((1.0, 0.0), (0.0, 1.0), (-1.0, 0.0), (0.0, -1.0)):
        segments.append((1, PlayerInput(dx, dy, attack_pressed=True)))
        segments.append((leg_ticks - 1, PlayerInput(dx, dy)))
    return ScriptedInput(segments * 50)


def _run_session(loop: GameLoop, num_ticks: int, leg_ticks: int) -> dict:
    """Run ticks phase by phase and collect timing data."""
    tick_times: list[float] = []
    phase_times: list[tuple[float, float, float, float]] = []
    resident_counts: list[int] = []
    dt = loop.config.fixed_dt

    for inp in _circuit(leg_ticks):
        if len(tick_times) >= num_ticks or loop.game_over:
            break
        t_start = time.perf_counter()

        loop._tick_events = []
        loop._phase_streaming()
        t1 = time.perf_counter()

        loop._phase_player_movement(inp, dt)
        loop._phase_attack_input(inp, dt)
        t2 = time.perf_counter()

        loop._phase_monster_movement(dt)
        t3 = time.perf_counter()

        loop._phase_combat(dt)
        loop._phase_game_over()
        loop.event_log.append_many(loop.tick_events)
        loop._tick += 1
        t4 = time.perf_counter()

        tick_times.append(t4 - t_start)
        phase_times.append((t1 - t_start, t2 - t1, t3 - t2, t4 - t3))
        resident_counts.append(len(loop.chunks.loaded_chunk_ids()))

    return {
        "tick_times": tick_times,
        "phase_times": phase_times,
        "resident_counts": resident_counts,
        "chunk_events": loop.event_log.by_category("chunk"),
    }


def _percentile(data: list[float], p: float) -> float:
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_report(data: dict, wall_time: float) -> None:
    tick_times = data["tick_times"]
    phase_times = data["phase_times"]
    resident = data["resident_counts"]
    num_ticks = len(tick_times)

    if num_ticks == 0:
        print("No ticks executed.")
        return

    loads = sum(1 for e in data["chunk_events"] if e.message.startswith("Loaded"))
    unloads = sum(1 for e in data["chunk_events"] if e.message.startswith("Unloaded"))

    print("\n" + "=" * 70)
    print("  STREAMING PERFORMANCE REPORT")
    print("=" * 70)

    print(f"\n  Ticks executed:    {num_ticks}")
    print(f"  Wall clock time:   {wall_time:.3f}s")
    print(f"  Throughput:        {num_ticks / wall_time:.1f} ticks/sec")
    print(f"  Avg tick time:     {statistics.mean(tick_times) * 1000:.3f}ms")
    print(f"\n  Chunk loads:       {loads}")
    print(f"  Chunk unloads:     {unloads}")
    print(f"  Resident (peak):   {max(resident)}")

    print(f"\n  {'Metric':<16} {'Time (ms)':>10}")
    print(f"  {'-' * 16} {'-' * 10}")
    print(f"  {'Min':<16} {min(tick_times) * 1000:>10.3f}")
    print(f"  {'P50 (median)':<16} {_percentile(tick_times, 50) * 1000:>10.3f}")
    print(f"  {'P95':<16} {_percentile(tick_times, 95) * 1000:>10.3f}")
    print(f"  {'P99':<16} {_percentile(tick_times, 99) * 1000:>10.3f}")
    print(f"  {'Max':<16} {max(tick_times) * 1000:>10.3f}")

    total_sum = sum(tick_times)
    print(f"\n  {'Phase':<16} {'Avg (ms)':>10} {'P95 (ms)':>10} {'% Total':>10}")
    print(f"  {'-' * 16} {'-' * 10} {'-' * 10} {'-' * 10}")
    names = ("Streaming", "Movement", "Monsters", "Combat")
    for i, name in enumerate(names):
        times = [p[i] for p in phase_times]
        pct = (sum(times) / total_sum * 100) if total_sum > 0 else 0
        print(f"  {name:<16} {statistics.mean(times) * 1000:>10.3f} "
              f"{_percentile(times, 95) * 1000:>10.3f} {pct:>9.1f}%")

    print("\n  Top 5 slowest ticks:")
    indexed = sorted(enumerate(tick_times), key=lambda x: x[1], reverse=True)[:5]
    for tick_idx, t in indexed:
        print(f"    Tick {tick_idx:>5}: {t * 1000:.3f}ms  ({resident[tick_idx]} resident chunks)")

    print("\n" + "=" * 70)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile chunk streaming")
    parser.add_argument("--ticks", type=int, default=3600, help="Number of ticks to run")
    parser.add_argument("--leg", type=int, default=240, help="Ticks per side of the walking circuit")
    parser.add_argument("--world", type=str, default=os.path.join(_DATA, "world_config.json"))
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    args = parser.parse_args()

    cfg = replace(
        RealmConfig(),
        world_file=args.world,
        monster_files=(
            os.path.join(_DATA, "monsters", "forest_monsters.yaml"),
            os.path.join(_DATA, "monsters", "desert_monsters.yaml"),
        ),
        max_ticks=args.ticks,
    )
    loop = build_session(cfg)
    if loop is None or not loop.start():
        print(f"Could not load a world from {args.world}")
        return

    print(f"Profiling: {args.ticks} ticks, leg={args.leg}, world={args.world}")

    profiler = None
    if args.cprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    wall_start = time.perf_counter()
    data = _run_session(loop, args.ticks, args.leg)
    wall_time = time.perf_counter() - wall_start

    if profiler:
        profiler.disable()

    _print_report(data, wall_time)

    if profiler and args.cprofile:
        profiler.dump_stats(args.cprofile)
        print(f"\n  cProfile data saved to: {args.cprofile}")
        print(f"\n  Top 20 functions by cumulative time:")
        stream = io.StringIO()
        ps = pstats.Stats(profiler, stream=stream)
        ps.sort_stats("cumulative")
        ps.print_stats(20)
        print(stream.getvalue())


if __name__ == "__main__":
    main()
