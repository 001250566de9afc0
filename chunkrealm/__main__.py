"""Entry point: ``python -m chunkrealm``.

Supports two modes:
  - ``python -m chunkrealm run``      → Headless session driven by a scripted walk
  - ``python -m chunkrealm inspect``  → Load and validate the data files, print the layout
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _parse_move(text: str) -> tuple[float, float]:
    try:
        dx, dy = (float(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected DX,DY, got {text!r}") from None
    return dx, dy


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Chunk-streamed tile RPG core")
    sub = parser.add_subparsers(dest="command")

    run = sub.add_parser("run", help="Run a headless session (default)")
    run.add_argument("--world", type=str, default=None, help="World config file")
    run.add_argument("--seed", type=int, default=42)
    run.add_argument("--ticks", type=int, default=3600)
    run.add_argument("--move", type=_parse_move, default=(1.0, 0.0), help="Walk direction as DX,DY")
    run.add_argument("--attack-every", type=int, default=30, help="Press attack every N ticks (0 = never)")
    run.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    insp = sub.add_parser("inspect", help="Load the data files and report the layout")
    insp.add_argument("--world", type=str, default=None, help="World config file")
    insp.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _config_from_args(args: argparse.Namespace):
    from dataclasses import replace

    from chunkrealm.config import RealmConfig

    config = RealmConfig(log_level=args.log_level)
    if args.world:
        config = replace(config, world_file=args.world)
    if getattr(args, "seed", None) is not None:
        config = replace(config, seed=args.seed)
    if getattr(args, "ticks", None) is not None:
        config = replace(config, max_ticks=args.ticks)
    return config


def _run_session(args: argparse.Namespace) -> int:
    from chunkrealm.core.snapshot import RealmSnapshot
    from chunkrealm.engine.game_loop import build_session
    from chunkrealm.engine.input import ScriptedInput
    from chunkrealm.utils.logging import setup_logging

    config = _config_from_args(args)
    setup_logging(config.log_level)

    loop = build_session(config)
    if loop is None:
        return 1
    if not loop.start():
        logger.warning("Running with an empty world")

    dx, dy = args.move
    script = ScriptedInput.walking(dx, dy, config.max_ticks, attack_every=args.attack_every)
    loop.run(script)

    snap = RealmSnapshot.capture(loop)
    logger.info(
        "Final: tick=%d pos=%s chunk=%s resident=%s hp=%d gold=%d items=%d game_over=%s",
        snap.tick, snap.player.position, snap.current_chunk, ",".join(snap.loaded_chunk_ids),
        snap.player.hp, snap.gold, snap.player.items_found, snap.game_over,
    )
    for event in loop.event_log.by_category("chunk")[-10:]:
        logger.info("  [%d] %s", event.tick, event.message)
    return 0


def _inspect(args: argparse.Namespace) -> int:
    from chunkrealm.data.loader import load_map, load_session_data
    from chunkrealm.data.recovery import RecoveryTable
    from chunkrealm.utils.logging import setup_logging

    config = _config_from_args(args)
    setup_logging(config.log_level)

    data = load_session_data(config.world_file, config.monster_files, RecoveryTable.from_config(config))
    if data is None:
        return 1
    layout = data.layout
    logger.info("World %r: %dx%d chunks, %d tiles/chunk, view distance %d",
                layout.name, layout.chunks_x, layout.chunks_y, layout.chunk_size, layout.view_distance)
    status = 0
    for x, y, cid in layout.iter_cells():
        desc = layout.descriptor(cid)
        if desc is None:
            continue
        result = load_map(desc.map_file)
        if result.ok:
            logger.info("  (%d,%d) %-14s %-7s %s", x, y, cid, desc.biome.name, result.value)
        else:
            status = 1
            logger.warning("  (%d,%d) %-14s %s: %s", x, y, cid, result.failure.name, result.detail)
    logger.info("Monster templates: %s", ", ".join(t.name for t in data.templates))
    return status


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        args = parser.parse_args(["run"])
    if args.command == "inspect":
        return _inspect(args)
    return _run_session(args)


if __name__ == "__main__":
    raise SystemExit(main())
