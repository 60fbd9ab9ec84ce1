"""hexpipes - generate and inspect hex pipe puzzles from the command line."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from hexpipes.core import HexMap, TileConfig, World
from hexpipes.generation import GenerationError
from hexpipes.logging_config import setup_logging
from hexpipes.settings import load_settings

logger = logging.getLogger(__name__)


def format_world(world: World) -> str:
    """Render the puzzle as a table, one row per cell in spiral order."""
    lines = [f"{'q':>3} {'r':>3}  {'shape':<10} {'rot':>3}  {'endings':<6}  ok"]
    for pos, tile in world.iter():
        endings = "".join("#" if open_ else "." for open_ in tile.endings())
        shape = tile.shape.name if tile.shape is not None else "-"
        ok = "yes" if world.is_tile_complete(pos) else "no"
        lines.append(f"{pos.q:>3} {pos.r:>3}  {shape:<10} {tile.rotation:>3}  {endings:<6}  {ok}")
    return "\n".join(lines)


def solve_by_rotation(world: World, solution: HexMap[TileConfig]) -> int:
    """
    Rotate incomplete cells back toward a known solution until solved.

    Only cells that are currently incomplete are touched, and each is
    turned at most five times, so every pass fixes at least one cell for
    good. Returns the number of rotations made.
    """
    moves = 0
    while not world.is_completed():
        for pos in sorted(world.incomplete):
            while world.tiles[pos] != solution[pos]:
                world.try_rotate(pos)
                moves += 1
    return moves


def main(argv: list[str] | None = None) -> int:
    """Main entry point for hexpipes."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="hexpipes - generate hex pipe-rotation puzzles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hexpipes --seed 7                 # Generate and print a solved puzzle
  hexpipes --seed 7 --radius 4      # Larger map
  hexpipes --seed 7 --scramble      # Show the scrambled puzzle
  hexpipes --seed 7 --solve         # Scramble, then solve by rotation
        """,
    )
    parser.add_argument("--seed", type=int, default=1, help="Puzzle seed (default: 1)")
    parser.add_argument("--radius", type=int, help="Map radius (default: from config)")
    parser.add_argument(
        "--config",
        type=Path,
        default=os.environ.get("HEXPIPES_CONFIG"),
        help="Path to a puzzle YAML config (default: $HEXPIPES_CONFIG or the bundled one)",
    )
    parser.add_argument("--scramble", action="store_true", help="Scramble the puzzle before printing")
    parser.add_argument("--solve", action="store_true", help="Scramble, then rotate cells until solved")
    parser.add_argument(
        "--data",
        type=Path,
        default=Path(os.environ.get("HEXPIPES_DATA", "data")),
        help="Data directory for the log file (default: $HEXPIPES_DATA or data/)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging to console")

    args = parser.parse_args(argv)

    console_level = logging.DEBUG if args.debug else logging.WARNING
    setup_logging(args.data, console_level=console_level)

    settings = load_settings(args.config)
    try:
        world = World.new(args.seed, radius=args.radius, settings=settings)
    except GenerationError as e:
        logger.error(f"Generation failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    solution = world.tiles.copy()
    if args.scramble or args.solve:
        world.scramble()

    if args.solve:
        print(f"Incomplete after scramble: {len(world.incomplete)}")
        moves = solve_by_rotation(world, solution)
        print(f"Solved in {moves} rotations: {world.is_completed()}")
        print()

    print(f"Seed {world.seed}, radius {world.radius}, {len(world)} cells")
    print(format_world(world))
    return 0


if __name__ == "__main__":
    sys.exit(main())
