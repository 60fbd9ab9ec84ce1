"""
Puzzle generation using Wave Function Collapse.

This module provides the main entry point for generating a solved
puzzle grid. Every generated tile already fits all of its neighbors,
so the result is the solution the player has to find again after the
grid is scrambled.
"""

from __future__ import annotations

import logging
import random
import time

from ..core.map import HexMap
from ..core.tiles import TileConfig
from ..logging_config import log_generation
from .wfc import PossibilityMap, Tileset, default_tileset

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1000


class GenerationError(RuntimeError):
    """Every generation attempt ended in a contradiction."""

    def __init__(self, message: str, seed: int | None = None, attempts: int = 0):
        super().__init__(message)
        self.seed = seed
        self.attempts = attempts


def generate_tiles(
    radius: int,
    seed: int,
    tileset: Tileset | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    rng: random.Random | None = None,
) -> HexMap[TileConfig]:
    """
    Generate a solved puzzle grid.

    A contradiction throws away the whole attempt and starts again from
    a cleared map. The random sequence is not reseeded between attempts,
    so each restart explores a different assignment.

    Args:
        radius: Map radius (0 = a single cell)
        seed: Random seed; the same seed always produces the same grid
        tileset: Element and adjacency tables (None = default tileset)
        max_attempts: Max attempts before giving up
        rng: Random source to use instead of one seeded from `seed`

    Returns:
        HexMap of tile configurations where every tile fits its neighbors

    Raises:
        GenerationError: If all max_attempts attempts hit a contradiction
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    if tileset is None:
        tileset = default_tileset()
    if rng is None:
        rng = random.Random(seed)
    wfc = PossibilityMap(radius, tileset, rng)
    start = time.perf_counter()

    for attempt in range(1, max_attempts + 1):
        if _run_attempt(wfc):
            duration_ms = int((time.perf_counter() - start) * 1000)
            log_generation(logger, seed, attempt, "COMPLETE", duration_ms, f"radius={radius}")
            logger.info(f"Generated radius {radius} puzzle for seed {seed} in {attempt} attempt(s)")
            return wfc.to_tiles()

        log_generation(logger, seed, attempt, "CONTRADICTION", details="restarting")

    raise GenerationError(
        f"Puzzle generation failed after {max_attempts} attempts "
        f"(seed={seed}, radius={radius})",
        seed=seed,
        attempts=max_attempts,
    )


def _run_attempt(wfc: PossibilityMap) -> bool:
    """Clear, then collapse lowest-entropy cells until done. False on contradiction."""
    if not wfc.clear():
        return False

    while True:
        pos = wfc.lowest_entropy()
        if pos is None:
            return True
        if not wfc.collapse(pos):
            return False
