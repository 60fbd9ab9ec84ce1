"""The live puzzle: a finalized tile grid plus solve tracking.

A World starts solved (every tile fits its neighbors), is scrambled by
randomizing rotations, and is solved again by the player rotating cells
one step at a time. The set of incomplete cells is maintained
incrementally, so a rotation only rechecks the rotated cell and its
six neighbors.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Iterator

from ..logging_config import log_world
from ..settings import PuzzleSettings
from .map import HexMap
from .tiles import EMPTY, ROTATIONS, TileConfig
from .types import HexPos, spiral

if TYPE_CHECKING:
    from ..generation.wfc import Tileset

logger = logging.getLogger(__name__)


class World:
    """A puzzle instance.

    Owns its seed, its tile grid and the set of incomplete positions.
    Mutated only through scramble() and try_rotate().
    """

    def __init__(
        self,
        seed: int,
        tiles: HexMap[TileConfig],
        settings: PuzzleSettings | None = None,
    ):
        """
        Wrap an already generated tile grid.

        Args:
            seed: Seed the grid was generated from (also seeds scramble)
            tiles: Tile grid; the World takes ownership of it
            settings: Scramble defaults (None = PuzzleSettings())
        """
        self._seed = seed
        self._tiles = tiles
        self._settings = settings or PuzzleSettings()
        self._incomplete: set[HexPos] = set()
        self._rebuild_incomplete()

    @classmethod
    def new(
        cls,
        seed: int,
        radius: int | None = None,
        settings: PuzzleSettings | None = None,
        tileset: Tileset | None = None,
    ) -> World:
        """
        Generate a new solved puzzle.

        Args:
            seed: Random seed; the same seed and radius give the same puzzle
            radius: Map radius (None = settings.radius)
            settings: Generation and scramble settings (None = defaults)
            tileset: Element and adjacency tables (None = default tileset)

        Raises:
            GenerationError: If generation exceeds settings.max_attempts
        """
        from ..generation import generate_tiles

        settings = settings or PuzzleSettings()
        if radius is None:
            radius = settings.radius

        tiles = generate_tiles(
            radius,
            seed,
            tileset=tileset,
            max_attempts=settings.max_attempts,
        )
        return cls(seed, tiles, settings)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def radius(self) -> int:
        return self._tiles.radius

    @property
    def tiles(self) -> HexMap[TileConfig]:
        """The tile grid. Treat as read-only; use try_rotate to change it."""
        return self._tiles

    @property
    def incomplete(self) -> frozenset[HexPos]:
        """Positions whose tile does not currently fit all its neighbors."""
        return frozenset(self._incomplete)

    # -------------------------------------------------------------------------
    # Puzzle operations
    # -------------------------------------------------------------------------

    def scramble(
        self,
        force_rotation: bool | None = None,
        ensure_unsolved: bool | None = None,
    ) -> None:
        """
        Randomize the rotation of every piece.

        The random sequence is derived from the seed, so scrambling the
        same puzzle always gives the same result.

        Args:
            force_rotation: Rotate each piece by 1-5 steps so that none stays
                            in place, instead of picking a uniform rotation
            ensure_unsolved: Re-roll until at least one cell is incomplete
                             (only when the grid holds at least one piece)
        """
        if force_rotation is None:
            force_rotation = self._settings.force_rotation
        if ensure_unsolved is None:
            ensure_unsolved = self._settings.ensure_unsolved

        rng = random.Random(self._seed)
        has_pieces = any(not tile.is_empty for tile in self._tiles.values())
        rounds = 0

        while True:
            rounds += 1
            for pos, tile in list(self._tiles.items()):
                if tile.is_empty:
                    continue
                if force_rotation:
                    self._tiles[pos] = tile.rotate_by(rng.randint(1, ROTATIONS - 1))
                else:
                    self._tiles[pos] = tile.with_rotation(rng.randrange(ROTATIONS))

            self._rebuild_incomplete()
            if self._incomplete or not (ensure_unsolved and has_pieces):
                break

        log_world(
            logger,
            self._seed,
            "SCRAMBLE",
            f"rounds={rounds} | incomplete={len(self._incomplete)}",
        )

    def is_tile_complete(self, pos: HexPos) -> bool:
        """
        Check whether a tile's connectors match all its neighbors exactly.

        Each open connector needs an open connector facing it and each
        closed side needs a closed side facing it. Off-map neighbors count
        as empty (all sides closed). Positions off the map are complete.
        """
        tile = self._tiles.get(pos)
        if tile is None:
            return True

        endings = tile.endings()
        for direction, neighbor_pos in enumerate(pos.neighbors()):
            neighbor = self._tiles.get(neighbor_pos, EMPTY)
            if endings[direction] != neighbor.endings()[(direction + 3) % ROTATIONS]:
                return False
        return True

    def try_rotate(self, pos: HexPos) -> bool:
        """
        Rotate the tile at pos by one step.

        Returns True if the grid changed. Off-map positions and empty
        cells are left alone and return False.
        """
        tile = self._tiles.get(pos)
        if tile is None:
            return False

        rotated = tile.rotate_by(1)
        if rotated == tile:
            return False

        self._tiles[pos] = rotated
        for affected in spiral(pos, 1):
            if not self._tiles.contains(affected):
                continue
            if self.is_tile_complete(affected):
                self._incomplete.discard(affected)
            else:
                self._incomplete.add(affected)

        log_world(
            logger,
            self._seed,
            "ROTATE",
            f"pos=({pos.q}, {pos.r}) | rotation={rotated.rotation} | incomplete={len(self._incomplete)}",
        )
        return True

    def is_completed(self) -> bool:
        """True when every tile fits its neighbors."""
        return not self._incomplete

    def iter(self) -> Iterator[tuple[HexPos, TileConfig]]:
        """Yield (position, tile) pairs in spiral order from the center."""
        for pos in spiral(self._tiles.center, self._tiles.radius):
            yield pos, self._tiles[pos]

    def __iter__(self) -> Iterator[tuple[HexPos, TileConfig]]:
        return self.iter()

    def __len__(self) -> int:
        return len(self._tiles)

    def _rebuild_incomplete(self) -> None:
        self._incomplete = {pos for pos in self._tiles.keys() if not self.is_tile_complete(pos)}
