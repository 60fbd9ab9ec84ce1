"""Tests for the generation driver."""

import logging

import pytest

from hexpipes.core import CENTER, EMPTY, HexMap, HexPos, TileConfig, TileShape, spiral
from hexpipes.generation import GenerationError, generate_tiles
from hexpipes.generation.wfc import Tileset, opposite


def _unsatisfiable_tileset() -> Tileset:
    """A one-entry table where nothing may sit next to anything."""
    return Tileset(
        elements=(EMPTY,),
        empty_index=0,
        complete_set=1,
        adjacency=((0, 0, 0, 0, 0, 0),),
    )


def _all_edges_match(tiles: HexMap[TileConfig]) -> bool:
    for pos, tile in tiles.items():
        for direction, neighbor in enumerate(pos.neighbors()):
            other = tiles.get(neighbor, EMPTY)
            if tile.endings()[direction] != other.endings()[opposite(direction)]:
                return False
    return True


class TestGenerateTiles:
    """Test the main generation function."""

    def test_generates_full_grid(self):
        """Every position in the radius gets a tile."""
        tiles = generate_tiles(2, seed=12345)
        assert tiles.radius == 2
        assert len(tiles) == 19
        assert all(isinstance(tile, TileConfig) for tile in tiles.values())

    @pytest.mark.parametrize("seed", range(15))
    def test_result_is_solved(self, seed):
        """Generated grids match on every edge, including the rim."""
        assert _all_edges_match(generate_tiles(2, seed=seed))

    def test_seed_produces_reproducible_results(self):
        """Same seed should produce identical grids."""
        assert generate_tiles(1, seed=7) == generate_tiles(1, seed=7)

    def test_radius_one_snapshot(self):
        """The radius-1 assignment for seed 2024 is pinned cell by cell."""
        tiles = generate_tiles(1, seed=2024)
        assert [(pos, tiles[pos]) for pos in spiral(CENTER, 1)] == [
            (HexPos(0, 0), TileConfig(shape=TileShape.TILE_0134, rotation=4)),
            (HexPos(-1, 1), TileConfig(shape=TileShape.TILE_01, rotation=1)),
            (HexPos(0, 1), TileConfig(shape=TileShape.TILE_02, rotation=2)),
            (HexPos(1, 0), TileConfig(shape=TileShape.TILE_012, rotation=3)),
            (HexPos(1, -1), TileConfig(shape=TileShape.TILE_012, rotation=4)),
            (HexPos(0, -1), TileConfig(shape=TileShape.TILE_0, rotation=1)),
            (HexPos(-1, 0), TileConfig(shape=TileShape.TILE_0, rotation=1)),
        ]

    def test_different_seeds_vary(self):
        """Different seeds should usually produce different grids."""
        results = {tuple(generate_tiles(3, seed=s).values()) for s in range(5)}
        assert len(results) > 1

    def test_invalid_max_attempts(self):
        """At least one attempt is required."""
        with pytest.raises(ValueError):
            generate_tiles(1, seed=0, max_attempts=0)


class TestAttemptLimit:
    """Test the bound on generation restarts."""

    def test_gives_up_after_max_attempts(self):
        """An unsatisfiable table fails with GenerationError."""
        with pytest.raises(GenerationError) as exc_info:
            generate_tiles(1, seed=3, tileset=_unsatisfiable_tileset(), max_attempts=4)
        assert exc_info.value.attempts == 4
        assert exc_info.value.seed == 3

    def test_restarts_are_logged(self, caplog):
        """Each failed attempt is logged at debug level."""
        caplog.set_level(logging.DEBUG, logger="hexpipes")
        with pytest.raises(GenerationError):
            generate_tiles(0, seed=1, tileset=_unsatisfiable_tileset(), max_attempts=3)
        restarts = [r for r in caplog.records if "CONTRADICTION" in r.getMessage()]
        assert len(restarts) == 3

    def test_success_is_logged(self, caplog):
        """A finished generation is logged at info level."""
        caplog.set_level(logging.DEBUG, logger="hexpipes")
        generate_tiles(1, seed=5)
        assert any(
            r.levelno == logging.INFO and "Generated radius 1" in r.getMessage()
            for r in caplog.records
        )


class TestLargeGrid:
    """Test generation of larger grids."""

    @pytest.mark.slow
    def test_large_grid_completes(self):
        """Radius 8 (217 cells) should complete and be solved."""
        tiles = generate_tiles(8, seed=12345)
        assert _all_edges_match(tiles)
