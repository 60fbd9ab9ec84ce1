"""Shared test fixtures for hexpipes."""

import tempfile
from pathlib import Path

import pytest

from hexpipes.core import EMPTY, HexMap, HexPos, TileConfig, TileShape


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (skipped by default, run with --run-slow)")


def pytest_addoption(parser):
    """Add --run-slow option to pytest."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow tests (skipped by default)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is passed."""
    if config.getoption("--run-slow"):
        return

    skip_slow = pytest.mark.skip(reason="Slow test (use --run-slow to run)")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def temp_data_dir() -> Path:
    """Create a temporary data directory for tests."""
    with tempfile.TemporaryDirectory(prefix="hexpipes_test_") as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def pipe_pair_tiles() -> HexMap[TileConfig]:
    """A solved radius-1 grid: two dead-end pieces joined center to south-east.

    The center piece opens toward (0, 1) and the piece at (0, 1) opens
    back toward the center. Every other cell is empty.
    """
    tiles: HexMap[TileConfig] = HexMap(1, EMPTY)
    tiles[HexPos(0, 0)] = TileConfig(shape=TileShape.TILE_0, rotation=0)
    tiles[HexPos(0, 1)] = TileConfig(shape=TileShape.TILE_0, rotation=3)
    return tiles
