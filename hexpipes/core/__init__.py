"""Core domain models for hexpipes.

This module contains the hex coordinate system, the tile model, packed
hex map storage and the live puzzle World.

Usage:
    from hexpipes.core import HexPos, TileConfig, TileShape, HexMap, World
"""

# Types
from .types import (
    CENTER,
    NEIGHBOR_OFFSETS,
    Direction,
    HexPos,
    ring,
    spiral,
)

# Tiles
from .tiles import (
    EMPTY,
    ROTATIONS,
    TileConfig,
    TileShape,
)

# Storage
from .map import HexMap, linearize, map_size

# World
from .world import World

__all__ = [
    # Types
    "CENTER",
    "NEIGHBOR_OFFSETS",
    "Direction",
    "HexPos",
    "ring",
    "spiral",
    # Tiles
    "EMPTY",
    "ROTATIONS",
    "TileConfig",
    "TileShape",
    # Storage
    "HexMap",
    "linearize",
    "map_size",
    # World
    "World",
]
