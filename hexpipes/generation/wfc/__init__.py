"""Wave Function Collapse engine for hex puzzle generation."""

from . import bitset
from .tile import (
    Tileset,
    TilesetCapacityError,
    build_adjacency,
    build_element_table,
    create_tileset,
    default_tileset,
    opposite,
)
from .solver import InvariantError, PossibilityMap, SolverState

__all__ = [
    "bitset",
    "Tileset",
    "TilesetCapacityError",
    "build_adjacency",
    "build_element_table",
    "create_tileset",
    "default_tileset",
    "opposite",
    "InvariantError",
    "PossibilityMap",
    "SolverState",
]
