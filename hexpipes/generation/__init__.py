"""Puzzle generation for hexpipes."""

from .puzzle import DEFAULT_MAX_ATTEMPTS, GenerationError, generate_tiles
from .wfc import Tileset, create_tileset, default_tileset

__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "GenerationError",
    "generate_tiles",
    "Tileset",
    "create_tileset",
    "default_tileset",
]
