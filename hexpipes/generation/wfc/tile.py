"""
Element table and adjacency rules for Wave Function Collapse.

The element table enumerates every (shape, rotation) pair plus one empty
entry. Its indices are the universe of the candidate-set bitsets. For
each entry and direction the tileset precomputes which entries may sit
next to it: two tiles fit when the connector flags on their shared edge
are equal (both open or both closed).

This is the core data that drives the constraint propagation.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable

from ...core.tiles import EMPTY, ROTATIONS, TileConfig, TileShape
from . import bitset


class TilesetCapacityError(ValueError):
    """The element table does not fit in a candidate-set bitset."""

    pass


def opposite(direction: int) -> int:
    """Index of the opposite direction."""
    return (direction + 3) % ROTATIONS


@dataclass(frozen=True)
class Tileset:
    """
    Immutable lookup tables shared by every generation run.

    Attributes:
        elements: Element table; index i is bit i of a candidate set
        empty_index: Index of the empty entry (always last)
        complete_set: Candidate set holding every index
        adjacency: adjacency[i][d] is the set of entries that may be the
                   neighbor of entry i in direction d
    """
    elements: tuple[TileConfig, ...]
    empty_index: int
    complete_set: int
    adjacency: tuple[tuple[int, ...], ...]

    def __len__(self) -> int:
        return len(self.elements)

    def allowed_neighbors(self, candidates: int, direction: int) -> int:
        """
        Union of the adjacency rows of every entry in `candidates`.

        This is what a cell that could still be any of `candidates`
        permits in its neighbor on side `direction`.
        """
        allowed = bitset.EMPTY_SET
        for index in bitset.iter_bits(candidates):
            allowed |= self.adjacency[index][direction]
        return allowed

    def index_of(self, tile: TileConfig) -> int:
        return self.elements.index(tile)


def build_element_table(shapes: Iterable[TileShape] = TileShape) -> tuple[TileConfig, ...]:
    """Every (shape, rotation) in declaration and ascending rotation order, then empty."""
    elements = [
        TileConfig(shape=shape, rotation=rotation)
        for shape in shapes
        for rotation in range(ROTATIONS)
    ]
    elements.append(EMPTY)
    return tuple(elements)


def build_adjacency(elements: tuple[TileConfig, ...]) -> tuple[tuple[int, ...], ...]:
    """
    Compatibility bitsets for every entry and direction.

    k is in adjacency[i][d] iff entry i's flag on side d equals entry k's
    flag on the opposite side, which makes the table symmetric.
    """
    endings = [element.endings() for element in elements]
    adjacency = []
    for own in endings:
        rows = []
        for direction in range(ROTATIONS):
            row = bitset.EMPTY_SET
            for k, other in enumerate(endings):
                if own[direction] == other[opposite(direction)]:
                    row |= bitset.singleton(k)
            rows.append(row)
        adjacency.append(tuple(rows))
    return tuple(adjacency)


def create_tileset(shapes: Iterable[TileShape] = TileShape) -> Tileset:
    """
    Build the element table and adjacency table.

    Raises:
        TilesetCapacityError: If the table has more entries than a
                              candidate set can hold
    """
    elements = build_element_table(shapes)
    if len(elements) > bitset.CAPACITY:
        raise TilesetCapacityError(
            f"Element table has {len(elements)} entries, "
            f"candidate sets hold at most {bitset.CAPACITY}"
        )

    return Tileset(
        elements=elements,
        empty_index=elements.index(EMPTY),
        complete_set=bitset.full(len(elements)),
        adjacency=build_adjacency(elements),
    )


@lru_cache(maxsize=1)
def default_tileset() -> Tileset:
    """The tileset for all shapes, built once per process."""
    return create_tileset()
