"""Foundational types for hexpipes.

This module defines the coordinate system used throughout the system:
- HexPos: Axial hex coordinates (q, r) with derived s = -q - r
- Direction: The six neighbor directions, in a fixed cyclic order
- ring / spiral: Enumeration of positions around a center

The direction order is load-bearing. Tile endings, rotation and the
adjacency table all index by Direction value, so they must agree.
"""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Iterator, NamedTuple


class Direction(IntEnum):
    """The six hex neighbor directions (pointy-top axial layout)."""

    EAST = 0
    NORTH_EAST = 1
    NORTH_WEST = 2
    WEST = 3
    SOUTH_WEST = 4
    SOUTH_EAST = 5

    @property
    def offset(self) -> HexPos:
        """Get the (dq, dr) offset for this direction."""
        return NEIGHBOR_OFFSETS[self]

    @property
    def opposite(self) -> Direction:
        """Get the opposite direction."""
        return Direction((self + 3) % 6)


class HexPos(NamedTuple):
    """A position on the hex grid in axial coordinates.

    The third cube coordinate s is derived so that q + r + s == 0.
    (0, 0) is the center of every map.
    """

    q: int
    r: int

    @property
    def s(self) -> int:
        return -self.q - self.r

    def __add__(self, other: object) -> HexPos:
        """Add another position, offset tuple or direction."""
        if isinstance(other, Direction):
            other = other.offset
        if isinstance(other, tuple) and len(other) == 2:
            return HexPos(self.q + other[0], self.r + other[1])
        return NotImplemented

    def __sub__(self, other: object) -> HexPos:
        """Subtract another position, offset tuple or direction."""
        if isinstance(other, Direction):
            other = other.offset
        if isinstance(other, tuple) and len(other) == 2:
            return HexPos(self.q - other[0], self.r - other[1])
        return NotImplemented

    def __mul__(self, factor: object) -> HexPos:
        """Scale both coordinates by an integer."""
        if isinstance(factor, int):
            return HexPos(self.q * factor, self.r * factor)
        return NotImplemented

    __rmul__ = __mul__

    def neighbor(self, direction: Direction) -> HexPos:
        """Get the adjacent position in the given direction."""
        return self + direction

    def neighbors(self) -> list[HexPos]:
        """Get all 6 adjacent positions in Direction order.

        No bounds filtering is done here; callers check map membership.
        """
        return [HexPos(self.q + dq, self.r + dr) for dq, dr in NEIGHBOR_OFFSETS]

    def distance_to(self, other: HexPos) -> int:
        """Hex distance (number of steps) to another position."""
        dq = self.q - other.q
        dr = self.r - other.r
        return max(abs(dq), abs(dr), abs(dq + dr))

    def to_point(self, size: float = 1.0) -> tuple[float, float]:
        """Center of this hex in pixel space for pointy-top hexes of the given size."""
        x = size * (math.sqrt(3.0) * self.q + math.sqrt(3.0) / 2.0 * self.r)
        y = size * (1.5 * self.r)
        return x, y

    @classmethod
    def from_point(cls, x: float, y: float, size: float = 1.0) -> HexPos:
        """Find the hex containing a pixel-space point.

        Inverse of to_point, followed by cube rounding so the result
        always satisfies q + r + s == 0.
        """
        q = (math.sqrt(3.0) / 3.0 * x - 1.0 / 3.0 * y) / size
        r = (2.0 / 3.0 * y) / size
        return _cube_round(q, r, -q - r)


CENTER = HexPos(0, 0)

# Indexed by Direction value
NEIGHBOR_OFFSETS: tuple[HexPos, ...] = (
    HexPos(1, 0),
    HexPos(1, -1),
    HexPos(0, -1),
    HexPos(-1, 0),
    HexPos(-1, 1),
    HexPos(0, 1),
)


def _cube_round(q: float, r: float, s: float) -> HexPos:
    rq, rr, rs = round(q), round(r), round(s)
    dq, dr, ds = abs(rq - q), abs(rr - r), abs(rs - s)

    # Reset the component with the largest rounding error
    if dq > dr and dq > ds:
        rq = -rr - rs
    elif dr > ds:
        rr = -rq - rs
    return HexPos(int(rq), int(rr))


def ring(center: HexPos, radius: int) -> Iterator[HexPos]:
    """Yield every position at exactly `radius` steps from center.

    The walk starts at center + SOUTH_WEST * radius and follows each
    direction in order for `radius` steps, so consecutive positions
    are always adjacent. A radius of 0 yields only the center.
    """
    if radius < 0:
        raise ValueError(f"Ring radius must be non-negative, got {radius}")
    if radius == 0:
        yield center
        return

    pos = center + Direction.SOUTH_WEST.offset * radius
    for offset in NEIGHBOR_OFFSETS:
        for _ in range(radius):
            yield pos
            pos = pos + offset


def spiral(center: HexPos, radius: int) -> Iterator[HexPos]:
    """Yield the center followed by rings 1..radius."""
    if radius < 0:
        raise ValueError(f"Spiral radius must be non-negative, got {radius}")
    yield center
    for i in range(1, radius + 1):
        yield from ring(center, i)
