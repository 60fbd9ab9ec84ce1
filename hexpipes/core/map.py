"""Packed storage for values on a hexagon-shaped map.

A HexMap of radius R holds one value for every position with
|q|, |r|, |s| <= R, in a flat list of 3R^2 + 3R + 1 slots. The linear
index walks columns of constant q outward from the center column, with
negative-q columns mirrored through the center so the layout is
symmetric and has no gaps.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterator, TypeVar

from .types import CENTER, HexPos, spiral

T = TypeVar("T")
U = TypeVar("U")


def map_size(radius: int) -> int:
    """Number of cells in a hexagon of the given radius."""
    return 3 * radius * radius + 3 * radius + 1


def linearize(pos: HexPos, radius: int) -> int:
    """Linear index of an in-range position. Undefined for positions out of range."""
    diameter = 2 * radius + 1
    sign = -1 if pos.q < 0 else 1
    q = sign * pos.q
    r = sign * pos.r
    return map_size(radius) // 2 + sign * (r + q * diameter - ((q - 1) * q) // 2)


class HexMap(Generic[T]):
    """One value per position of a hexagon-shaped map centered on (0, 0).

    Iteration order for keys/values/items is spiral order from the
    center, which is stable for a given radius.
    """

    def __init__(self, radius: int, default: T | Callable[[], T] | None = None):
        """
        Create a map with every slot set to `default`.

        Args:
            radius: Map radius (0 = a single cell)
            default: Initial value, or a zero-argument factory called per slot
        """
        if radius < 0:
            raise ValueError(f"HexMap radius must be non-negative, got {radius}")
        self._radius = radius
        self._positions: tuple[HexPos, ...] = tuple(spiral(CENTER, radius))
        if callable(default):
            self._values: list[T] = [default() for _ in range(map_size(radius))]
        else:
            self._values = [default] * map_size(radius)

    @classmethod
    def from_map(cls, other: HexMap[U], func: Callable[[U], T]) -> HexMap[T]:
        """Build a map of the same radius by applying func to every value."""
        result: HexMap[T] = cls(other.radius)
        result._values = [func(v) for v in other._values]
        return result

    @property
    def radius(self) -> int:
        return self._radius

    @property
    def center(self) -> HexPos:
        return CENTER

    def contains(self, pos: HexPos) -> bool:
        """Check if a position is within the map radius."""
        q, r = pos
        return abs(q) <= self._radius and abs(r) <= self._radius and abs(q + r) <= self._radius

    def index(self, pos: HexPos) -> int | None:
        """Linear slot index for a position, or None if it is out of range."""
        if not self.contains(pos):
            return None
        return linearize(pos, self._radius)

    def get(self, pos: HexPos, default: T | None = None) -> T | None:
        """Get the value at a position, or `default` if out of range."""
        i = self.index(pos)
        if i is None:
            return default
        return self._values[i]

    def set(self, pos: HexPos, value: T) -> bool:
        """Set the value at a position. Returns False if it is out of range."""
        i = self.index(pos)
        if i is None:
            return False
        self._values[i] = value
        return True

    def fill(self, value: T) -> None:
        """Set every slot to the same value."""
        self._values = [value] * len(self._values)

    def keys(self) -> Iterator[HexPos]:
        return iter(self._positions)

    def values(self) -> Iterator[T]:
        for pos in self._positions:
            yield self._values[linearize(pos, self._radius)]

    def items(self) -> Iterator[tuple[HexPos, T]]:
        for pos in self._positions:
            yield pos, self._values[linearize(pos, self._radius)]

    def copy(self) -> HexMap[T]:
        result: HexMap[T] = HexMap(self._radius)
        result._values = list(self._values)
        return result

    def __getitem__(self, pos: HexPos) -> T:
        i = self.index(pos)
        if i is None:
            raise KeyError(pos)
        return self._values[i]

    def __setitem__(self, pos: HexPos, value: T) -> None:
        if not self.set(pos, value):
            raise KeyError(pos)

    def __contains__(self, pos: object) -> bool:
        return isinstance(pos, tuple) and len(pos) == 2 and self.contains(HexPos(*pos))

    def __iter__(self) -> Iterator[HexPos]:
        return self.keys()

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HexMap):
            return NotImplemented
        return self._radius == other._radius and self._values == other._values

    def __repr__(self) -> str:
        entries = ", ".join(f"{pos}: {value!r}" for pos, value in self.items())
        return f"HexMap(radius={self._radius}, {{{entries}}})"
