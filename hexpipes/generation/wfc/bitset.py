"""
Candidate sets as small fixed-width bitsets.

A candidate set is a plain int where bit i means "element table entry i
is still possible". Union is |, intersection is &. The width is capped
at CAPACITY bits; the tileset checks this when it is built.
"""

from typing import Iterator

CAPACITY = 64

EMPTY_SET = 0


def singleton(index: int) -> int:
    """A set holding only `index`."""
    return 1 << index


def full(size: int) -> int:
    """A set holding every index in 0..size."""
    return (1 << size) - 1


def size(bits: int) -> int:
    """Number of indices in the set (the cell's entropy)."""
    return bits.bit_count()


def is_singleton(bits: int) -> bool:
    return bits != 0 and bits & (bits - 1) == 0


def first(bits: int) -> int:
    """Lowest index in a non-empty set."""
    return (bits & -bits).bit_length() - 1


def iter_bits(bits: int) -> Iterator[int]:
    """Yield set indices in ascending order."""
    while bits:
        low = bits & -bits
        yield low.bit_length() - 1
        bits ^= low


def nth(bits: int, n: int) -> int:
    """The n-th lowest index in the set (0-based)."""
    for i, index in enumerate(iter_bits(bits)):
        if i == n:
            return index
    raise IndexError(f"Set has only {size(bits)} elements, wanted element {n}")
