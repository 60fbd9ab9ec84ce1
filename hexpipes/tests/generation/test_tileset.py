"""Tests for the element table and adjacency rules."""

import pytest

from hexpipes.core import EMPTY, TileConfig, TileShape
from hexpipes.generation.wfc import (
    TilesetCapacityError,
    bitset,
    create_tileset,
    default_tileset,
    opposite,
)


class TestElementTable:
    """Tests for element table ordering."""

    def test_table_size(self):
        """Seven shapes times six rotations plus empty."""
        tileset = create_tileset()
        assert len(tileset) == 43
        assert bitset.size(tileset.complete_set) == 43

    def test_empty_is_last(self):
        """The empty entry follows every shape."""
        tileset = create_tileset()
        assert tileset.empty_index == 42
        assert tileset.elements[-1] == EMPTY

    def test_shape_then_rotation_order(self):
        """Shapes in declaration order, rotations ascending within each."""
        tileset = create_tileset()
        assert tileset.elements[0] == TileConfig(shape=TileShape.TILE_0, rotation=0)
        assert tileset.elements[5] == TileConfig(shape=TileShape.TILE_0, rotation=5)
        assert tileset.elements[6] == TileConfig(shape=TileShape.TILE_01, rotation=0)
        assert tileset.elements[41] == TileConfig(shape=TileShape.TILE_0134, rotation=5)
        assert tileset.index_of(TileConfig(shape=TileShape.TILE_02, rotation=3)) == 15

    def test_capacity_checked_at_construction(self):
        """Tables wider than a candidate set are rejected up front."""
        with pytest.raises(TilesetCapacityError):
            create_tileset(list(TileShape) * 2)

    def test_default_tileset_is_shared(self):
        """The default tileset is built once."""
        assert default_tileset() is default_tileset()


class TestAdjacency:
    """Tests for adjacency bitsets."""

    def test_adjacency_is_symmetric(self):
        """k fits entry i on side d iff i fits entry k on the opposite side."""
        tileset = create_tileset()
        n = len(tileset)
        for i in range(n):
            for d in range(6):
                for k in range(n):
                    forward = bool(tileset.adjacency[i][d] & bitset.singleton(k))
                    backward = bool(tileset.adjacency[k][opposite(d)] & bitset.singleton(i))
                    assert forward == backward, f"asymmetric: {i} -> {k} on side {d}"

    def test_adjacency_matches_endings(self):
        """Entries fit when the shared edge flags are equal."""
        tileset = create_tileset()
        for i, a in enumerate(tileset.elements):
            for d in range(6):
                for k in bitset.iter_bits(tileset.adjacency[i][d]):
                    b = tileset.elements[k]
                    assert a.endings()[d] == b.endings()[opposite(d)]

    def test_empty_fits_empty(self):
        """Empty cells can sit next to each other on every side."""
        tileset = create_tileset()
        empty = tileset.empty_index
        for d in range(6):
            assert tileset.adjacency[empty][d] & bitset.singleton(empty)

    def test_empty_row_excludes_facing_connectors(self):
        """Next to empty, only one of the six dead-end rotations faces it."""
        tileset = create_tileset()
        row = tileset.adjacency[tileset.empty_index][0]
        dead_ends = [k for k in bitset.iter_bits(row) if tileset.elements[k].shape == TileShape.TILE_0]
        assert len(dead_ends) == 5

    def test_allowed_neighbors_is_union(self):
        """allowed_neighbors unions the rows of every candidate."""
        tileset = create_tileset()
        candidates = bitset.singleton(0) | bitset.singleton(7)
        expected = tileset.adjacency[0][2] | tileset.adjacency[7][2]
        assert tileset.allowed_neighbors(candidates, 2) == expected
        assert tileset.allowed_neighbors(bitset.EMPTY_SET, 2) == bitset.EMPTY_SET
