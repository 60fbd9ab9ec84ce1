"""Tile shapes and tile configurations for hexpipes.

A tile shape is a pipe piece with a fixed set of open connectors
("endings"), one flag per Direction. A tile configuration places a
shape on a cell at one of six rotations, or leaves the cell empty.
"""

from __future__ import annotations

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

ROTATIONS = 6

Endings = tuple[bool, bool, bool, bool, bool, bool]


class TileShape(Enum):
    """Pipe pieces, in declaration order.

    Values are (render model number, canonical endings). The endings are
    given for rotation 0 and indexed by Direction.
    """

    TILE_0 = (1, (False, False, False, False, False, True))
    TILE_01 = (2, (True, False, False, False, False, True))
    TILE_02 = (3, (False, True, False, False, False, True))
    TILE_03 = (4, (False, False, True, False, False, True))
    TILE_012 = (5, (True, True, False, False, False, True))
    TILE_024 = (6, (False, True, False, True, False, True))
    TILE_0134 = (7, (True, False, True, True, False, True))

    @property
    def model(self) -> int:
        """Render model number for presentation layers."""
        return self.value[0]

    @property
    def endings(self) -> Endings:
        """Open connectors at rotation 0."""
        return self.value[1]


CLOSED: Endings = (False,) * ROTATIONS


class TileConfig(BaseModel):
    """The content of one cell: a shape at a rotation, or nothing.

    Empty configurations have no shape, all edges closed and rotation 0.
    """

    model_config = ConfigDict(frozen=True)

    shape: TileShape | None = None
    rotation: int = Field(default=0, ge=0, lt=ROTATIONS)

    @model_validator(mode="after")
    def check_empty_has_no_rotation(self) -> TileConfig:
        if self.shape is None and self.rotation != 0:
            raise ValueError("An empty tile cannot be rotated")
        return self

    @classmethod
    def empty(cls) -> TileConfig:
        return EMPTY

    @property
    def is_empty(self) -> bool:
        return self.shape is None

    @property
    def angle(self) -> float:
        """Rotation in radians (clockwise rotations are negative)."""
        return -math.pi / 3.0 * self.rotation

    def endings(self) -> Endings:
        """Open connectors after rotation, indexed by Direction.

        Rotating by one step moves the connector at direction i to i + 1.
        """
        if self.shape is None:
            return CLOSED
        base = self.shape.endings
        return tuple(base[(i - self.rotation) % ROTATIONS] for i in range(ROTATIONS))

    def rotate_by(self, steps: int) -> TileConfig:
        """Return this tile rotated by `steps` (mod 6). Empty stays empty."""
        if self.shape is None:
            return self
        return TileConfig(shape=self.shape, rotation=(self.rotation + steps) % ROTATIONS)

    def with_rotation(self, rotation: int) -> TileConfig:
        """Return this tile at an absolute rotation. Empty stays empty."""
        if self.shape is None:
            return self
        return TileConfig(shape=self.shape, rotation=rotation % ROTATIONS)

    def __repr__(self) -> str:
        if self.shape is None:
            return "TileConfig(EMPTY)"
        return f"TileConfig({self.shape.name}, {self.rotation})"


EMPTY = TileConfig()
