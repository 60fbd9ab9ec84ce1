"""
Wave Function Collapse solver on a hexagon-shaped map.

The PossibilityMap holds one candidate set per cell. The algorithm:
1. Clear: every cell may be anything, except that no connector may
   point off the edge of the map
2. Find the undecided cell with lowest entropy (fewest candidates)
3. Collapse it to one candidate, chosen uniformly at random
4. Propagate: narrow neighbors until nothing changes
5. Repeat until every cell is decided or a cell runs out of candidates

A contradiction (empty candidate set) is reported as a False return,
the caller discards the attempt and clears again.
"""

from __future__ import annotations

import heapq
import logging
import random
from collections import deque
from enum import Enum, auto

from ...core.map import HexMap
from ...core.tiles import TileConfig
from ...core.types import HexPos
from . import bitset
from .tile import Tileset, opposite

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------


class InvariantError(RuntimeError):
    """The solver was used in a way that breaks its preconditions.

    This indicates a bug in the caller, not a recoverable condition.
    """

    pass


# -----------------------------------------------------------------------------
# PossibilityMap
# -----------------------------------------------------------------------------


class SolverState(Enum):
    """Where the current generation attempt stands."""
    UNINITIALIZED = auto()  # clear() has not run yet
    CLEARED = auto()        # Domains reset, boundary not yet propagated
    PROPAGATING = auto()    # Narrowing domains after a change
    CONVERGED = auto()      # Propagation reached a fixed point
    COMPLETE = auto()       # Converged and every cell is decided
    CONTRADICTION = auto()  # Some cell has no candidates left


class PossibilityMap:
    """
    Candidate sets for every cell of a hex map, plus the queues that drive
    entropy selection and propagation.

    Usage:
        wfc = PossibilityMap(radius, tileset, random.Random(seed))
        ok = wfc.clear()
        while ok and (pos := wfc.lowest_entropy()) is not None:
            ok = wfc.collapse(pos)
        tiles = wfc.to_tiles()
    """

    def __init__(self, radius: int, tileset: Tileset, rng: random.Random):
        """
        Initialize the map.

        Args:
            radius: Map radius
            tileset: Element and adjacency tables
            rng: Random source; kept across attempts so restarts explore
                 new assignments
        """
        self.tileset = tileset
        self.rng = rng
        self.state = SolverState.UNINITIALIZED

        self._domains: HexMap[int] = HexMap(radius, bitset.EMPTY_SET)

        # Min-heap of (entropy, tiebreak, pos); stale entries are skipped lazily
        self._entropy_heap: list[tuple[int, float, HexPos]] = []
        self._entropy: dict[HexPos, int] = {}

        self._queue: deque[HexPos] = deque()
        self._in_queue: set[HexPos] = set()

    @property
    def radius(self) -> int:
        return self._domains.radius

    def domain(self, pos: HexPos) -> int:
        """Candidate set of a cell (0 for positions outside the map)."""
        return self._domains.get(pos, bitset.EMPTY_SET)

    def is_decided(self, pos: HexPos) -> bool:
        return bitset.is_singleton(self.domain(pos))

    @property
    def undecided_count(self) -> int:
        return len(self._entropy)

    def clear(self) -> bool:
        """
        Start a new attempt.

        Resets every cell to the complete set, then forbids open
        connectors across the map boundary by treating off-map neighbors
        as the empty tile. Returns False on contradiction.
        """
        complete = self.tileset.complete_set
        self._domains.fill(complete)
        self._entropy_heap.clear()
        self._entropy.clear()
        self._queue.clear()
        self._in_queue.clear()
        self.state = SolverState.CLEARED

        if not bitset.is_singleton(complete):
            for pos in self._domains.keys():
                self._push_entropy(pos, bitset.size(complete))

        empty_rows = self.tileset.adjacency[self.tileset.empty_index]
        for pos in self._domains.keys():
            for direction, neighbor in enumerate(pos.neighbors()):
                if self._domains.contains(neighbor):
                    continue
                if not self.intersect(pos, empty_rows[opposite(direction)]):
                    return False

        return self.propagate()

    def intersect(self, pos: HexPos, mask: int) -> bool:
        """
        Narrow a cell's candidates to those also in `mask`.

        Returns False if the cell has no candidates left (contradiction).
        A changed cell is queued for propagation.
        """
        current = self._domains[pos]
        narrowed = current & mask
        if narrowed == current:
            return True

        self._domains[pos] = narrowed

        if narrowed == bitset.EMPTY_SET:
            logger.debug(f"Contradiction at {pos}")
            self.state = SolverState.CONTRADICTION
            return False

        if bitset.is_singleton(narrowed):
            self._entropy.pop(pos, None)
        else:
            self._push_entropy(pos, bitset.size(narrowed))

        if pos not in self._in_queue:
            self._queue.append(pos)
            self._in_queue.add(pos)
        return True

    def lowest_entropy(self) -> HexPos | None:
        """
        Find an undecided cell with the fewest candidates.

        Returns None if every cell is decided. Ties are broken by a random
        key drawn when the cell's entry was pushed.
        """
        heap = self._entropy_heap
        while heap:
            entropy, _, pos = heap[0]
            if self._entropy.get(pos) == entropy:
                return pos
            heapq.heappop(heap)

        if self._entropy:
            raise InvariantError(
                f"{len(self._entropy)} undecided cells missing from the entropy queue"
            )
        return None

    def collapse(self, pos: HexPos) -> bool:
        """
        Commit a cell to one of its candidates, chosen uniformly, and propagate.

        Returns False on contradiction.

        Raises:
            InvariantError: If the cell is already decided or off the map
        """
        domain = self.domain(pos)
        if bitset.size(domain) < 2:
            raise InvariantError(f"Cannot collapse {pos}: it has {bitset.size(domain)} candidates")

        choice = bitset.nth(domain, self.rng.randrange(bitset.size(domain)))
        if not self.intersect(pos, bitset.singleton(choice)):
            return False
        return self.propagate()

    def propagate(self) -> bool:
        """
        Narrow neighbors of every queued cell until nothing changes.

        Returns True when a fixed point is reached, False on contradiction.
        """
        self.state = SolverState.PROPAGATING
        while self._queue:
            pos = self._queue.popleft()
            self._in_queue.discard(pos)
            candidates = self._domains[pos]

            for direction, neighbor in enumerate(pos.neighbors()):
                if not self._domains.contains(neighbor):
                    continue
                allowed = self.tileset.allowed_neighbors(candidates, direction)
                if not self.intersect(neighbor, allowed):
                    self._queue.clear()
                    self._in_queue.clear()
                    return False

        self.state = SolverState.COMPLETE if not self._entropy else SolverState.CONVERGED
        return True

    def to_tiles(self) -> HexMap[TileConfig]:
        """
        Finalize: map every decided cell to its tile configuration.

        Raises:
            InvariantError: If any cell is not decided
        """
        undecided = [pos for pos, bits in self._domains.items() if not bitset.is_singleton(bits)]
        if undecided:
            raise InvariantError(f"Cannot finalize with {len(undecided)} undecided cells, e.g. {undecided[0]}")

        elements = self.tileset.elements
        return HexMap.from_map(self._domains, lambda bits: elements[bitset.first(bits)])

    def _push_entropy(self, pos: HexPos, entropy: int) -> None:
        self._entropy[pos] = entropy
        heapq.heappush(self._entropy_heap, (entropy, self.rng.random(), pos))
