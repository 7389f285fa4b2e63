"""Hexagonal coordinate system using axial coordinates (q, r).

Axial coordinates define position on a hex grid where:
- q axis runs roughly east
- r axis runs roughly south
- s = -q - r is the implicit third cube coordinate

Hex edges are addressed by a side index 0..5 in the order the map
editor uses (see ``EDGE_DIRECTIONS``).  Side ``d`` of one hex touches
side ``opposite(d)`` of its neighbor.

Reference: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations

from dataclasses import dataclass

SIDES = 6


@dataclass(frozen=True)
class HexCoord:
    """Immutable axial hex coordinate.

    Attributes:
        q: Column coordinate.
        r: Row coordinate.
    """

    q: int
    r: int

    # -- Cube coordinate -------------------------------------------------

    @property
    def s(self) -> int:
        """Implicit cube coordinate: s = -q - r."""
        return -self.q - self.r

    # -- Arithmetic ------------------------------------------------------

    def __add__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q + other.q, self.r + other.r)

    # -- Geometry --------------------------------------------------------

    def distance_to(self, other: HexCoord) -> int:
        """Hex grid distance (number of steps along hex edges)."""
        dq = abs(self.q - other.q)
        dr = abs(self.r - other.r)
        ds = abs(self.s - other.s)
        return max(dq, dr, ds)

    def neighbor(self, side: int) -> HexCoord:
        """Return the hex across edge ``side``."""
        return self + EDGE_DIRECTIONS[side]

    def neighbors(self) -> list[HexCoord]:
        """Return the 6 adjacent hex coordinates, indexed by side."""
        return [self + d for d in EDGE_DIRECTIONS]

    def disk(self, radius: int) -> set[HexCoord]:
        """Return all hexes within `radius` steps (inclusive)."""
        results: set[HexCoord] = set()
        for dq in range(-radius, radius + 1):
            for dr in range(max(-radius, -dq - radius), min(radius, -dq + radius) + 1):
                results.add(HexCoord(self.q + dq, self.r + dr))
        return results

    # -- Serialization ---------------------------------------------------

    def __repr__(self) -> str:
        return f"Hex({self.q},{self.r})"


# The 6 axial edge vectors, indexed by side (editor order)
EDGE_DIRECTIONS: list[HexCoord] = [
    HexCoord(0, -1),   # 0
    HexCoord(1, -1),   # 1
    HexCoord(1, 0),    # 2
    HexCoord(0, 1),    # 3
    HexCoord(-1, 1),   # 4
    HexCoord(-1, 0),   # 5
]


def opposite(side: int) -> int:
    """Side index on the neighboring hex that shares edge ``side``."""
    return (side + 3) % SIDES


def is_valid_side(side: object) -> bool:
    """True if ``side`` is an integer side index in [0, 6)."""
    return isinstance(side, int) and not isinstance(side, bool) and 0 <= side < SIDES
