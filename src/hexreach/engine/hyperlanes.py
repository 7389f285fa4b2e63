"""Hyperlane routing.

A hyperlane tile has no terrain of its own; its 6x6 matrix connects its
edges internally.  Entering a tile through edge ``e`` leads out through
every edge ``x`` with ``matrix[e][x]`` set, and from there into the next
hex.  Adjacent hyperlane tiles chain, so one move across a hyperlane
network can end many hexes away at no extra distance.

Self-loops (``matrix[d][d]``) are portals: entering a looped edge also
leads out through every other looped edge of the same tile.  A looped
edge with no other connection bounces the move back out the way it came.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from hexreach.engine.blockers import crosses_border_anomaly, is_passable
from hexreach.models.hex import SIDES, opposite
from hexreach.models.hex_graph import HexGraph
from hexreach.models.hex_record import is_valid_matrix
from hexreach.models.options import DistanceOptions


@dataclass(frozen=True)
class HyperlaneEndpoint:
    """A hex a hyperlane route comes out on.

    Attributes:
        label: The endpoint hex.
        from_label: The hyperlane tile the route left through.
        entry_side: Side of the endpoint hex the route entered by.
    """
    label: str
    from_label: str
    entry_side: int

    @property
    def exit_side(self) -> int:
        """Side of ``from_label`` the route left through."""
        return opposite(self.entry_side)


def symmetrize_matrix(matrix: list[list[int]]) -> None:
    """Make the matrix undirected in place (``m[i][j]`` implies ``m[j][i]``).

    Idempotent.  Malformed matrices are left untouched.
    """
    if not is_valid_matrix(matrix):
        return
    for i in range(SIDES):
        for j in range(SIDES):
            if matrix[i][j]:
                matrix[j][i] = 1


def symmetrize_all(graph: HexGraph) -> None:
    for rec in graph.records():
        if rec.matrix is not None:
            symmetrize_matrix(rec.matrix)


def _exits(matrix: list[list[int]], entry: int, loops: list[int]) -> list[int]:
    exits = [x for x in range(SIDES) if x != entry and matrix[entry][x]]
    if not exits and matrix[entry][entry]:
        exits.append(entry)
    if entry in loops:
        exits.extend(d for d in loops if d != entry and d not in exits)
    return exits


def resolve(
    graph: HexGraph, start_label: str, start_entry_dir: int, options: DistanceOptions,
) -> list[HyperlaneEndpoint]:
    """Follow a hyperlane network from one entry edge to its endpoints.

    Args:
        graph: The map.
        start_label: The hyperlane tile being entered.
        start_entry_dir: Side of that tile the move enters through.
        options: Active movement rules.

    Returns:
        Passable non-hyperlane hexes the network leads to, one entry per
        label (first route found wins), excluding the start tile.
    """
    queue: deque[tuple[str, int]] = deque([(start_label, start_entry_dir)])
    seen: set[tuple[str, int]] = set()
    endpoints: dict[str, HyperlaneEndpoint] = {}

    while queue:
        label, entry = queue.popleft()
        if (label, entry) in seen:
            continue
        seen.add((label, entry))

        tile = graph.get(label)
        if tile is None or not tile.is_hyperlane or not 0 <= entry < SIDES:
            continue
        matrix = tile.matrix
        loops = [d for d in range(SIDES) if matrix[d][d]]

        if entry in loops:
            # Portal: the other looped edges become entries of this tile too
            queue.extend((label, d) for d in loops if d != entry)

        for exit_side in _exits(matrix, entry, loops):
            far_label = graph.neighbor_across(tile, exit_side)
            if far_label is None:
                continue
            far = graph.get(far_label)
            if crosses_border_anomaly(tile, far, exit_side, options):
                continue
            if far.is_hyperlane:
                queue.append((far_label, opposite(exit_side)))
            elif is_passable(far, options) and far_label not in endpoints:
                endpoints[far_label] = HyperlaneEndpoint(far_label, label, opposite(exit_side))

    endpoints.pop(start_label, None)
    return list(endpoints.values())
