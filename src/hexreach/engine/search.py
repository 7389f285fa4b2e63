"""Shared state for one distance search.

``SearchContext`` bundles the read-only inputs of a search (map, source,
rules, registries).  ``BfsState`` is the mutable part: the visited map,
the layer being expanded and the layer being built.  Both are passed
explicitly to the step functions in ``distance`` and ``rift_flood``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from hexreach.engine import hyperlanes
from hexreach.engine.blockers import (
    EdgeContext,
    MovementBlockerRegistry,
    crosses_border_anomaly,
    is_passable,
    void_blocker,
)
from hexreach.engine.neighbors import Neighbor, NeighborProviderRegistry
from hexreach.models.hex import opposite
from hexreach.models.hex_graph import HexGraph
from hexreach.models.hex_record import HexRecord
from hexreach.models.options import DistanceOptions


@dataclass(frozen=True)
class SearchContext:
    """Read-only inputs of one search."""

    graph: HexGraph
    source_label: str
    options: DistanceOptions
    neighbors: NeighborProviderRegistry
    blockers: MovementBlockerRegistry

    def neighbors_of(self, label: str, hex: HexRecord) -> list[Neighbor]:
        return self.neighbors.provide(self.graph, hex, label, self.options)

    def is_blocked(self, from_label: str, from_hex: HexRecord, neighbor: Neighbor) -> bool:
        """Apply the blocker registry to one edge.

        A void hex at either end blocks every edge, overrides included.
        Overrides are exempt from the registry otherwise.
        """
        ctx = EdgeContext(
            dir_idx=neighbor.dir_idx,
            is_source=from_label == self.source_label,
            from_label=from_label,
            to_label=neighbor.label,
        )
        if void_blocker(self.graph, from_hex, neighbor.hex, ctx, self.options):
            return True
        if neighbor.exempt_from_blockers:
            return False
        return self.blockers.is_blocked(self.graph, from_hex, neighbor.hex, ctx, self.options)

    def is_passable(self, hex: HexRecord) -> bool:
        return is_passable(hex, self.options)

    def hyperlane_landings(self, neighbor: Neighbor) -> list[tuple[str, HexRecord]]:
        """Hexes a move can end on after entering hyperlane tile ``neighbor``.

        Needs the side the move crossed; edges without one cannot enter
        a hyperlane network.
        """
        if neighbor.dir_idx is None or not neighbor.hex.is_hyperlane:
            return []
        landings: list[tuple[str, HexRecord]] = []
        endpoints = hyperlanes.resolve(
            self.graph, neighbor.label, opposite(neighbor.dir_idx), self.options,
        )
        for endpoint in endpoints:
            dest = self.graph.get(endpoint.label)
            tile = self.graph.get(endpoint.from_label)
            if dest is None or tile is None or not self.is_passable(dest):
                continue
            if crosses_border_anomaly(tile, dest, endpoint.exit_side, self.options):
                continue
            landings.append((endpoint.label, dest))
        return landings


@dataclass
class BfsState:
    """Mutable search state.

    Attributes:
        visited: label -> distance at which the hex was first reached.
        frontier: Labels reached in the previous layer, being expanded.
        next_frontier: Labels reached in the current layer.
        rift_seeds: Rift hexes reached in the current layer, flooded once
            the frontier has been expanded.
    """

    visited: dict[str, int] = field(default_factory=dict)
    frontier: list[str] = field(default_factory=list)
    next_frontier: list[str] = field(default_factory=list)
    rift_seeds: list[str] = field(default_factory=list)

    @classmethod
    def start(cls, source_label: str) -> BfsState:
        return cls(visited={source_label: 0}, frontier=[source_label])

    def reach(self, label: str, dist: int) -> bool:
        """Mark ``label`` at ``dist`` and queue it; False if already visited."""
        if label in self.visited:
            return False
        self.visited[label] = dist
        self.next_frontier.append(label)
        return True

    def defer_rift(self, label: str) -> None:
        if label not in self.rift_seeds:
            self.rift_seeds.append(label)

    def advance(self) -> None:
        """Make the layer just built the one to expand next."""
        self.frontier = self.next_frontier
        self.next_frontier = []
        self.rift_seeds = []
