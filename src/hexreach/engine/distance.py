"""Movement distances on the map.

Breadth-first search from one hex, one layer per movement step, applying:
- neighbor providers (grid, custom links, wormholes, adjacency overrides)
- movement blockers (border anomalies, nebula / hazard exit, void)
- hyperlane routing (free travel along hyperlane networks)
- gravity rift flooding (free travel through rift clusters)

Starting on a rift shortens every distance by one (minimum 1), and every
hex at the movement limit may still move one hex further.

Usage::

    distances = calculate_distances_from(graph, "301", max_distance=3)
    # {"301": 0, "201": 1, ...}; unreachable hexes are absent
"""

from __future__ import annotations

import logging
from typing import Optional

from hexreach.engine.blockers import MovementBlockerRegistry
from hexreach.engine.hyperlanes import symmetrize_all
from hexreach.engine.neighbors import NeighborProviderRegistry
from hexreach.engine.rift_flood import flood_rift_cluster
from hexreach.engine.search import BfsState, SearchContext
from hexreach.models.hex_graph import HexGraph
from hexreach.models.options import DistanceOptions
from hexreach.util.constants import DEFAULT_MAX_DISTANCE

log = logging.getLogger(__name__)


# ===================================================================
# Layer steps
# ===================================================================


def expand_frontier(search: SearchContext, state: BfsState, dist: int) -> None:
    """Step every hex of ``state.frontier`` to its neighbors at ``dist``.

    Rift hexes are not reached here; they are collected in
    ``state.rift_seeds`` for ``flood_rift_cluster``.
    """
    use_rift = search.options.use_rift
    for label in state.frontier:
        current = search.graph.get(label)
        if current is None:
            continue

        for neighbor in search.neighbors_of(label, current):
            if neighbor.label in state.visited:
                continue
            if search.is_blocked(label, current, neighbor):
                continue

            target = neighbor.hex
            if use_rift and target.is_rift and search.is_passable(target):
                state.defer_rift(neighbor.label)
            elif search.is_passable(target) or (current.is_rift and target.is_rift):
                state.reach(neighbor.label, dist)
            else:
                for dest_label, dest in search.hyperlane_landings(neighbor):
                    if dest_label in state.visited:
                        continue
                    if use_rift and dest.is_rift:
                        state.defer_rift(dest_label)
                    else:
                        state.reach(dest_label, dist)


def extend_one_step(search: SearchContext, state: BfsState, limit: int) -> None:
    """Let every hex at ``limit`` reach its unvisited neighbors at ``limit``."""
    edge = [label for label, d in state.visited.items() if d == limit]
    for label in edge:
        current = search.graph.get(label)
        if current is None:
            continue
        for neighbor in search.neighbors_of(label, current):
            if neighbor.label in state.visited:
                continue
            if search.is_blocked(label, current, neighbor):
                continue
            if search.is_passable(neighbor.hex):
                state.visited[neighbor.label] = limit


def shift_rift_start(visited: dict[str, int]) -> dict[str, int]:
    """Distances for a search that started on a rift: one less, minimum 1."""
    return {label: 0 if d == 0 else max(1, d - 1) for label, d in visited.items()}


# ===================================================================
# Engine
# ===================================================================


class DistanceEngine:
    """Distance search with injectable neighbor providers and blockers.

    Args:
        neighbors: Neighbor providers; defaults to the built-in four.
        blockers: Movement blockers; defaults to the built-in four.
        strict: Raise ``MalformedHexError`` on malformed hex data instead
            of logging and skipping it.
    """

    def __init__(
        self,
        neighbors: Optional[NeighborProviderRegistry] = None,
        blockers: Optional[MovementBlockerRegistry] = None,
        strict: bool = False,
    ) -> None:
        self.neighbors = neighbors or NeighborProviderRegistry.default()
        self.blockers = blockers or MovementBlockerRegistry.default()
        self.strict = strict

    def calculate(
        self,
        graph: HexGraph,
        source_label: str,
        max_distance: int = DEFAULT_MAX_DISTANCE,
        options: Optional[DistanceOptions] = None,
    ) -> dict[str, int]:
        """Movement distance from ``source_label`` to every reachable hex.

        Args:
            graph: The map.  Hyperlane matrices are symmetrized in place.
            source_label: Hex to measure from.
            max_distance: Movement limit; values <= 0 give the source only.
            options: Active movement rules (all on by default).

        Returns:
            Fresh dict of label -> distance.  Unreachable hexes are absent;
            an unknown source gives an empty dict.
        """
        options = options or DistanceOptions()
        source = graph.get(source_label)
        if source is None:
            log.warning("Distance search from unknown hex %r", source_label)
            return {}

        graph.refresh()
        graph.check(strict=self.strict)
        symmetrize_all(graph)

        if max_distance <= 0:
            return {source_label: 0}

        rift_start = options.use_rift and source.is_rift
        limit = max_distance + 1 if rift_start else max_distance

        search = SearchContext(
            graph=graph,
            source_label=source_label,
            options=options,
            neighbors=self.neighbors,
            blockers=self.blockers,
        )
        state = BfsState.start(source_label)

        for dist in range(1, limit + 1):
            expand_frontier(search, state, dist)
            for seed in state.rift_seeds:
                flood_rift_cluster(search, state, seed, dist)
            state.advance()

        extend_one_step(search, state, limit)

        result = shift_rift_start(state.visited) if rift_start else dict(state.visited)
        log.debug(
            "Distances from %s (limit %d%s): %d hexes reached",
            source_label, max_distance, ", rift start" if rift_start else "", len(result),
        )
        return result


def calculate_distances_from(
    graph: HexGraph,
    source_label: str,
    max_distance: int = DEFAULT_MAX_DISTANCE,
    options: Optional[DistanceOptions] = None,
    engine: Optional[DistanceEngine] = None,
) -> dict[str, int]:
    """Convenience wrapper around ``DistanceEngine.calculate``."""
    engine = engine or DistanceEngine()
    return engine.calculate(graph, source_label, max_distance, options)
