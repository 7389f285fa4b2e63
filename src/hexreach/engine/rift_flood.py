"""Gravity rift flooding.

Reaching one hex of a gravity rift cluster reaches the whole cluster at
the same distance, plus every passable hex bordering it.  Moving through
a rift field therefore costs nothing beyond the step that entered it.
"""

from __future__ import annotations

import logging

from hexreach.engine.search import BfsState, SearchContext

log = logging.getLogger(__name__)


def flood_rift_cluster(search: SearchContext, state: BfsState, seed: str, dist: int) -> int:
    """Flood the rift cluster containing ``seed`` into the layer at ``dist``.

    Cluster members are followed through provider edges that no blocker
    vetoes.  Non-rift hexes bordering the cluster (directly, or at the
    far end of a hyperlane route) are reached at ``dist`` as well; a
    hyperlane route ending on another rift carries the flood on.

    Returns:
        Number of hexes newly reached.
    """
    reached = 0
    stack = [seed]
    while stack:
        label = stack.pop()
        if not state.reach(label, dist):
            continue
        reached += 1
        rift = search.graph.get(label)
        if rift is None:
            continue

        for neighbor in search.neighbors_of(label, rift):
            if neighbor.label in state.visited:
                continue
            if search.is_blocked(label, rift, neighbor):
                continue
            if neighbor.hex.is_rift:
                stack.append(neighbor.label)
            elif search.is_passable(neighbor.hex):
                reached += state.reach(neighbor.label, dist)
            else:
                for dest_label, dest in search.hyperlane_landings(neighbor):
                    if dest_label in state.visited:
                        continue
                    if dest.is_rift:
                        stack.append(dest_label)
                    else:
                        reached += state.reach(dest_label, dist)

    log.debug("Rift flood from %s reached %d hexes at distance %d", seed, reached, dist)
    return reached
