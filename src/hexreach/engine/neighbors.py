"""Neighbor providers: every way one hex can be adjacent to another.

A provider is a plain function::

    provider(graph, hex, current_label, options) -> list[Neighbor]

``NeighborProviderRegistry`` runs its providers in registration order and
de-duplicates the combined result by target label (first occurrence
wins).  The default registry holds, in order: axial, custom-link,
wormhole, adjacency-override.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from hexreach.models.hex import SIDES, is_valid_side
from hexreach.models.hex_graph import HexGraph
from hexreach.models.hex_record import HexRecord
from hexreach.models.options import DistanceOptions

# Neighbor kinds
AXIAL = "axial"
CUSTOM_LINK = "custom_link"
WORMHOLE = "wormhole"
ADJACENCY_OVERRIDE = "adjacency_override"


@dataclass(frozen=True)
class Neighbor:
    """A directed edge from the current hex to ``label``.

    Attributes:
        label: Target hex label.
        hex: Target hex record.
        dir_idx: Side of the current hex the edge leaves through, or None
            for edges that do not cross a grid edge.
        kind: Which provider produced the edge.
    """
    label: str
    hex: HexRecord
    dir_idx: Optional[int]
    kind: str

    @property
    def exempt_from_blockers(self) -> bool:
        return self.kind == ADJACENCY_OVERRIDE


NeighborProvider = Callable[[HexGraph, HexRecord, str, DistanceOptions], list[Neighbor]]


# -- Built-in providers --------------------------------------------------

def axial_neighbors(
    graph: HexGraph, hex: HexRecord, current_label: str, options: DistanceOptions,
) -> list[Neighbor]:
    """The (up to) six grid neighbors, tagged with the side crossed."""
    results: list[Neighbor] = []
    for dir_idx in range(SIDES):
        label = graph.neighbor_across(hex, dir_idx)
        if label is None:
            continue
        results.append(Neighbor(label, graph.get(label), dir_idx, AXIAL))
    return results


def custom_link_neighbors(
    graph: HexGraph, hex: HexRecord, current_label: str, options: DistanceOptions,
) -> list[Neighbor]:
    """Authored links.

    A two-way link is always followed.  A one-way link is followed only
    when the target has not recorded its own link back to this hex.
    """
    if not options.use_custom_links:
        return []
    results: list[Neighbor] = []
    for target_label, link in hex.custom_adjacents.items():
        target = graph.get(target_label)
        if target is None:
            continue
        if link.two_way or current_label not in target.custom_adjacents:
            results.append(Neighbor(target_label, target, None, CUSTOM_LINK))
    return results


def wormhole_neighbors(
    graph: HexGraph, hex: HexRecord, current_label: str, options: DistanceOptions,
) -> list[Neighbor]:
    """Every other hex sharing at least one wormhole type."""
    if not hex.wormholes:
        return []
    return [
        Neighbor(label, graph.get(label), None, WORMHOLE)
        for label in graph.wormhole_partners(hex)
        if label != current_label
    ]


def adjacency_override_neighbors(
    graph: HexGraph, hex: HexRecord, current_label: str, options: DistanceOptions,
) -> list[Neighbor]:
    """Bonus edges authored per side.  Never subject to movement blockers."""
    results: list[Neighbor] = []
    for side, target_label in hex.adjacency_overrides.items():
        if not is_valid_side(side):
            continue
        target = graph.get(target_label)
        if target is None:
            continue
        results.append(Neighbor(target_label, target, None, ADJACENCY_OVERRIDE))
    return results


DEFAULT_PROVIDERS: tuple[NeighborProvider, ...] = (
    axial_neighbors,
    custom_link_neighbors,
    wormhole_neighbors,
    adjacency_override_neighbors,
)


# -- Registry ------------------------------------------------------------

class NeighborProviderRegistry:
    """Ordered collection of neighbor providers.

    Usage:
        registry = NeighborProviderRegistry.default()
        registry.register(my_provider)
        for n in registry.provide(graph, hex, label, options): ...
    """

    def __init__(self, providers: Optional[list[NeighborProvider]] = None) -> None:
        self._providers: list[NeighborProvider] = list(providers or [])

    @classmethod
    def default(cls) -> NeighborProviderRegistry:
        return cls(list(DEFAULT_PROVIDERS))

    @property
    def providers(self) -> list[NeighborProvider]:
        return list(self._providers)

    def register(self, provider: NeighborProvider) -> None:
        """Append a provider; it runs after those already registered."""
        self._providers.append(provider)

    def provide(
        self, graph: HexGraph, hex: HexRecord, current_label: str, options: DistanceOptions,
    ) -> list[Neighbor]:
        """All neighbors of ``hex``, de-duplicated by label."""
        seen: set[str] = set()
        results: list[Neighbor] = []
        for provider in self._providers:
            for neighbor in provider(graph, hex, current_label, options):
                if neighbor.label in seen:
                    continue
                seen.add(neighbor.label)
                results.append(neighbor)
        return results
