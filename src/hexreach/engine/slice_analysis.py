"""Slice analysis: what each home system can reach.

A home system's slice is every hex within movement range of it.  The
summary totals the planets in the slice the way players compare draft
slices: resources, influence, planet traits, tech skips and wormholes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from hexreach.engine.distance import DistanceEngine
from hexreach.models.hex_graph import HexGraph
from hexreach.models.options import DistanceOptions
from hexreach.util.constants import BASE_HOMESYSTEM, PLANET_TYPES


@dataclass
class SliceSummary:
    """Totals for one home system's slice.

    Attributes:
        label: Home system hex.
        real_id: Catalogue id of the home system tile.
        tiles: Hexes in the slice, in distance map order.
        planet_count: Planets in the slice.
        resources: Total resources.
        influence: Total influence.
        planet_types: Count per planet trait.
        techs: Tech specialties available.
        wormholes: Wormhole types present.
        ideal_resources: Resources of planets better spent for resources.
        ideal_influence: Influence of planets better spent for influence.
        ideal_flex: Value of planets with equal resources and influence.
    """

    label: str
    real_id: str = ""
    tiles: list[str] = field(default_factory=list)
    planet_count: int = 0
    resources: int = 0
    influence: int = 0
    planet_types: dict[str, int] = field(
        default_factory=lambda: {t: 0 for t in PLANET_TYPES}
    )
    techs: set[str] = field(default_factory=set)
    wormholes: set[str] = field(default_factory=set)
    ideal_resources: int = 0
    ideal_influence: int = 0
    ideal_flex: int = 0

    @property
    def ideal_label(self) -> str:
        """Short form used in the editor, e.g. ``"5/4+2"``."""
        base = f"{self.ideal_resources}/{self.ideal_influence}"
        return f"{base}+{self.ideal_flex}" if self.ideal_flex else base


def summarize_slice(
    graph: HexGraph, label: str, distances: dict[str, int], max_distance: int,
) -> SliceSummary:
    """Aggregate the hexes at distance 1..max_distance from ``label``."""
    home = graph.get(label)
    summary = SliceSummary(label=label, real_id=home.real_id if home else "")
    summary.tiles = [tile for tile, d in distances.items() if 0 < d <= max_distance]

    for tile in summary.tiles:
        rec = graph.get(tile)
        if rec is None:
            continue
        summary.wormholes |= rec.wormholes
        for planet in rec.planets:
            summary.planet_count += 1
            summary.resources += planet.resources
            summary.influence += planet.influence
            trait = planet.planet_type.upper()
            if trait in summary.planet_types:
                summary.planet_types[trait] += 1
            for tech in planet.techs:
                summary.techs.add(tech.upper())
            if planet.resources == planet.influence:
                summary.ideal_flex += planet.resources
            elif planet.resources > planet.influence:
                summary.ideal_resources += planet.resources
            else:
                summary.ideal_influence += planet.influence
    return summary


def analyze_slices(
    graph: HexGraph,
    max_distance: int = 2,
    options: Optional[DistanceOptions] = None,
    engine: Optional[DistanceEngine] = None,
) -> list[SliceSummary]:
    """Summarize the slice of every home system on the map.

    Returns:
        One summary per home system, in map order.  Empty if the map has
        no home systems.
    """
    engine = engine or DistanceEngine()
    summaries: list[SliceSummary] = []
    for label, rec in graph.items():
        if rec.base_type != BASE_HOMESYSTEM:
            continue
        distances = engine.calculate(graph, label, max_distance, options)
        summaries.append(summarize_slice(graph, label, distances, max_distance))
    return summaries
