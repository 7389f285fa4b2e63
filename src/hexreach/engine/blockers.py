"""Movement blockers and passability.

A blocker is a predicate over one directed edge::

    blocker(graph, from_hex, to_hex, ctx, options) -> bool

``MovementBlockerRegistry.is_blocked`` vetoes the edge if any registered
blocker returns True.  The default registry holds the border-anomaly,
hazard-exit, nebula-exit and void blockers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from hexreach.models.hex import is_valid_side, opposite
from hexreach.models.hex_graph import HexGraph
from hexreach.models.hex_record import HexRecord
from hexreach.models.options import DistanceOptions
from hexreach.util import constants, effects


@dataclass(frozen=True)
class EdgeContext:
    """What a blocker knows about the edge being crossed."""
    dir_idx: Optional[int]
    is_source: bool
    from_label: str
    to_label: str


MovementBlocker = Callable[
    [HexGraph, HexRecord, HexRecord, EdgeContext, DistanceOptions], bool
]


# -- Passability ---------------------------------------------------------

def is_passable(
    hex: Optional[HexRecord], options: DistanceOptions, is_source: bool = False,
) -> bool:
    """Can a move end on (or continue from) this hex?

    Unassigned ('') and void hexes never are.  Active supernova and
    asteroid effects make a non-source hex impassable.
    """
    if hex is None:
        return False
    if not is_source:
        if options.use_supernova and hex.has_effect(effects.SUPERNOVA):
            return False
        if options.use_asteroid and hex.has_effect(effects.ASTEROID):
            return False
    return hex.base_type not in (constants.BASE_UNASSIGNED, constants.BASE_VOID)


def crosses_border_anomaly(
    from_hex: HexRecord, to_hex: HexRecord, side: int, options: DistanceOptions,
) -> bool:
    """True if leaving ``from_hex`` through ``side`` into ``to_hex`` is blocked.

    A Spatial Tear on either face of the edge blocks both ways.  A
    Gravity Wave blocks only entry into the hex that carries it.
    """
    if not options.use_border_anomalies or not is_valid_side(side):
        return False
    entry_side = opposite(side)
    if from_hex.anomaly_on(side) == effects.SPATIAL_TEAR:
        return True
    return to_hex.anomaly_on(entry_side) in (effects.SPATIAL_TEAR, effects.GRAVITY_WAVE)


# -- Built-in blockers ---------------------------------------------------

def border_anomaly_blocker(
    graph: HexGraph, from_hex: HexRecord, to_hex: HexRecord,
    ctx: EdgeContext, options: DistanceOptions,
) -> bool:
    if ctx.dir_idx is None:
        return False
    return crosses_border_anomaly(from_hex, to_hex, ctx.dir_idx, options)


def hazard_exit_blocker(
    graph: HexGraph, from_hex: HexRecord, to_hex: HexRecord,
    ctx: EdgeContext, options: DistanceOptions,
) -> bool:
    """No moving out of a supernova or asteroid field, except from the source."""
    if ctx.is_source:
        return False
    if from_hex.base_type in (constants.BASE_SUPERNOVA, constants.BASE_ASTEROID):
        return True
    if options.use_supernova and from_hex.has_effect(effects.SUPERNOVA):
        return True
    return options.use_asteroid and from_hex.has_effect(effects.ASTEROID)


def nebula_exit_blocker(
    graph: HexGraph, from_hex: HexRecord, to_hex: HexRecord,
    ctx: EdgeContext, options: DistanceOptions,
) -> bool:
    """No moving out of a nebula, except from the source."""
    return not ctx.is_source and options.use_nebula and from_hex.has_effect(effects.NEBULA)


def void_blocker(
    graph: HexGraph, from_hex: HexRecord, to_hex: HexRecord,
    ctx: EdgeContext, options: DistanceOptions,
) -> bool:
    return constants.BASE_VOID in (from_hex.base_type, to_hex.base_type)


DEFAULT_BLOCKERS: tuple[MovementBlocker, ...] = (
    border_anomaly_blocker,
    hazard_exit_blocker,
    nebula_exit_blocker,
    void_blocker,
)


# -- Registry ------------------------------------------------------------

class MovementBlockerRegistry:
    """Collection of edge vetoes; any one blocker is enough."""

    def __init__(self, blockers: Optional[list[MovementBlocker]] = None) -> None:
        self._blockers: list[MovementBlocker] = list(blockers or [])

    @classmethod
    def default(cls) -> MovementBlockerRegistry:
        return cls(list(DEFAULT_BLOCKERS))

    @property
    def blockers(self) -> list[MovementBlocker]:
        return list(self._blockers)

    def register(self, blocker: MovementBlocker) -> None:
        self._blockers.append(blocker)

    def is_blocked(
        self, graph: HexGraph, from_hex: HexRecord, to_hex: HexRecord,
        ctx: EdgeContext, options: DistanceOptions,
    ) -> bool:
        return any(b(graph, from_hex, to_hex, ctx, options) for b in self._blockers)
