"""Hex record: everything the map editor stores about one map position.

Records are created and edited by the editor; the distance engine only
reads them (the one exception is hyperlane matrix symmetrization, see
``hexreach.engine.hyperlanes.symmetrize_matrix``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from hexreach.models.hex import SIDES, HexCoord
from hexreach.util import effects
from hexreach.util.effects import normalize_anomaly


@dataclass(frozen=True)
class BorderAnomaly:
    """An anomaly bound to one edge of a hex (e.g. Spatial Tear)."""
    type: str

    @property
    def key(self) -> str:
        return normalize_anomaly(self.type)


@dataclass(frozen=True)
class CustomLink:
    """An authored link from one hex to another."""
    two_way: bool = False


@dataclass
class Planet:
    """Planet data used for slice summaries."""
    name: str = ""
    resources: int = 0
    influence: int = 0
    planet_type: str = ""
    tech_specialty: str = ""
    tech_specialties: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Planet:
        """Build a planet from a plain mapping.

        Besides the single-value keys, the list forms ``planet_types``
        (first entry used) and ``tech_specialties`` are accepted.
        """
        planet_type = data.get("planet_type") or ""
        if not planet_type and data.get("planet_types"):
            planet_type = data["planet_types"][0] or ""
        return cls(
            name=data.get("name") or "",
            resources=int(data.get("resources") or 0),
            influence=int(data.get("influence") or 0),
            planet_type=planet_type,
            tech_specialty=data.get("tech_specialty") or "",
            tech_specialties=[t for t in data.get("tech_specialties") or () if t],
        )

    @property
    def techs(self) -> list[str]:
        """Every tech specialty of the planet, single and list forms."""
        found = [self.tech_specialty] if self.tech_specialty else []
        return found + [t for t in self.tech_specialties if t not in found]


@dataclass
class HexRecord:
    """One hex of the map.

    Attributes:
        label: Unique id of the hex on the map.
        q: Axial column.
        r: Axial row.
        base_type: Terrain class ('' = unassigned, 'void', 'empty', ...).
        effects: Active effects (nebula, rift, supernova, asteroid).
        wormholes: Wormhole types, inherent and custom combined.
        custom_adjacents: target label -> authored link.
        adjacency_overrides: side index -> target label.
        border_anomalies: side index -> anomaly on that edge.
        matrix: 6x6 hyperlane matrix; ``matrix[entry][exit]`` truthy means
            the tile connects edge ``entry`` to edge ``exit``.
        planets: Planets in the system.
        real_id: Catalogue id of the placed system tile.
    """

    label: str
    q: int
    r: int
    base_type: str = ""
    effects: set[str] = field(default_factory=set)
    wormholes: set[str] = field(default_factory=set)
    custom_adjacents: dict[str, CustomLink] = field(default_factory=dict)
    adjacency_overrides: dict[int, str] = field(default_factory=dict)
    border_anomalies: dict[int, BorderAnomaly] = field(default_factory=dict)
    matrix: Optional[list[list[int]]] = None
    planets: list[Planet] = field(default_factory=list)
    real_id: str = ""

    @property
    def coord(self) -> HexCoord:
        return HexCoord(self.q, self.r)

    def has_effect(self, effect: str) -> bool:
        return effect in self.effects

    @property
    def is_rift(self) -> bool:
        return effects.RIFT in self.effects

    @property
    def is_hyperlane(self) -> bool:
        """True if the hex carries a well-formed matrix with any connection."""
        return is_valid_matrix(self.matrix) and any(any(row) for row in self.matrix)

    def anomaly_on(self, side: int) -> Optional[str]:
        """Normalized anomaly key on ``side``, or None."""
        anomaly = self.border_anomalies.get(side)
        return anomaly.key if anomaly is not None else None

    # -- Construction ----------------------------------------------------

    @classmethod
    def from_dict(cls, label: str, data: dict[str, Any]) -> HexRecord:
        """Build a record from a plain mapping (YAML / JSON / REST body).

        Optional keys may be missing or None.  ``inherent_wormholes`` is
        merged into ``wormholes``.
        """
        wormholes = set(data.get("wormholes") or ())
        wormholes |= set(data.get("inherent_wormholes") or ())

        custom = {}
        for target, info in (data.get("custom_adjacents") or {}).items():
            if isinstance(info, dict):
                custom[str(target)] = CustomLink(two_way=bool(info.get("two_way", False)))
            else:
                custom[str(target)] = CustomLink(two_way=bool(info))

        anomalies = {}
        for side, info in (data.get("border_anomalies") or {}).items():
            type_name = (info.get("type") or "") if isinstance(info, dict) else str(info)
            anomalies[_side_key(side)] = BorderAnomaly(type=type_name)

        overrides = {
            _side_key(side): str(target)
            for side, target in (data.get("adjacency_overrides") or {}).items()
        }

        planets = [
            p if isinstance(p, Planet) else Planet.from_dict(p)
            for p in data.get("planets") or ()
        ]

        matrix = data.get("matrix")
        if isinstance(matrix, (list, tuple)):
            matrix = [list(row) if isinstance(row, (list, tuple)) else row for row in matrix]

        return cls(
            label=label,
            q=int(data.get("q", 0)),
            r=int(data.get("r", 0)),
            base_type=data.get("base_type") or "",
            effects=set(data.get("effects") or ()),
            wormholes=wormholes,
            custom_adjacents=custom,
            adjacency_overrides=overrides,
            border_anomalies=anomalies,
            matrix=matrix,
            planets=planets,
            real_id=str(data.get("real_id") or ""),
        )


def empty_matrix() -> list[list[int]]:
    """A 6x6 matrix with no connections."""
    return [[0] * SIDES for _ in range(SIDES)]


def is_valid_matrix(matrix: object) -> bool:
    """True if ``matrix`` is a 6x6 nested list."""
    if not isinstance(matrix, list) or len(matrix) != SIDES:
        return False
    return all(isinstance(row, list) and len(row) == SIDES for row in matrix)


def _side_key(side: Any) -> Any:
    # YAML / JSON object keys arrive as strings
    if isinstance(side, str) and side.lstrip("-").isdigit():
        return int(side)
    return side
