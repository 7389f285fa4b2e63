"""Pydantic request/response models for the REST API.

These models define the HTTP request bodies and response shapes.  Hex
records are validated here and then handed to ``HexGraph.from_dict``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ===================================================================
# Map snapshot
# ===================================================================


class CustomLinkModel(BaseModel):
    two_way: bool = False


class BorderAnomalyModel(BaseModel):
    type: str


class PlanetModel(BaseModel):
    name: str = ""
    resources: int = 0
    influence: int = 0
    planet_type: str = ""
    tech_specialty: str = ""
    planet_types: List[str] = Field(default_factory=list)
    tech_specialties: List[str] = Field(default_factory=list)


class HexRecordModel(BaseModel):
    q: int
    r: int
    base_type: str = ""
    effects: List[str] = Field(default_factory=list)
    wormholes: List[str] = Field(default_factory=list)
    inherent_wormholes: List[str] = Field(default_factory=list)
    custom_adjacents: Dict[str, CustomLinkModel] = Field(default_factory=dict)
    adjacency_overrides: Dict[int, str] = Field(default_factory=dict)
    border_anomalies: Dict[int, BorderAnomalyModel] = Field(default_factory=dict)
    matrix: Optional[List[List[int]]] = None
    planets: List[PlanetModel] = Field(default_factory=list)
    real_id: str = ""


class OptionsModel(BaseModel):
    use_custom_links: bool = True
    use_border_anomalies: bool = True
    use_supernova: bool = True
    use_rift: bool = True
    use_nebula: bool = True
    use_asteroid: bool = True


# ===================================================================
# Distances
# ===================================================================


class DistanceRequest(BaseModel):
    hexes: Dict[str, HexRecordModel]
    source: str
    max_distance: Optional[int] = None
    options: Optional[OptionsModel] = None


class DistanceResponse(BaseModel):
    source: str
    max_distance: int
    distances: Dict[str, int] = Field(default_factory=dict)
    error: str = ""


# ===================================================================
# Slices
# ===================================================================


class SliceRequest(BaseModel):
    hexes: Dict[str, HexRecordModel]
    max_distance: Optional[int] = None
    options: Optional[OptionsModel] = None


class SliceModel(BaseModel):
    label: str
    real_id: str = ""
    tiles: List[str] = Field(default_factory=list)
    planet_count: int = 0
    resources: int = 0
    influence: int = 0
    planet_types: Dict[str, int] = Field(default_factory=dict)
    techs: List[str] = Field(default_factory=list)
    wormholes: List[str] = Field(default_factory=list)
    ideal: str = ""


class SliceResponse(BaseModel):
    max_distance: int
    slices: List[SliceModel] = Field(default_factory=list)
    error: str = ""


def hexes_to_raw(hexes: Dict[str, HexRecordModel]) -> Dict[str, Dict[str, Any]]:
    """Plain dicts for ``HexGraph.from_dict``."""
    return {label: rec.model_dump() for label, rec in hexes.items()}
