"""Map loader: parses map snapshot YAML files into HexGraph models.

Format::

    hexes:
      "000":
        q: 0
        r: 0
        base_type: homesystem
        effects: [rift]
        wormholes: [alpha]
        custom_adjacents: {"101": {two_way: true}}
        adjacency_overrides: {2: "305"}
        border_anomalies: {0: {type: Spatial Tear}}
        matrix: [[0, 0, 0, 1, 0, 0], ...]
        planets: [{name: Mecatol Rex, resources: 1, influence: 6}]

Every key except ``q`` and ``r`` is optional.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from hexreach.models.hex_graph import HexGraph

log = logging.getLogger(__name__)


def load_graph(path: str | Path) -> HexGraph:
    """Load a map snapshot from a YAML file.

    Args:
        path: Path to the map YAML file.

    Returns:
        Populated HexGraph instance.
    """
    path = Path(path)
    with path.open() as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    graph = load_graph_from_hexes(data.get("hexes") or {})
    log.info("Loaded map %s (%d hexes)", path, len(graph))
    return graph


def load_graph_from_hexes(hexes: dict[Any, dict[str, Any]]) -> HexGraph:
    """Build a HexGraph from a ``{label: fields}`` dictionary.

    Labels are normalized to strings (YAML reads ``101`` as an int).
    """
    return HexGraph.from_dict({str(label): fields for label, fields in hexes.items()})
