"""Read-only accessor over a map's hex records.

Holds the records keyed by label plus two lookup indices:
- coordinate -> label (first record in insertion order wins)
- wormhole type -> labels carrying it

The indices are rebuilt by ``refresh()``; the distance engine calls it at
the start of every search so edits made between searches are picked up.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Iterator, Mapping, Optional

from hexreach.models.hex import HexCoord, is_valid_side
from hexreach.models.hex_record import HexRecord, is_valid_matrix

log = logging.getLogger(__name__)


class MalformedHexError(ValueError):
    """A hex record has structurally invalid data (strict mode only)."""


class HexGraph:
    """Map snapshot: label -> HexRecord with coordinate and wormhole indices."""

    def __init__(self, hexes: Mapping[str, HexRecord] | None = None) -> None:
        self._hexes: dict[str, HexRecord] = dict(hexes or {})
        self._by_coord: dict[HexCoord, str] = {}
        self._order: dict[str, int] = {}
        self._by_wormhole: dict[str, list[str]] = {}
        self.refresh()

    # -- Construction ----------------------------------------------------

    @classmethod
    def from_records(cls, records: list[HexRecord]) -> HexGraph:
        return cls({rec.label: rec for rec in records})

    @classmethod
    def from_dict(cls, raw: Mapping[str, Mapping[str, Any]]) -> HexGraph:
        """Build a graph from ``{label: {q, r, base_type, ...}}``."""
        return cls({
            label: HexRecord.from_dict(label, dict(data or {}))
            for label, data in raw.items()
        })

    # -- Indices ---------------------------------------------------------

    def refresh(self) -> None:
        """Rebuild the coordinate and wormhole indices.

        The new indices are built aside and swapped in together, so a
        search running on another thread never sees a partial index.
        """
        by_coord: dict[HexCoord, str] = {}
        order: dict[str, int] = {}
        by_wormhole: dict[str, list[str]] = defaultdict(list)
        for i, (label, rec) in enumerate(list(self._hexes.items())):
            order[label] = i
            by_coord.setdefault(rec.coord, label)
            for wormhole in rec.wormholes:
                by_wormhole[wormhole].append(label)
        self._by_coord, self._order, self._by_wormhole = by_coord, order, dict(by_wormhole)

    # -- Queries ---------------------------------------------------------

    def __contains__(self, label: object) -> bool:
        return label in self._hexes

    def __len__(self) -> int:
        return len(self._hexes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._hexes)

    def get(self, label: str) -> Optional[HexRecord]:
        return self._hexes.get(label)

    def items(self):
        return self._hexes.items()

    def records(self) -> list[HexRecord]:
        return list(self._hexes.values())

    def label_at(self, coord: HexCoord) -> Optional[str]:
        """Label of the hex at ``coord``, or None if the position is empty."""
        return self._by_coord.get(coord)

    def neighbor_across(self, rec: HexRecord, side: int) -> Optional[str]:
        """Label of the hex across edge ``side`` of ``rec``."""
        if not is_valid_side(side):
            return None
        return self._by_coord.get(rec.coord.neighbor(side))

    def wormhole_partners(self, rec: HexRecord) -> list[str]:
        """Labels of all other hexes sharing a wormhole type with ``rec``.

        Returned in map insertion order.
        """
        partners: set[str] = set()
        for wormhole in rec.wormholes:
            partners.update(self._by_wormhole.get(wormhole, ()))
        partners.discard(rec.label)
        return sorted(partners, key=self._order.__getitem__)

    # -- Validation ------------------------------------------------------

    def problems(self) -> list[str]:
        """Describe every structurally malformed field on the map."""
        found: list[str] = []
        for label, rec in self._hexes.items():
            if rec.matrix is not None and not is_valid_matrix(rec.matrix):
                found.append(f"{label}: hyperlane matrix is not 6x6")
            for side in rec.adjacency_overrides:
                if not is_valid_side(side):
                    found.append(f"{label}: adjacency override on invalid side {side!r}")
            for side in rec.border_anomalies:
                if not is_valid_side(side):
                    found.append(f"{label}: border anomaly on invalid side {side!r}")
        return found

    def duplicate_real_ids(
        self, planets_only: bool = True, check_all: bool = False,
    ) -> dict[str, list[str]]:
        """Catalogue ids placed on more than one hex.

        Args:
            planets_only: Only consider hexes that have planets.
            check_all: Consider every hex with a ``real_id``.  Ignored
                while ``planets_only`` is set.

        Returns:
            real_id -> labels carrying it (map order), for ids used twice
            or more.  Empty if neither mode is selected.
        """
        if not planets_only and not check_all:
            return {}
        seen: dict[str, list[str]] = defaultdict(list)
        for label, rec in self._hexes.items():
            if not rec.real_id:
                continue
            if planets_only and not rec.planets:
                continue
            seen[rec.real_id].append(label)
        duplicates = {rid: labels for rid, labels in seen.items() if len(labels) > 1}
        if duplicates:
            log.info("Duplicate tile ids on map: %s", ", ".join(sorted(duplicates)))
        return duplicates

    def check(self, strict: bool = False) -> None:
        """Raise in strict mode, otherwise log and carry on.

        Malformed fields are ignored by the neighbor providers, blockers
        and hyperlane router, so a map that is half-way through an edit
        still produces a result.
        """
        found = self.problems()
        if not found:
            return
        if strict:
            raise MalformedHexError("; ".join(found))
        for problem in found:
            log.warning("Skipping malformed hex data: %s", problem)
