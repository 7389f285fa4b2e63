"""Tests for HexRecord parsing and the HexGraph accessor."""

import logging

import pytest

from hexreach.models.hex import HexCoord
from hexreach.models.hex_graph import HexGraph, MalformedHexError
from hexreach.models.hex_record import (
    CustomLink,
    HexRecord,
    Planet,
    empty_matrix,
    is_valid_matrix,
)


def _hex(label: str, q: int, r: int, base: str = "empty", **kw) -> HexRecord:
    return HexRecord(label=label, q=q, r=r, base_type=base, **kw)


class TestHexRecordFromDict:
    def test_minimal_record(self):
        rec = HexRecord.from_dict("000", {"q": 0, "r": 0})
        assert rec.label == "000"
        assert rec.base_type == ""
        assert rec.effects == set()
        assert rec.matrix is None
        assert not rec.is_hyperlane

    def test_none_fields_mean_no_special_behavior(self):
        rec = HexRecord.from_dict("a", {
            "q": 1, "r": 2, "effects": None, "wormholes": None,
            "custom_adjacents": None, "border_anomalies": None, "matrix": None,
        })
        assert rec.effects == set()
        assert rec.wormholes == set()
        assert rec.custom_adjacents == {}

    def test_inherent_wormholes_merged(self):
        rec = HexRecord.from_dict("a", {
            "q": 0, "r": 0, "wormholes": ["beta"], "inherent_wormholes": ["alpha"],
        })
        assert rec.wormholes == {"alpha", "beta"}

    def test_custom_links_and_string_side_keys(self):
        rec = HexRecord.from_dict("a", {
            "q": 0, "r": 0,
            "custom_adjacents": {"b": {"two_way": True}, 101: {}},
            "adjacency_overrides": {"2": "c"},
            "border_anomalies": {"0": {"type": "Spatial Tear"}, 3: "GRAVITYWAVE"},
        })
        assert rec.custom_adjacents == {"b": CustomLink(True), "101": CustomLink(False)}
        assert rec.adjacency_overrides == {2: "c"}
        assert rec.anomaly_on(0) == "SPATIALTEAR"
        assert rec.anomaly_on(3) == "GRAVITYWAVE"
        assert rec.anomaly_on(1) is None

    def test_planets(self):
        rec = HexRecord.from_dict("a", {
            "q": 0, "r": 0,
            "planets": [{"name": "Mecatol Rex", "resources": 1, "influence": 6, "legendary": False}],
        })
        assert rec.planets[0].name == "Mecatol Rex"
        assert rec.planets[0].influence == 6

    def test_planet_list_forms(self):
        rec = HexRecord.from_dict("a", {
            "q": 0, "r": 0,
            "planets": [
                {"name": "Lodor", "planet_types": ["cultural"], "tech_specialties": ["warfare", "biotic"]},
                {"name": "Quann", "planet_type": "hazardous", "planet_types": ["cultural"],
                 "tech_specialty": "biotic", "tech_specialties": ["biotic", None]},
            ],
        })
        lodor, quann = rec.planets
        assert lodor.planet_type == "cultural"
        assert lodor.techs == ["warfare", "biotic"]
        assert quann.planet_type == "hazardous"
        assert quann.techs == ["biotic"]


class TestMatrix:
    def test_empty_matrix_is_not_hyperlane(self):
        rec = _hex("h", 0, 0, base="", matrix=empty_matrix())
        assert is_valid_matrix(rec.matrix)
        assert not rec.is_hyperlane

    def test_single_connection_is_hyperlane(self):
        m = empty_matrix()
        m[0][3] = 1
        assert _hex("h", 0, 0, base="", matrix=m).is_hyperlane

    def test_wrong_shape_is_not_hyperlane(self):
        m = [[1] * 6 for _ in range(5)]
        assert not is_valid_matrix(m)
        assert not _hex("h", 0, 0, base="", matrix=m).is_hyperlane


class TestHexGraphIndices:
    def test_label_at(self):
        g = HexGraph.from_records([_hex("a", 0, 0), _hex("b", 1, 0)])
        assert g.label_at(HexCoord(1, 0)) == "b"
        assert g.label_at(HexCoord(5, 5)) is None

    def test_first_record_wins_on_shared_coordinate(self):
        g = HexGraph.from_records([_hex("a", 0, 0), _hex("dup", 0, 0)])
        assert g.label_at(HexCoord(0, 0)) == "a"

    def test_neighbor_across(self):
        g = HexGraph.from_records([_hex("a", 0, 0), _hex("n", 0, -1)])
        assert g.neighbor_across(g.get("a"), 0) == "n"
        assert g.neighbor_across(g.get("a"), 3) is None
        assert g.neighbor_across(g.get("a"), 9) is None

    def test_wormhole_partners_in_map_order(self):
        g = HexGraph.from_records([
            _hex("c", 4, 0, wormholes={"alpha"}),
            _hex("a", 0, 0, wormholes={"alpha", "beta"}),
            _hex("b", 9, 0, wormholes={"beta"}),
            _hex("x", 7, 0, wormholes={"gamma"}),
        ])
        assert g.wormhole_partners(g.get("a")) == ["c", "b"]
        assert g.wormhole_partners(g.get("x")) == []

    def test_refresh_picks_up_edits(self):
        g = HexGraph.from_records([_hex("a", 0, 0, wormholes={"alpha"}), _hex("b", 5, 0)])
        assert g.wormhole_partners(g.get("a")) == []
        g.get("b").wormholes.add("alpha")
        g.refresh()
        assert g.wormhole_partners(g.get("a")) == ["b"]

    def test_refresh_replaces_indices_whole(self):
        g = HexGraph.from_records([_hex("a", 0, 0), _hex("b", 1, 0)])
        old = g._by_coord
        g.refresh()
        assert g._by_coord is not old
        assert old == {HexCoord(0, 0): "a", HexCoord(1, 0): "b"}

    def test_from_dict(self):
        g = HexGraph.from_dict({"a": {"q": 0, "r": 0, "base_type": "empty"}, "b": None})
        assert len(g) == 2
        assert "b" in g
        assert g.get("b").base_type == ""


class TestValidation:
    def _bad_graph(self) -> HexGraph:
        return HexGraph.from_records([
            _hex("m", 0, 0, base="", matrix=[[0] * 6 for _ in range(4)]),
            _hex("o", 1, 0, adjacency_overrides={7: "m"}),
        ])

    def test_clean_map_has_no_problems(self):
        g = HexGraph.from_records([_hex("a", 0, 0, matrix=empty_matrix())])
        assert g.problems() == []
        g.check(strict=True)

    def test_problems_listed(self):
        found = self._bad_graph().problems()
        assert len(found) == 2
        assert "m: hyperlane matrix is not 6x6" in found

    def test_strict_raises(self):
        with pytest.raises(MalformedHexError):
            self._bad_graph().check(strict=True)

    def test_lenient_logs(self, caplog):
        with caplog.at_level(logging.WARNING):
            self._bad_graph().check()
        assert "Skipping malformed hex data" in caplog.text


class TestDuplicateRealIds:
    def _graph(self) -> HexGraph:
        planet = [Planet("Wellon", 1, 2)]
        return HexGraph.from_records([
            _hex("a", 0, 0, real_id="25", planets=list(planet)),
            _hex("b", 1, 0, real_id="25", planets=list(planet)),
            _hex("c", 2, 0, real_id="40"),
            _hex("d", 3, 0, real_id="40"),
            _hex("e", 4, 0, real_id="26", planets=list(planet)),
            _hex("f", 5, 0),
            _hex("g", 6, 0),
        ])

    def test_planets_only_by_default(self):
        assert self._graph().duplicate_real_ids() == {"25": ["a", "b"]}

    def test_check_all(self):
        found = self._graph().duplicate_real_ids(planets_only=False, check_all=True)
        assert found == {"25": ["a", "b"], "40": ["c", "d"]}

    def test_no_mode_selected(self):
        assert self._graph().duplicate_real_ids(planets_only=False) == {}

    def test_unique_map(self):
        g = HexGraph.from_records([_hex("a", 0, 0, real_id="1"), _hex("b", 1, 0, real_id="2")])
        assert g.duplicate_real_ids(planets_only=False, check_all=True) == {}
