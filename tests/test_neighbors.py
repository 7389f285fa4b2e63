"""Tests for neighbor providers and the provider registry."""

from __future__ import annotations

from hexreach.engine.neighbors import (
    ADJACENCY_OVERRIDE,
    AXIAL,
    CUSTOM_LINK,
    WORMHOLE,
    Neighbor,
    NeighborProviderRegistry,
    adjacency_override_neighbors,
    axial_neighbors,
    custom_link_neighbors,
    wormhole_neighbors,
)
from hexreach.models.hex import HexCoord
from hexreach.models.hex_graph import HexGraph
from hexreach.models.hex_record import CustomLink, HexRecord
from hexreach.models.options import DistanceOptions

OPTS = DistanceOptions()


def _hex(label: str, q: int, r: int, base: str = "empty", **kw) -> HexRecord:
    return HexRecord(label=label, q=q, r=r, base_type=base, **kw)


def _ring_graph(*extra: HexRecord, center: HexRecord | None = None) -> HexGraph:
    """Center hex "c" plus its six neighbors labelled "n0".."n5" by side."""
    records = [center or _hex("c", 0, 0)]
    for side, coord in enumerate(HexCoord(0, 0).neighbors()):
        records.append(_hex(f"n{side}", coord.q, coord.r))
    records.extend(extra)
    return HexGraph.from_records(records)


class TestAxialProvider:
    def test_six_neighbors_tagged_with_side(self):
        g = _ring_graph()
        found = axial_neighbors(g, g.get("c"), "c", OPTS)
        assert [(n.label, n.dir_idx, n.kind) for n in found] == [
            (f"n{d}", d, AXIAL) for d in range(6)
        ]

    def test_missing_positions_skipped(self):
        g = HexGraph.from_records([_hex("c", 0, 0), _hex("e", 1, 0)])
        found = axial_neighbors(g, g.get("c"), "c", OPTS)
        assert [(n.label, n.dir_idx) for n in found] == [("e", 2)]


class TestCustomLinkProvider:
    def test_two_way_link(self):
        g = HexGraph.from_records([
            _hex("a", 0, 0, custom_adjacents={"b": CustomLink(two_way=True)}),
            _hex("b", 8, 0, custom_adjacents={"a": CustomLink(two_way=True)}),
        ])
        found = custom_link_neighbors(g, g.get("a"), "a", OPTS)
        assert [(n.label, n.dir_idx, n.kind) for n in found] == [("b", None, CUSTOM_LINK)]

    def test_one_way_link_followed_when_no_reverse(self):
        g = HexGraph.from_records([
            _hex("a", 0, 0, custom_adjacents={"b": CustomLink()}),
            _hex("b", 8, 0),
        ])
        assert [n.label for n in custom_link_neighbors(g, g.get("a"), "a", OPTS)] == ["b"]
        assert custom_link_neighbors(g, g.get("b"), "b", OPTS) == []

    def test_one_way_link_skipped_when_reverse_recorded(self):
        g = HexGraph.from_records([
            _hex("a", 0, 0, custom_adjacents={"b": CustomLink()}),
            _hex("b", 8, 0, custom_adjacents={"a": CustomLink()}),
        ])
        assert custom_link_neighbors(g, g.get("a"), "a", OPTS) == []

    def test_disabled_by_option(self):
        g = HexGraph.from_records([
            _hex("a", 0, 0, custom_adjacents={"b": CustomLink(two_way=True)}),
            _hex("b", 8, 0),
        ])
        off = DistanceOptions(use_custom_links=False)
        assert custom_link_neighbors(g, g.get("a"), "a", off) == []

    def test_unknown_target_skipped(self):
        g = HexGraph.from_records([_hex("a", 0, 0, custom_adjacents={"zz": CustomLink(True)})])
        assert custom_link_neighbors(g, g.get("a"), "a", OPTS) == []


class TestWormholeProvider:
    def test_partners_regardless_of_distance(self):
        g = HexGraph.from_records([
            _hex("a", 0, 0, wormholes={"alpha"}),
            _hex("b", 10, -4, wormholes={"alpha"}),
            _hex("c", 1, 0, wormholes={"beta"}),
        ])
        found = wormhole_neighbors(g, g.get("a"), "a", OPTS)
        assert [(n.label, n.dir_idx, n.kind) for n in found] == [("b", None, WORMHOLE)]

    def test_no_wormholes(self):
        g = HexGraph.from_records([_hex("a", 0, 0), _hex("b", 3, 0, wormholes={"alpha"})])
        assert wormhole_neighbors(g, g.get("a"), "a", OPTS) == []


class TestAdjacencyOverrideProvider:
    def test_override_edge(self):
        g = HexGraph.from_records([
            _hex("a", 0, 0, adjacency_overrides={1: "far"}),
            _hex("far", 6, -6),
        ])
        found = adjacency_override_neighbors(g, g.get("a"), "a", OPTS)
        assert [(n.label, n.dir_idx, n.kind) for n in found] == [("far", None, ADJACENCY_OVERRIDE)]
        assert found[0].exempt_from_blockers

    def test_invalid_side_and_unknown_target_skipped(self):
        g = HexGraph.from_records([
            _hex("a", 0, 0, adjacency_overrides={8: "far", 2: "missing"}),
            _hex("far", 6, -6),
        ])
        assert adjacency_override_neighbors(g, g.get("a"), "a", OPTS) == []


class TestRegistry:
    def test_default_order_and_dedup(self):
        center = _hex("c", 0, 0, custom_adjacents={"n2": CustomLink(True)}, wormholes={"alpha"})
        g = _ring_graph(_hex("w", 9, 9, wormholes={"alpha"}), center=center)
        found = NeighborProviderRegistry.default().provide(g, g.get("c"), "c", OPTS)
        assert [n.label for n in found] == ["n0", "n1", "n2", "n3", "n4", "n5", "w"]
        assert next(n for n in found if n.label == "n2").kind == AXIAL

    def test_empty_registry_provides_nothing(self):
        g = _ring_graph()
        assert NeighborProviderRegistry().provide(g, g.get("c"), "c", OPTS) == []

    def test_registered_provider_runs_last(self):
        g = _ring_graph(_hex("extra", 20, 0))

        def teleport(graph, hex, label, options):
            return [Neighbor("extra", graph.get("extra"), None, "teleport")]

        registry = NeighborProviderRegistry([axial_neighbors])
        registry.register(teleport)
        found = registry.provide(g, g.get("c"), "c", OPTS)
        assert found[-1].label == "extra"
        assert len(registry.providers) == 2

    def test_registries_are_independent(self):
        a = NeighborProviderRegistry.default()
        b = NeighborProviderRegistry.default()
        a.register(lambda *args: [])
        assert len(a.providers) == len(b.providers) + 1
