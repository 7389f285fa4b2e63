"""Tests for loading map snapshots from YAML."""

import textwrap

from hexreach.engine.distance import calculate_distances_from
from hexreach.loaders.map_loader import load_graph, load_graph_from_hexes
from hexreach.models.hex_record import CustomLink

MAP_YAML = textwrap.dedent("""\
    hexes:
      "000":
        q: 0
        r: 0
        base_type: homesystem
        custom_adjacents: {101: {two_way: true}}
      101:
        q: 0
        r: -1
        base_type: 1 planet
        effects: [nebula]
        planets:
          - {name: Wellon, resources: 1, influence: 2, planet_type: industrial}
      102:
        q: 1
        r: -1
        base_type: empty
        border_anomalies: {4: {type: Gravity Wave}}
      201:
        q: 1
        r: 0
        matrix:
          - [0, 0, 0, 0, 0, 0]
          - [0, 0, 0, 0, 0, 0]
          - [0, 0, 0, 0, 0, 1]
          - [0, 0, 0, 0, 0, 0]
          - [0, 0, 0, 0, 0, 0]
          - [0, 0, 0, 0, 0, 0]
      301:
        q: 2
        r: 0
        base_type: empty
""")


class TestLoadGraph:
    def test_labels_are_strings(self, tmp_path):
        path = tmp_path / "map.yaml"
        path.write_text(MAP_YAML)
        graph = load_graph(path)
        assert sorted(graph) == ["000", "101", "102", "201", "301"]
        assert graph.get("000").custom_adjacents == {"101": CustomLink(True)}
        assert graph.get("101").planets[0].name == "Wellon"
        assert graph.get("102").anomaly_on(4) == "GRAVITYWAVE"
        assert graph.get("201").is_hyperlane

    def test_loaded_map_searches(self, tmp_path):
        path = tmp_path / "map.yaml"
        path.write_text(MAP_YAML)
        result = calculate_distances_from(load_graph(path), "000", 2)
        # 102 sits behind a gravity wave and 201 is a hyperlane to 301
        assert result == {"000": 0, "101": 1, "301": 1}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "map.yaml"
        path.write_text("")
        assert len(load_graph(path)) == 0

    def test_from_hexes(self):
        graph = load_graph_from_hexes({1: {"q": 0, "r": 0}, "2": {"q": 1, "r": 0}})
        assert "1" in graph
        assert "2" in graph
