# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import json

import pytest
import shapefile

from globetrail.geo.boundaries import (
    BoundaryLoadError,
    contains,
    countries_from_geojson,
    countries_from_topojson,
    highlighted_countries,
    load_boundaries,
)

SQUARE = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0), (0.0, 0.0)]

TOPOLOGY = {
    "type": "Topology",
    "transform": {"scale": [1, 1], "translate": [0, 0]},
    # quantized, delta-encoded copy of SQUARE
    "arcs": [[[0, 0], [10, 0], [0, 10], [-10, 0], [0, -10]]],
    "objects": {
        "countries": {
            "type": "GeometryCollection",
            "geometries": [
                {"type": "Polygon", "id": "1", "properties": {"name": "Squareland"}, "arcs": [[0]]},
                {"type": "MultiPolygon", "id": "2", "arcs": [[[-1]]]},
                {"type": "LineString", "arcs": [0]},
            ],
        }
    },
}


def test_topojson_arcs_are_decoded() -> None:
    shapes = countries_from_topojson(TOPOLOGY)
    assert [s.name for s in shapes] == ["Squareland", "2"]
    assert shapes[0].rings[0] == tuple(SQUARE)
    # a negative reference walks the arc backwards
    assert shapes[1].rings[0] == tuple(reversed(SQUARE))
    assert shapes[0].bbox == (0.0, 0.0, 10.0, 10.0)


def test_topojson_missing_object() -> None:
    with pytest.raises(BoundaryLoadError, match="land"):
        countries_from_topojson(TOPOLOGY, "land")
    with pytest.raises(BoundaryLoadError):
        countries_from_geojson({"type": "Topology"})


def test_geojson_features() -> None:
    doc = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"ADMIN": "Squareland"},
                "geometry": {"type": "Polygon", "coordinates": [SQUARE]},
            },
            {"type": "Feature", "properties": {}, "geometry": {"type": "Point", "coordinates": [1, 1]}},
        ],
    }
    shapes = countries_from_geojson(doc)
    assert len(shapes) == 1 and shapes[0].name == "Squareland"


def test_contains_and_highlight() -> None:
    shape = countries_from_topojson(TOPOLOGY)[0]
    assert contains(shape, 5.0, 5.0)
    assert not contains(shape, 15.0, 5.0)
    assert not contains(shape, 5.0, -0.5)
    hits = highlighted_countries([shape], [(5.0, 5.0), (float("nan"), 1.0)])
    assert hits == frozenset({"Squareland"})
    assert highlighted_countries([shape], [(50.0, 50.0)]) == frozenset()


def test_load_boundaries_from_files(tmp_path) -> None:
    topo_path = tmp_path / "world.json"
    topo_path.write_text(json.dumps(TOPOLOGY), encoding="utf-8")
    assert len(load_boundaries(topo_path)) == 2

    shp_path = tmp_path / "countries.shp"
    w = shapefile.Writer(str(shp_path))
    w.field("NAME", "C")
    # clockwise exterior ring
    w.poly([[(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0), (0.0, 0.0)]])
    w.record("Squareland")
    w.close()
    shapes = load_boundaries(shp_path)
    assert [s.name for s in shapes] == ["Squareland"]
    assert contains(shapes[0], 5.0, 5.0)


def test_load_boundaries_degrades_to_empty(tmp_path, caplog) -> None:
    assert load_boundaries(tmp_path / "missing.json") == []
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    assert load_boundaries(bad) == []
    assert load_boundaries({"type": "Topology", "objects": {}}) == []
    assert "World boundaries unavailable" in caplog.text


def test_non_object_documents_degrade_to_empty(tmp_path, caplog) -> None:
    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]", encoding="utf-8")
    assert load_boundaries(listing) == []
    assert "must be a JSON object" in caplog.text


def test_malformed_features_are_skipped() -> None:
    square = {
        "type": "Feature",
        "properties": {"name": "Squareland"},
        "geometry": {"type": "Polygon", "coordinates": [SQUARE]},
    }
    doc = {
        "type": "FeatureCollection",
        "features": [
            None,
            "feature",
            {"type": "Feature", "geometry": None},
            {"type": "Feature", "geometry": "Polygon"},
            {"type": "Feature", "geometry": {"type": "Polygon", "coordinates": 5}},
            {"type": "Feature", "properties": [], "geometry": square["geometry"]},
            square,
        ],
    }
    shapes = load_boundaries(doc)
    assert [s.name for s in shapes] == ["5", "Squareland"]
    assert load_boundaries({"type": "FeatureCollection", "features": [None]}) == []


def test_malformed_topojson_geometries_are_skipped() -> None:
    topology = dict(TOPOLOGY)
    topology["objects"] = {
        "countries": {
            "type": "GeometryCollection",
            "geometries": [None, 7, {"type": "Polygon", "arcs": [[9]]}]
            + TOPOLOGY["objects"]["countries"]["geometries"][:1],
        }
    }
    assert [s.name for s in load_boundaries(topology)] == ["Squareland"]
    assert load_boundaries({"type": "Topology", "objects": {"countries": None}}) == []


def test_containment_follows_the_ring_shape() -> None:
    # an L-shaped ring whose bounding box covers the notch
    ell = [(0.0, 0.0), (10.0, 0.0), (10.0, 4.0), (4.0, 4.0), (4.0, 10.0), (0.0, 10.0)]
    doc = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "Ell"},
                "geometry": {"type": "Polygon", "coordinates": [ell]},
            }
        ],
    }
    shape = countries_from_geojson(doc)[0]
    assert len(shape.polygons) == 1
    assert contains(shape, 2.0, 8.0)
    assert contains(shape, 8.0, 2.0)
    assert not contains(shape, 8.0, 8.0)
    assert highlighted_countries([shape], [(8.0, 8.0), (2.0, 2.0)]) == frozenset({"Ell"})
    assert highlighted_countries([shape], [(8.0, 8.0)]) == frozenset()
