# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import pytest

from globetrail.geo.boundaries import countries_from_geojson
from globetrail.models import GlobeData, Journey, Location, load_globe_data
from globetrail.scene import (
    LocationFilter,
    SceneComposer,
    SelectionState,
    compose_scene,
)


def _loc(id: str, lon: float, lat: float, type: str = "travel") -> Location:
    return Location(
        id=id, name=id.upper(), country="Nowhere", longitude=lon, latitude=lat, type=type
    )


def test_single_segment_between_two_stops(flat_map) -> None:
    a, b = _loc("a", 0, 0), _loc("b", 90, 0)
    segments = SceneComposer(flat_map.state).compute_journey_segments(
        [Journey(id="j1", name="J", locations=("a", "b"))], [a, b]
    )
    assert len(segments) == 1
    seg = segments[0]
    assert (seg.from_location.id, seg.to_location.id) == ("a", "b")
    assert seg.is_selected is False
    assert seg.stroke_width == 2.0 and seg.opacity == 0.6
    assert seg.path and len(seg.path[0]) > 2


def test_type_filter_keeps_matching_markers(flat_map) -> None:
    locations = [_loc("x", 0, 0, "travel"), _loc("y", 10, 10, "training")]
    markers = SceneComposer(flat_map.state).compute_markers(locations, "training")
    assert [m.location.id for m in markers] == ["y"]


def test_three_stops_make_two_segments(flat_map, sample_data) -> None:
    journey = sample_data.journey("j1")
    segments = SceneComposer(flat_map.state).compute_journey_segments(
        [journey], reversed(sample_data.locations)
    )
    assert [(s.from_location.id, s.to_location.id) for s in segments] == [
        ("a", "b"),
        ("b", "c"),
    ]
    assert all(s.stops == 3 for s in segments)


def test_globe_drops_segments_only_when_both_ends_are_hidden(globe) -> None:
    facing = globe.with_rotation(0.0, 0.0)
    stops = [_loc("a", 0, 0), _loc("b", 170, 0), _loc("c", 160, 10)]
    assert facing.is_visible(0, 0)
    assert not facing.is_visible(170, 0) and not facing.is_visible(160, 10)
    segments = SceneComposer(facing.state).compute_journey_segments(
        [Journey(id="j1", name="J", locations=("a", "b", "c"))], stops
    )
    assert [(s.from_location.id, s.to_location.id) for s in segments] == [("a", "b")]
    assert segments[0].stops == 3


def test_unresolvable_journey_draws_nothing(flat_map) -> None:
    journey = Journey(id="j2", name="Broken", locations=("missing", "a"))
    segments = SceneComposer(flat_map.state).compute_journey_segments(
        [journey], [_loc("a", 0, 0)]
    )
    assert segments == []


def test_journeys_hidden_unless_travel_is_shown(flat_map, sample_data) -> None:
    composer = SceneComposer(flat_map.state)
    for active in ("training", LocationFilter.of(types=["deployment"])):
        assert composer.compose(sample_data, filter=active).journey_segments == ()
    assert composer.compose(sample_data, filter="travel").journey_segments


def test_selection_styles(flat_map, sample_data) -> None:
    composer = SceneComposer(flat_map.state)
    scene = composer.compose(sample_data, selection=SelectionState(location_id="a"))
    marker = scene.marker_for("a")
    assert marker.selected and marker.radius == pytest.approx(6.0)
    assert marker.stroke_width == 2.0
    assert scene.marker_for("b").radius == 4.0

    scene = composer.compose(sample_data, selection=SelectionState(journey_id="j1"))
    assert all(s.is_selected and s.stroke_width == 3.0 for s in scene.segments_for("j1"))
    assert all(not m.selected for m in scene.markers)


def test_palettes_differ_per_view(globe, flat_map, sample_data) -> None:
    on_globe = compose_scene(globe.state, sample_data).marker_for("c")
    on_map = compose_scene(flat_map.state, sample_data).marker_for("c")
    assert on_globe.color == "#ef4444"
    assert on_map.color == "#C34681"


def test_far_side_markers_are_hidden(globe) -> None:
    # the default view looks at (30, 20); its antipode is (-150, -20)
    data = GlobeData(locations=(_loc("near", 30, 20), _loc("far", -150, -20)))
    scene = compose_scene(globe.state, data)
    assert scene.marker_for("near").visible
    assert not scene.marker_for("far").visible


def test_invalid_coordinates_are_skipped(flat_map) -> None:
    data = GlobeData(locations=(_loc("ok", 0, 0), _loc("bad", 500, 0)))
    markers = SceneComposer(flat_map.state).compute_markers(data.locations)
    assert [m.location.id for m in markers] == ["ok"]


def test_compose_is_deterministic(globe, sample_data) -> None:
    first = compose_scene(globe.state, sample_data)
    second = compose_scene(globe.state, sample_data)
    assert first == second
    assert first.layers() == ("outline", "graticule", "countries", "journeys", "markers")
    assert first.outline.kind == "circle"


def test_empty_data_renders_background_only(flat_map) -> None:
    scene = compose_scene(flat_map.state, GlobeData.empty())
    assert scene.is_empty
    assert scene.graticule
    assert scene.outline.kind == "rect"


def test_flat_map_highlights_countries_with_markers(flat_map, globe, sample_doc) -> None:
    square = [[-5, -5], [5, -5], [5, 5], [-5, 5], [-5, -5]]
    far = [[60, 60], [70, 60], [70, 70], [60, 70], [60, 60]]
    shapes = countries_from_geojson(
        {
            "type": "FeatureCollection",
            "features": [
                {"properties": {"name": "Gulf"}, "geometry": {"type": "Polygon", "coordinates": [square]}},
                {"properties": {"name": "Far"}, "geometry": {"type": "Polygon", "coordinates": [far]}},
            ],
        }
    )
    data = load_globe_data(sample_doc)
    scene = compose_scene(flat_map.state, data, boundaries=shapes)
    highlighted = {c.name: c.highlighted for c in scene.countries}
    assert highlighted == {"Gulf": True, "Far": False}
    on_globe = compose_scene(globe.state, data, boundaries=shapes)
    assert not any(c.highlighted for c in on_globe.countries)


def test_flat_map_lines_split_at_antimeridian(flat_map) -> None:
    paths = SceneComposer(flat_map.state).project_line(
        [(170.0, 0.0), (179.0, 0.0), (-179.0, 0.0), (-170.0, 0.0)]
    )
    assert len(paths) == 2


def test_globe_lines_clip_far_hemisphere(globe) -> None:
    composer = SceneComposer(globe.state)
    line = [(lon, 20.0) for lon in range(-180, 181, 5)]
    paths = composer.project_line(line)
    assert paths
    center_x = globe.state.translate[0]
    radius = globe.state.radius
    for path in paths:
        for x, _ in path:
            assert abs(x - center_x) <= radius + 1e-6
