# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import math

import numpy as np
import pytest

from globetrail.geo.projection import (
    GeoProjector,
    ProjectionMode,
    constrain_zoom,
    equirectangular_state,
    invert,
    is_visible,
    orthographic_state,
    project,
    project_many,
    view_center,
)
from globetrail.geo.sphere import geo_distance

GRID = [(lon, lat) for lon in range(-170, 171, 20) for lat in range(-80, 81, 20)]


def test_initial_states() -> None:
    globe = orthographic_state(600)
    assert globe.mode is ProjectionMode.ORTHOGRAPHIC
    assert globe.height == 600
    assert globe.scale == pytest.approx(600 / 2.3)
    assert globe.rotation == (-30.0, -20.0, 0.0)

    flat = equirectangular_state(1000)
    assert flat.height == 500  # capped
    assert flat.center == (0.0, 10.0)
    assert equirectangular_state(650).height == pytest.approx(390)


def test_globe_center_faces_viewer(globe) -> None:
    center = globe.view_center()
    assert center == pytest.approx((30.0, 20.0))
    assert globe.project(30.0, 20.0) == pytest.approx((300.0, 300.0))


def test_globe_roundtrip_for_visible_points(globe) -> None:
    center = globe.view_center()
    checked = 0
    for lon, lat in GRID:
        # stay off the silhouette where asin loses precision
        if math.degrees(geo_distance((lon, lat), center)) > 80:
            continue
        pos = globe.project(lon, lat)
        assert pos is not None
        back = globe.invert(*pos)
        assert back == pytest.approx((lon, lat), abs=1e-6)
        checked += 1
    assert checked > 10


def test_flat_map_roundtrip(flat_map) -> None:
    zoomed = flat_map.zoom_by(2.0, (100.0, 80.0))
    for proj in (flat_map, zoomed):
        for lon, lat in GRID + [(180.0, 0.0), (-180.0, 90.0)]:
            back = proj.invert(*proj.project(lon, lat))
            assert back == pytest.approx((lon, lat), abs=1e-9)


def test_flat_map_right_edge_stays_on_the_right(flat_map) -> None:
    right = flat_map.project(180.0, 0.0)
    left = flat_map.project(-180.0, 0.0)
    assert right[0] > left[0]
    lon, lat = flat_map.invert(*right)
    assert lon == pytest.approx(180.0)
    assert lat == pytest.approx(0.0, abs=1e-9)
    assert flat_map.project(lon, lat) == pytest.approx(right)


def test_flat_map_center_is_north_of_equator(flat_map) -> None:
    assert flat_map.project(0.0, 10.0) == pytest.approx((325.0, 195.0))
    # y grows downwards
    assert flat_map.project(0.0, 20.0)[1] < 195.0


def test_invalid_coordinates_have_no_position(globe, flat_map) -> None:
    for proj in (globe, flat_map):
        assert proj.project(float("nan"), 0.0) is None
        assert proj.project(0.0, 91.0) is None
        assert proj.project(200.0, 0.0) is None
        assert not proj.is_visible(float("inf"), 0.0)


def test_project_many_marks_invalid_rows(globe) -> None:
    out = project_many(globe.state, [30.0, float("nan"), 400.0], [20.0, 0.0, 0.0])
    assert out.shape == (3, 2)
    assert out[0] == pytest.approx([300.0, 300.0])
    assert np.isnan(out[1]).all() and np.isnan(out[2]).all()
    assert project_many(globe.state, [], []).shape == (0, 2)


def test_invert_outside_silhouette_is_none(globe, flat_map) -> None:
    assert globe.invert(0.0, 0.0) is None
    assert globe.invert(float("nan"), 10.0) is None
    far_left = flat_map.state.translate[0] - 4 * flat_map.state.scale
    assert invert(flat_map.state, far_left, 195.0) is None


@pytest.mark.parametrize("lam", [-120.0, -30.0, 0.0, 45.0, 170.0])
def test_visibility_flips_under_half_turn(lam: float) -> None:
    state = orthographic_state(600)
    front = GeoProjector(state).with_rotation(lam, 0.0).state
    back = GeoProjector(state).with_rotation(lam + 180.0, 0.0).state
    center = view_center(front)
    for lon, lat in GRID:
        d = math.degrees(geo_distance((lon, lat), center))
        if 85 < d < 95:
            continue
        assert is_visible(front, lon, lat) != is_visible(back, lon, lat)


def test_flat_map_everything_visible(flat_map) -> None:
    assert all(flat_map.is_visible(lon, lat) for lon, lat in GRID)


def test_rotation_wraps_whole_turns(globe) -> None:
    turned = globe.with_rotation(-30.0 + 720.0, -20.0)
    assert turned.project(10.0, 5.0) == pytest.approx(globe.project(10.0, 5.0))


def test_flat_map_rejects_rotation(flat_map) -> None:
    with pytest.raises(ValueError):
        flat_map.with_rotation(10.0, 0.0)
    assert flat_map.reset_rotation() is flat_map


def test_zoom_is_clamped(flat_map, globe) -> None:
    assert flat_map.zoom_by(100.0).zoom.k == 8.0
    assert flat_map.zoom_by(0.01).zoom.k == 1.0
    assert globe.zoom_by(3.0).zoom.k == 3.0
    assert globe.zoom_by(3.0).state.radius == pytest.approx(globe.state.scale * 3)


def test_zoom_keeps_anchor_fixed(flat_map) -> None:
    anchor = (200.0, 100.0)
    geo = flat_map.invert(*anchor)
    zoomed = flat_map.zoom_by(2.0, anchor)
    assert zoomed.zoom.k == 2.0
    assert zoomed.project(*geo) == pytest.approx(anchor)


def test_pan_is_constrained(flat_map) -> None:
    assert flat_map.pan_by(10_000.0, 0.0).zoom.x == pytest.approx(325.0)
    assert flat_map.pan_by(-10_000.0, 0.0).zoom.x == pytest.approx(-325.0)
    assert flat_map.pan_by(0.0, 50.0).zoom.y == pytest.approx(50.0)
    assert flat_map.pan_by(20.0, 0.0).reset_zoom().zoom.x == 0.0


def test_constrain_zoom_on_globe_drops_pan(globe) -> None:
    from globetrail.geo.projection import ZoomTransform

    z = constrain_zoom(globe.state, ZoomTransform(20.0, 5.0, 5.0))
    assert (z.k, z.x, z.y) == (8.0, 0.0, 0.0)


def test_projector_is_immutable(globe) -> None:
    moved = globe.with_rotation(10.0, 0.0)
    assert globe.rotation == (-30.0, -20.0, 0.0)
    assert moved.rotation == (10.0, 0.0, 0.0)
    assert moved.reset_rotation().rotation == globe.rotation


def test_resize_keeps_rotation_and_zoom(globe) -> None:
    g = globe.with_rotation(5.0, 5.0).zoom_by(2.0).resize(300)
    assert g.state.width == 300
    assert g.rotation == (5.0, 5.0, 0.0)
    assert g.zoom.k == 2.0
    assert project(g.state, -5.0, -5.0) == pytest.approx((150.0, 150.0))
