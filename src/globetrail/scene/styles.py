# SPDX-License-Identifier: Apache-2.0
"""Marker and journey styling tables."""

from __future__ import annotations

from globetrail.config import MarkerSettings
from globetrail.geo.projection import ProjectionMode

DEFAULT_SETTINGS = MarkerSettings()

MARKER_STROKE = {
    ProjectionMode.ORTHOGRAPHIC: "#ffffffcc",
    ProjectionMode.EQUIRECTANGULAR: "#ffffff",
}


def marker_radius(
    location_type: str,
    *,
    selected: bool = False,
    settings: MarkerSettings = DEFAULT_SETTINGS,
) -> float:
    base = settings.base_radius.get(location_type, settings.default_radius)
    return base * settings.selected_factor if selected else base


def marker_color(
    location_type: str,
    mode: ProjectionMode = ProjectionMode.ORTHOGRAPHIC,
    settings: MarkerSettings = DEFAULT_SETTINGS,
) -> str:
    if mode is ProjectionMode.ORTHOGRAPHIC:
        return settings.globe_palette.get(location_type, settings.globe_default_color)
    return settings.flat_palette.get(location_type, settings.flat_default_color)


def marker_stroke_width(mode: ProjectionMode, *, selected: bool) -> float:
    if selected:
        return 2.0
    return 1.5 if mode is ProjectionMode.ORTHOGRAPHIC else 1.0
