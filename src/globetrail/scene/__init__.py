# SPDX-License-Identifier: Apache-2.0
"""Scene composition: markers, journey lines and background paths."""

from .composer import (
    CountryPath,
    JourneySegment,
    Marker,
    Outline,
    Scene,
    SceneComposer,
    compose_scene,
)
from .filters import (
    ActiveFilter,
    LocationFilter,
    allows_journeys,
    filter_locations,
    filter_options,
)
from .hit_test import Hit, HitKind, hit_test
from .selection import NO_SELECTION, SelectionState
from .styles import marker_color, marker_radius

__all__ = [
    "ActiveFilter",
    "CountryPath",
    "Hit",
    "HitKind",
    "JourneySegment",
    "LocationFilter",
    "Marker",
    "NO_SELECTION",
    "Outline",
    "Scene",
    "SceneComposer",
    "SelectionState",
    "allows_journeys",
    "compose_scene",
    "filter_locations",
    "filter_options",
    "hit_test",
    "marker_color",
    "marker_radius",
]
