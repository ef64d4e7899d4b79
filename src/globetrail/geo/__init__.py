# SPDX-License-Identifier: Apache-2.0
"""Projection, spherical geometry and world boundaries."""

from .boundaries import (
    BoundaryLoadError,
    CountryShape,
    contains,
    highlighted_countries,
    load_boundaries,
)
from .projection import (
    GeoProjector,
    ProjectionMode,
    ProjectionState,
    ZoomTransform,
    constrain_zoom,
    equirectangular_state,
    invert,
    is_visible,
    orthographic_state,
    project,
    project_many,
    view_center,
)
from .sphere import geo_distance, geo_interpolate, graticule, great_circle_points

__all__ = [
    "BoundaryLoadError",
    "CountryShape",
    "GeoProjector",
    "ProjectionMode",
    "ProjectionState",
    "ZoomTransform",
    "constrain_zoom",
    "contains",
    "equirectangular_state",
    "geo_distance",
    "geo_interpolate",
    "graticule",
    "great_circle_points",
    "highlighted_countries",
    "invert",
    "is_visible",
    "load_boundaries",
    "orthographic_state",
    "project",
    "project_many",
    "view_center",
]
