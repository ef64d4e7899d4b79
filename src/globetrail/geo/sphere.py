# SPDX-License-Identifier: Apache-2.0
"""Spherical geometry on longitude/latitude pairs in degrees."""

from __future__ import annotations

import math
from typing import Callable

import numpy as np

LonLat = tuple[float, float]


def geo_distance(a: LonLat, b: LonLat) -> float:
    """Great-circle angular distance between ``a`` and ``b`` in radians."""
    lon1, lat1, lon2, lat2 = map(math.radians, (a[0], a[1], b[0], b[1]))
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * math.asin(min(1.0, math.sqrt(h)))


def geo_distance_many(
    lons: np.ndarray, lats: np.ndarray, origin: LonLat
) -> np.ndarray:
    """Vectorized great-circle distance (radians) from ``origin``."""
    lons = np.radians(np.asarray(lons, dtype=float))
    lats = np.radians(np.asarray(lats, dtype=float))
    lon0, lat0 = math.radians(origin[0]), math.radians(origin[1])
    dlat = lats - lat0
    dlon = lons - lon0
    h = np.sin(dlat / 2) ** 2 + np.cos(lat0) * np.cos(lats) * np.sin(dlon / 2) ** 2
    return 2 * np.arcsin(np.minimum(1.0, np.sqrt(h)))


def geo_interpolate(a: LonLat, b: LonLat) -> Callable[[float], LonLat]:
    """Return ``t -> point`` moving along the great circle from ``a`` to ``b``."""
    lon0, lat0 = math.radians(a[0]), math.radians(a[1])
    lon1, lat1 = math.radians(b[0]), math.radians(b[1])
    cy0, sy0 = math.cos(lat0), math.sin(lat0)
    cy1, sy1 = math.cos(lat1), math.sin(lat1)
    kx0, ky0 = cy0 * math.cos(lon0), cy0 * math.sin(lon0)
    kx1, ky1 = cy1 * math.cos(lon1), cy1 * math.sin(lon1)
    d = geo_distance(a, b)
    if d == 0:
        return lambda t: (a[0], a[1])
    k = math.sin(d)
    if abs(k) < 1e-12:
        # antipodal endpoints: every great circle qualifies, fall back to lon/lat
        return lambda t: (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)

    def interpolate(t: float) -> LonLat:
        t *= d
        b0 = math.sin(d - t) / k
        b1 = math.sin(t) / k
        x = b0 * kx0 + b1 * kx1
        y = b0 * ky0 + b1 * ky1
        z = b0 * sy0 + b1 * sy1
        return (
            math.degrees(math.atan2(y, x)),
            math.degrees(math.atan2(z, math.sqrt(x * x + y * y))),
        )

    return interpolate


def great_circle_points(a: LonLat, b: LonLat, step: float = 2.0) -> list[LonLat]:
    """Sample the great circle from ``a`` to ``b`` every ``step`` degrees.

    Endpoints are always included, so the result has at least two points.
    """
    d = math.degrees(geo_distance(a, b))
    n = max(1, int(math.ceil(d / step))) if step > 0 else 1
    interp = geo_interpolate(a, b)
    points = [(float(a[0]), float(a[1]))]
    points.extend(interp(i / n) for i in range(1, n))
    points.append((float(b[0]), float(b[1])))
    return points


def graticule(step: float = 15.0, precision: float = 2.5) -> list[list[LonLat]]:
    """Meridians and parallels every ``step`` degrees as lon/lat polylines.

    Meridians stop at +/-80 degrees except the major ones (every 90 degrees)
    which reach the poles; parallels run from -180 to 180.
    """
    lines: list[list[LonLat]] = []
    lats_minor = np.arange(-80.0, 80.0 + 1e-9, precision)
    lats_major = np.arange(-90.0, 90.0 + 1e-9, precision)
    for lon in np.arange(-180.0, 180.0, step):
        lats = lats_major if math.isclose(lon % 90.0, 0.0, abs_tol=1e-9) else lats_minor
        lines.append([(float(lon), float(lat)) for lat in lats])
    lons = np.arange(-180.0, 180.0 + 1e-9, precision)
    first = math.ceil(-80.0 / step) * step
    for lat in np.arange(first, 80.0 + 1e-9, step):
        lines.append([(float(lon), float(lat)) for lon in lons])
    return lines
