# SPDX-License-Identifier: Apache-2.0
"""Orthographic and equirectangular projections over an immutable state.

``ProjectionState`` captures everything a view needs to map geographic
coordinates to screen pixels: viewport size, base scale, rotation
``(lambda, phi, gamma)`` in degrees, the flat-map center and the zoom/pan
transform. All functions here are pure; ``GeoProjector`` is a thin wrapper
whose ``with_*`` methods return new projectors instead of mutating.

Screen coordinates follow SVG conventions: the origin is the top-left corner
and y grows downwards.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Sequence

import numpy as np

from globetrail.config import FlatMapSettings, GlobeSettings

from .sphere import geo_distance

LOGGER = logging.getLogger(__name__)

_EPSILON = 1e-9
HALF_PI = math.pi / 2


class ProjectionMode(str, Enum):
    ORTHOGRAPHIC = "orthographic"
    EQUIRECTANGULAR = "equirectangular"


@dataclass(frozen=True, slots=True)
class ZoomTransform:
    """Zoom scale ``k`` followed by a pan of ``(x, y)`` pixels."""

    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    def apply(self, px: float, py: float) -> tuple[float, float]:
        return px * self.k + self.x, py * self.k + self.y

    def invert(self, px: float, py: float) -> tuple[float, float]:
        return (px - self.x) / self.k, (py - self.y) / self.k


IDENTITY = ZoomTransform()


@dataclass(frozen=True, slots=True)
class ProjectionState:
    mode: ProjectionMode
    width: float
    height: float
    scale: float
    rotation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    center: tuple[float, float] = (0.0, 0.0)
    zoom: ZoomTransform = field(default=IDENTITY)
    is_animating: bool = False

    @property
    def translate(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2

    @property
    def is_globe(self) -> bool:
        return self.mode is ProjectionMode.ORTHOGRAPHIC

    @property
    def radius(self) -> float:
        """Radius in pixels of the globe silhouette (orthographic only)."""
        return self.scale * self.zoom.k


def orthographic_state(
    width: float, height: float | None = None, settings: GlobeSettings | None = None
) -> ProjectionState:
    """Initial globe state: square viewport, tilted towards the viewer."""
    settings = settings or GlobeSettings()
    height = width if height is None else height
    return ProjectionState(
        mode=ProjectionMode.ORTHOGRAPHIC,
        width=float(width),
        height=float(height),
        scale=width / settings.scale_divisor,
        rotation=(
            settings.initial_longitude,
            settings.vertical_tilt,
            settings.horizontal_tilt,
        ),
    )


def equirectangular_state(
    width: float, height: float | None = None, settings: FlatMapSettings | None = None
) -> ProjectionState:
    """Initial flat map state centered slightly north of the equator."""
    settings = settings or FlatMapSettings()
    if height is None:
        height = min(width * settings.height_ratio, settings.max_height)
    return ProjectionState(
        mode=ProjectionMode.EQUIRECTANGULAR,
        width=float(width),
        height=float(height),
        scale=width / settings.scale_divisor,
        center=(float(settings.center[0]), float(settings.center[1])),
    )


# ---------------------------------------------------------------------------
# Rotation (radians, vectorized)


def _wrap(lam: np.ndarray) -> np.ndarray:
    return np.where(
        lam > math.pi, lam - 2 * math.pi, np.where(lam < -math.pi, lam + 2 * math.pi, lam)
    )


def _rotate_forward(
    lam: np.ndarray, phi: np.ndarray, rotation: Sequence[float]
) -> tuple[np.ndarray, np.ndarray]:
    d_lam, d_phi, d_gamma = (math.radians(math.fmod(r, 360.0)) for r in rotation)
    lam = _wrap(lam + d_lam)
    if not d_phi and not d_gamma:
        return lam, phi
    cos_dp, sin_dp = math.cos(d_phi), math.sin(d_phi)
    cos_dg, sin_dg = math.cos(d_gamma), math.sin(d_gamma)
    cos_phi = np.cos(phi)
    x = np.cos(lam) * cos_phi
    y = np.sin(lam) * cos_phi
    z = np.sin(phi)
    k = z * cos_dp + x * sin_dp
    return (
        np.arctan2(y * cos_dg - k * sin_dg, x * cos_dp - z * sin_dp),
        np.arcsin(np.clip(k * cos_dg + y * sin_dg, -1.0, 1.0)),
    )


def _rotate_inverse(
    lam: np.ndarray, phi: np.ndarray, rotation: Sequence[float]
) -> tuple[np.ndarray, np.ndarray]:
    d_lam, d_phi, d_gamma = (math.radians(math.fmod(r, 360.0)) for r in rotation)
    if d_phi or d_gamma:
        cos_dp, sin_dp = math.cos(d_phi), math.sin(d_phi)
        cos_dg, sin_dg = math.cos(d_gamma), math.sin(d_gamma)
        cos_phi = np.cos(phi)
        x = np.cos(lam) * cos_phi
        y = np.sin(lam) * cos_phi
        z = np.sin(phi)
        k = z * cos_dg - y * sin_dg
        lam = np.arctan2(y * cos_dg + z * sin_dg, x * cos_dp + k * sin_dp)
        phi = np.arcsin(np.clip(k * cos_dp - x * sin_dp, -1.0, 1.0))
    return _wrap(lam - d_lam), phi


# ---------------------------------------------------------------------------
# Raw projections


def _raw_forward(
    mode: ProjectionMode, lam: np.ndarray, phi: np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    if mode is ProjectionMode.ORTHOGRAPHIC:
        return np.cos(phi) * np.sin(lam), np.sin(phi)
    return lam, phi


def _raw_center(state: ProjectionState) -> tuple[float, float]:
    lam = np.radians(np.asarray(state.center[0], dtype=float))
    phi = np.radians(np.asarray(state.center[1], dtype=float))
    x, y = _raw_forward(state.mode, lam, phi)
    return float(x), float(y)


def _to_screen(
    state: ProjectionState, rx: np.ndarray, ry: np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    tx, ty = state.translate
    cx, cy = _raw_center(state)
    if state.is_globe:
        k = state.radius
        return tx + (rx - cx) * k, ty - (ry - cy) * k
    sx = tx + (rx - cx) * state.scale
    sy = ty - (ry - cy) * state.scale
    return sx * state.zoom.k + state.zoom.x, sy * state.zoom.k + state.zoom.y


def _valid_lonlat(lon: float, lat: float) -> bool:
    return (
        math.isfinite(lon)
        and math.isfinite(lat)
        and -180.0 - _EPSILON <= lon <= 180.0 + _EPSILON
        and -90.0 - _EPSILON <= lat <= 90.0 + _EPSILON
    )


def project(state: ProjectionState, lon: float, lat: float) -> tuple[float, float] | None:
    """Map ``(lon, lat)`` in degrees to screen ``(x, y)``.

    Orthographic projection also returns positions for the far hemisphere;
    callers decide visibility with :func:`is_visible`. Non-finite or
    out-of-range input yields ``None``.
    """
    try:
        lon, lat = float(lon), float(lat)
    except (TypeError, ValueError):
        return None
    if not _valid_lonlat(lon, lat):
        return None
    lam, phi = _rotate_forward(
        np.radians(np.asarray(lon)), np.radians(np.asarray(lat)), state.rotation
    )
    rx, ry = _raw_forward(state.mode, lam, phi)
    sx, sy = _to_screen(state, rx, ry)
    return float(sx), float(sy)


def project_many(
    state: ProjectionState, lons: Sequence[float], lats: Sequence[float]
) -> np.ndarray:
    """Project arrays of coordinates; returns an ``(n, 2)`` array (NaN when invalid)."""
    lons = np.asarray(lons, dtype=float)
    lats = np.asarray(lats, dtype=float)
    valid = (
        np.isfinite(lons)
        & np.isfinite(lats)
        & (np.abs(lons) <= 180.0 + _EPSILON)
        & (np.abs(lats) <= 90.0 + _EPSILON)
    )
    lam, phi = _rotate_forward(np.radians(lons), np.radians(lats), state.rotation)
    rx, ry = _raw_forward(state.mode, lam, phi)
    sx, sy = _to_screen(state, rx, ry)
    out = np.column_stack([sx, sy]) if lons.size else np.empty((0, 2))
    out[~valid] = np.nan
    return out


def invert(state: ProjectionState, x: float, y: float) -> tuple[float, float] | None:
    """Map screen ``(x, y)`` back to ``(lon, lat)`` in degrees.

    Returns ``None`` outside the globe silhouette (orthographic) or outside
    the map's extent (equirectangular).
    """
    try:
        x, y = float(x), float(y)
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    tx, ty = state.translate
    cx, cy = _raw_center(state)
    if state.is_globe:
        k = state.radius
        if k <= 0:
            return None
        rx = (x - tx) / k + cx
        ry = (ty - y) / k + cy
        z = math.hypot(rx, ry)
        if z > 1.0 + _EPSILON:
            return None
        c = math.asin(min(z, 1.0))
        sc, cc = math.sin(c), math.cos(c)
        lam = math.atan2(rx * sc, z * cc)
        phi = math.asin(max(-1.0, min(1.0, ry * sc / z))) if z else 0.0
    else:
        x, y = state.zoom.invert(x, y)
        rx = (x - tx) / state.scale + cx
        ry = (ty - y) / state.scale + cy
        if abs(rx) > math.pi + _EPSILON or abs(ry) > HALF_PI + _EPSILON:
            return None
        # flat map is unrotated: clamp, never wrap, so +180 stays on the right
        lam = min(max(rx, -math.pi), math.pi)
        phi = min(max(ry, -HALF_PI), HALF_PI)
        return math.degrees(lam), math.degrees(phi)
    lam_arr, phi_arr = _rotate_inverse(np.asarray(lam), np.asarray(phi), state.rotation)
    return math.degrees(float(lam_arr)), math.degrees(float(phi_arr))


def view_center(state: ProjectionState) -> tuple[float, float] | None:
    """Geographic point currently at the center of the viewport."""
    return invert(state, *state.translate)


def is_visible(state: ProjectionState, lon: float, lat: float) -> bool:
    """Whether ``(lon, lat)`` lies on the hemisphere facing the viewer.

    The flat map has no hemisphere culling: every projectable point is
    visible.
    """
    if not state.is_globe:
        return project(state, lon, lat) is not None
    try:
        lon, lat = float(lon), float(lat)
    except (TypeError, ValueError):
        return False
    if not _valid_lonlat(lon, lat):
        return False
    center = view_center(state)
    if center is None:
        return False
    return geo_distance((lon, lat), center) <= HALF_PI + _EPSILON


# ---------------------------------------------------------------------------
# Zoom / pan constraints


def constrain_zoom(
    state: ProjectionState, zoom: ZoomTransform, settings: FlatMapSettings | None = None
) -> ZoomTransform:
    """Clamp the zoom scale and, for the flat map, keep the pan in bounds.

    The pan limit keeps the viewport inside a translate extent reaching
    ``pan_margin`` viewports beyond each map edge.
    """
    settings = settings or FlatMapSettings()
    k = min(max(zoom.k, settings.min_zoom), settings.max_zoom)
    if state.is_globe:
        return ZoomTransform(k=k)
    w, h = state.width, state.height
    m = settings.pan_margin
    ex0, ey0, ex1, ey1 = -w * m, -h * m, w * (1 + m), h * (1 + m)
    t = ZoomTransform(k=k, x=zoom.x, y=zoom.y)
    dx0 = (0.0 - t.x) / k - ex0
    dx1 = (w - t.x) / k - ex1
    dy0 = (0.0 - t.y) / k - ey0
    dy1 = (h - t.y) / k - ey1
    shift_x = (dx0 + dx1) / 2 if dx1 > dx0 else (min(0.0, dx0) or max(0.0, dx1))
    shift_y = (dy0 + dy1) / 2 if dy1 > dy0 else (min(0.0, dy0) or max(0.0, dy1))
    return ZoomTransform(k=k, x=t.x + k * shift_x, y=t.y + k * shift_y)


class GeoProjector:
    """Convenience wrapper binding the pure projection functions to a state."""

    def __init__(
        self,
        state: ProjectionState,
        *,
        globe: GlobeSettings | None = None,
        flat_map: FlatMapSettings | None = None,
    ) -> None:
        self._state = state
        self._globe = globe or GlobeSettings()
        self._flat = flat_map or FlatMapSettings()

    @classmethod
    def globe(
        cls, width: float, height: float | None = None, settings: GlobeSettings | None = None
    ) -> GeoProjector:
        return cls(orthographic_state(width, height, settings), globe=settings)

    @classmethod
    def flat_map(
        cls,
        width: float,
        height: float | None = None,
        settings: FlatMapSettings | None = None,
    ) -> GeoProjector:
        return cls(equirectangular_state(width, height, settings), flat_map=settings)

    def __repr__(self) -> str:
        return f"GeoProjector({self._state!r})"

    @property
    def state(self) -> ProjectionState:
        return self._state

    @property
    def mode(self) -> ProjectionMode:
        return self._state.mode

    @property
    def rotation(self) -> tuple[float, float, float]:
        return self._state.rotation

    @property
    def zoom(self) -> ZoomTransform:
        return self._state.zoom

    def project(self, lon: float, lat: float) -> tuple[float, float] | None:
        return project(self._state, lon, lat)

    def project_many(self, lons: Sequence[float], lats: Sequence[float]) -> np.ndarray:
        return project_many(self._state, lons, lats)

    def invert(self, x: float, y: float) -> tuple[float, float] | None:
        return invert(self._state, x, y)

    def is_visible(self, lon: float, lat: float) -> bool:
        return is_visible(self._state, lon, lat)

    def view_center(self) -> tuple[float, float] | None:
        return view_center(self._state)

    def with_state(self, state: ProjectionState) -> GeoProjector:
        return GeoProjector(state, globe=self._globe, flat_map=self._flat)

    def with_rotation(
        self, lam: float, phi: float, gamma: float = 0.0
    ) -> GeoProjector:
        if not self._state.is_globe:
            raise ValueError("rotation is only supported by the orthographic projection")
        return self.with_state(
            replace(self._state, rotation=(float(lam), float(phi), float(gamma)))
        )

    def with_zoom(
        self, k: float, x: float | None = None, y: float | None = None
    ) -> GeoProjector:
        current = self._state.zoom
        zoom = ZoomTransform(
            k=float(k),
            x=current.x if x is None else float(x),
            y=current.y if y is None else float(y),
        )
        zoom = constrain_zoom(self._state, zoom, self._flat)
        return self.with_state(replace(self._state, zoom=zoom))

    def zoom_by(
        self, factor: float, anchor: tuple[float, float] | None = None
    ) -> GeoProjector:
        """Scale the zoom by ``factor`` keeping ``anchor`` (default: center) fixed."""
        current = self._state.zoom
        k = min(max(current.k * factor, self._flat.min_zoom), self._flat.max_zoom)
        if self._state.is_globe:
            return self.with_zoom(k)
        ax, ay = anchor if anchor is not None else self._state.translate
        wx, wy = current.invert(ax, ay)
        return self.with_zoom(k, ax - wx * k, ay - wy * k)

    def pan_by(self, dx: float, dy: float) -> GeoProjector:
        if self._state.is_globe:
            return self
        z = self._state.zoom
        return self.with_zoom(z.k, z.x + dx, z.y + dy)

    def reset_zoom(self) -> GeoProjector:
        return self.with_state(replace(self._state, zoom=IDENTITY))

    def reset_rotation(self) -> GeoProjector:
        if not self._state.is_globe:
            return self
        g = self._globe
        return self.with_rotation(g.initial_longitude, g.vertical_tilt, g.horizontal_tilt)

    def resize(self, width: float, height: float | None = None) -> GeoProjector:
        """Refit to a new viewport keeping rotation and zoom."""
        if self._state.is_globe:
            fresh = orthographic_state(width, height, self._globe)
        else:
            fresh = equirectangular_state(width, height, self._flat)
        state = replace(
            fresh,
            rotation=self._state.rotation,
            zoom=self._state.zoom,
            is_animating=self._state.is_animating,
        )
        return self.with_state(
            replace(state, zoom=constrain_zoom(state, state.zoom, self._flat))
        )
