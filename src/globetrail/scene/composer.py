# SPDX-License-Identifier: Apache-2.0
"""Turn a projection state plus globe data into drawable primitives.

The composer has no rendering side effects: given identical inputs it
returns identical markers, journey segments and background paths. Drawing
order is countries, then journey lines, then markers so markers always stay
on top.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from globetrail.config import Settings
from globetrail.geo.boundaries import CountryShape, highlighted_countries
from globetrail.geo.projection import (
    HALF_PI,
    ProjectionMode,
    ProjectionState,
    is_visible,
    project,
    project_many,
    view_center,
)
from globetrail.geo.sphere import geo_distance_many, graticule, great_circle_points
from globetrail.models.globe import GlobeData, Journey, Location

from .filters import ActiveFilter, allows_journeys, filter_locations
from .selection import NO_SELECTION, SelectionState
from .styles import MARKER_STROKE, marker_color, marker_radius, marker_stroke_width

LOGGER = logging.getLogger(__name__)

Point = tuple[float, float]
Polyline = tuple[Point, ...]

LAYERS: tuple[str, ...] = ("outline", "graticule", "countries", "journeys", "markers")


@dataclass(frozen=True, slots=True)
class Marker:
    location: Location
    screen_pos: Point
    radius: float
    color: str
    stroke: str
    stroke_width: float
    visible: bool
    selected: bool = False


@dataclass(frozen=True, slots=True)
class JourneySegment:
    journey: Journey
    from_location: Location
    to_location: Location
    path: tuple[Polyline, ...]
    is_selected: bool
    color: str
    stroke_width: float
    opacity: float
    stops: int


@dataclass(frozen=True, slots=True)
class CountryPath:
    name: str
    path: tuple[Polyline, ...]
    highlighted: bool = False


@dataclass(frozen=True, slots=True)
class Outline:
    """Globe silhouette (circle) or flat-map backdrop (rectangle)."""

    kind: str
    x: float
    y: float
    width: float
    height: float
    radius: float = 0.0


@dataclass(frozen=True)
class Scene:
    state: ProjectionState
    outline: Outline
    graticule: tuple[Polyline, ...] = ()
    countries: tuple[CountryPath, ...] = ()
    journey_segments: tuple[JourneySegment, ...] = ()
    markers: tuple[Marker, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.markers and not self.journey_segments

    def layers(self) -> tuple[str, ...]:
        """Layer names in paint order (first is painted underneath)."""
        return LAYERS

    def marker_for(self, location_id: str) -> Marker | None:
        for marker in self.markers:
            if marker.location.id == location_id:
                return marker
        return None

    def segments_for(self, journey_id: str) -> list[JourneySegment]:
        return [s for s in self.journey_segments if s.journey.id == journey_id]


def _runs(points: np.ndarray, keep: np.ndarray) -> tuple[Polyline, ...]:
    """Split projected points into polylines of consecutive kept points."""
    runs: list[Polyline] = []
    current: list[Point] = []
    for idx in range(len(points)):
        if keep[idx]:
            current.append((float(points[idx, 0]), float(points[idx, 1])))
            continue
        if len(current) >= 2:
            runs.append(tuple(current))
        current = []
    if len(current) >= 2:
        runs.append(tuple(current))
    return tuple(runs)


class SceneComposer:
    """Compose scenes for one frozen :class:`ProjectionState`."""

    def __init__(self, state: ProjectionState, settings: Settings | None = None) -> None:
        self.state = state
        self.settings = settings or Settings()
        self._center = view_center(state) if state.is_globe else None

    # -- geometry helpers -------------------------------------------------

    def project_line(self, coords: Sequence[Point]) -> tuple[Polyline, ...]:
        """Project a lon/lat polyline, clipping hidden or discontinuous parts.

        On the globe, points on the far hemisphere are dropped; on the flat
        map the line is cut where it crosses the antimeridian.
        """
        if len(coords) < 2:
            return ()
        arr = np.asarray(coords, dtype=float)
        projected = project_many(self.state, arr[:, 0], arr[:, 1])
        keep = np.all(np.isfinite(projected), axis=1)
        if self.state.is_globe:
            if self._center is None:
                return ()
            dist = geo_distance_many(arr[:, 0], arr[:, 1], self._center)
            keep &= dist <= HALF_PI + 1e-9
            return _runs(projected, keep)
        runs: list[Polyline] = []
        jumps = np.abs(np.diff(arr[:, 0])) > 180.0
        start = 0
        for idx in np.flatnonzero(jumps):
            runs.extend(
                _runs(projected[start : idx + 1], keep[start : idx + 1])
            )
            start = idx + 1
        runs.extend(_runs(projected[start:], keep[start:]))
        return tuple(runs)

    def compute_graticule(self) -> tuple[Polyline, ...]:
        step = (
            self.settings.globe.graticule_step
            if self.state.is_globe
            else self.settings.flat_map.graticule_step
        )
        lines: list[Polyline] = []
        for line in graticule(step):
            lines.extend(self.project_line(line))
        return tuple(lines)

    def compute_outline(self) -> Outline:
        s = self.state
        if s.is_globe:
            cx, cy = s.translate
            return Outline(
                "circle",
                x=cx,
                y=cy,
                width=2 * s.radius,
                height=2 * s.radius,
                radius=s.radius,
            )
        return Outline(
            "rect",
            x=s.zoom.x,
            y=s.zoom.y,
            width=s.width * s.zoom.k,
            height=s.height * s.zoom.k,
        )

    def compute_countries(
        self,
        shapes: Iterable[CountryShape],
        highlight: Iterable[str] = (),
    ) -> tuple[CountryPath, ...]:
        highlight = frozenset(highlight)
        out: list[CountryPath] = []
        for shape in shapes:
            path: list[Polyline] = []
            for ring in shape.rings:
                path.extend(self.project_line(ring))
            if path:
                out.append(CountryPath(shape.name, tuple(path), shape.name in highlight))
        return tuple(out)

    # -- markers ----------------------------------------------------------

    def compute_markers(
        self,
        locations: Iterable[Location],
        filter: ActiveFilter = None,
        selection: SelectionState = NO_SELECTION,
    ) -> list[Marker]:
        """Markers for the locations that pass ``filter``.

        Locations without a screen position (NaN or out-of-range
        coordinates) are skipped. On the globe, markers on the far
        hemisphere are returned with ``visible=False``.
        """
        mode = self.state.mode
        markers: list[Marker] = []
        for loc in filter_locations(locations, filter):
            pos = project(self.state, loc.longitude, loc.latitude)
            if pos is None:
                LOGGER.debug("Skipping location %s: no screen position", loc.id)
                continue
            selected = selection.location_id == loc.id
            visible = is_visible(self.state, loc.longitude, loc.latitude)
            markers.append(
                Marker(
                    location=loc,
                    screen_pos=pos,
                    radius=marker_radius(
                        loc.type, selected=selected, settings=self.settings.markers
                    ),
                    color=marker_color(loc.type, mode, self.settings.markers),
                    stroke=MARKER_STROKE[mode],
                    stroke_width=marker_stroke_width(mode, selected=selected),
                    visible=visible,
                    selected=selected,
                )
            )
        return markers

    # -- journeys ---------------------------------------------------------

    def compute_journey_segments(
        self,
        journeys: Iterable[Journey],
        locations: Iterable[Location],
        active_filter: ActiveFilter = None,
        selection: SelectionState = NO_SELECTION,
    ) -> list[JourneySegment]:
        """One segment per consecutive pair of a journey's resolved locations.

        Unknown location ids are dropped; journeys left with fewer than two
        locations produce nothing. On the globe a segment is omitted only
        when both of its endpoints are hidden.
        """
        if not allows_journeys(active_filter):
            return []
        index = {loc.id: loc for loc in locations}
        ms = self.settings.markers
        segments: list[JourneySegment] = []
        for journey in journeys:
            stops = [index[i] for i in journey.locations if i in index]
            stops = [s for s in stops if _finite(s)]
            if len(stops) < 2:
                if journey.locations:
                    LOGGER.debug(
                        "Journey %s has %d resolvable stops; not drawn",
                        journey.id,
                        len(stops),
                    )
                continue
            selected = selection.journey_id == journey.id
            for start, end in zip(stops, stops[1:]):
                if self.state.is_globe and not (
                    is_visible(self.state, start.longitude, start.latitude)
                    or is_visible(self.state, end.longitude, end.latitude)
                ):
                    continue
                line = great_circle_points(start.coordinates, end.coordinates, ms.path_step)
                segments.append(
                    JourneySegment(
                        journey=journey,
                        from_location=start,
                        to_location=end,
                        path=self.project_line(line),
                        is_selected=selected,
                        color=journey.color or ms.journey_color,
                        stroke_width=(
                            ms.journey_selected_width if selected else ms.journey_width
                        ),
                        opacity=(
                            ms.journey_selected_opacity if selected else ms.journey_opacity
                        ),
                        stops=len(stops),
                    )
                )
        return segments

    # -- whole scene ------------------------------------------------------

    def compose(
        self,
        data: GlobeData,
        *,
        filter: ActiveFilter = None,
        selection: SelectionState = NO_SELECTION,
        boundaries: Sequence[CountryShape] = (),
    ) -> Scene:
        markers = self.compute_markers(data.locations, filter, selection)
        segments = self.compute_journey_segments(
            data.journeys, data.locations, filter, selection
        )
        highlight: frozenset[str] = frozenset()
        if boundaries and self.state.mode is ProjectionMode.EQUIRECTANGULAR:
            highlight = highlighted_countries(
                boundaries, (m.location.coordinates for m in markers)
            )
        return Scene(
            state=self.state,
            outline=self.compute_outline(),
            graticule=self.compute_graticule(),
            countries=self.compute_countries(boundaries, highlight),
            journey_segments=tuple(segments),
            markers=tuple(markers),
        )


def _finite(location: Location) -> bool:
    return math.isfinite(location.longitude) and math.isfinite(location.latitude)


def compose_scene(
    state: ProjectionState,
    data: GlobeData,
    *,
    filter: ActiveFilter = None,
    selection: SelectionState = NO_SELECTION,
    boundaries: Sequence[CountryShape] = (),
    settings: Settings | None = None,
) -> Scene:
    """Functional entry point: ``(state, data, filter, selection) -> Scene``."""
    return SceneComposer(state, settings).compose(
        data, filter=filter, selection=selection, boundaries=boundaries
    )
