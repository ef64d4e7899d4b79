# SPDX-License-Identifier: Apache-2.0
"""Live view state: rotation/zoom, selection, hover tooltip and spin control.

The controller owns the only mutable state of a view. Each input event or
ticker frame produces a new immutable ``ProjectionState``; scenes are then
recomposed from scratch by :class:`~globetrail.scene.SceneComposer`.

State machine (globe)::

    SPINNING --drag start--> DRAGGING --drag end--> IDLE
    IDLE <--play/pause--> SPINNING
    any --marker click--> ANIMATING --tween done--> IDLE

The flat map has no rotation: it never spins and marker clicks only select.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Sequence

from globetrail.config import Settings
from globetrail.geo.boundaries import CountryShape
from globetrail.geo.projection import GeoProjector, ProjectionState
from globetrail.models.globe import GlobeData, Journey, Location
from globetrail.scene.composer import Scene, SceneComposer
from globetrail.scene.filters import ActiveFilter
from globetrail.scene.hit_test import Hit, HitKind, hit_test
from globetrail.scene.selection import NO_SELECTION, SelectionState

from .ticker import ManualTicker, Ticker
from .tween import Rotation, cubic_in_out, interpolate_rotation, shortest_target

LOGGER = logging.getLogger(__name__)

# d3-zoom's default wheel delta factor
WHEEL_DELTA = 0.002


class ViewState(str, Enum):
    SPINNING = "spinning"
    DRAGGING = "dragging"
    IDLE = "idle"
    ANIMATING = "animating"


@dataclass(frozen=True, slots=True)
class TooltipContent:
    title: str
    subtitle: str
    type: str


@dataclass(frozen=True, slots=True)
class Tooltip:
    visible: bool = False
    position: tuple[float, float] = (0.0, 0.0)
    content: TooltipContent | None = None


HIDDEN_TOOLTIP = Tooltip()

SceneListener = Callable[[Scene], None]


class InteractionController:
    """Translate pointer events and frame ticks into view state transitions."""

    def __init__(
        self,
        projector: GeoProjector,
        data: GlobeData | None = None,
        *,
        settings: Settings | None = None,
        ticker: Ticker | None = None,
        boundaries: Sequence[CountryShape] = (),
        autoplay: bool = True,
    ) -> None:
        self._projector = projector
        self._data = data or GlobeData.empty()
        self._settings = settings or Settings()
        self._ticker: Ticker = ticker or ManualTicker()
        self._boundaries = tuple(boundaries)
        self._filter: ActiveFilter = None
        self._selection = NO_SELECTION
        self._tooltip = HIDDEN_TOOLTIP
        self._hovered_id: str | None = None
        self._view_state = ViewState.IDLE
        self._origin: Rotation = projector.rotation
        self._target: Rotation | None = None
        self._scene: Scene | None = None
        self._listeners: list[SceneListener] = []
        if autoplay and self.is_globe:
            self.play()

    # -- read-only views --------------------------------------------------

    @property
    def view_state(self) -> ViewState:
        return self._view_state

    @property
    def is_globe(self) -> bool:
        return self._projector.state.is_globe

    @property
    def projector(self) -> GeoProjector:
        return self._projector

    @property
    def ticker(self) -> Ticker:
        return self._ticker

    @property
    def projection(self) -> ProjectionState:
        return self._projector.state

    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def tooltip(self) -> Tooltip:
        return self._tooltip

    @property
    def active_filter(self) -> ActiveFilter:
        return self._filter

    @property
    def data(self) -> GlobeData:
        return self._data

    @property
    def is_spinning(self) -> bool:
        return self._view_state is ViewState.SPINNING

    @property
    def selected_location(self) -> Location | None:
        if self._selection.location_id is None:
            return None
        return self._data.location(self._selection.location_id)

    @property
    def selected_journey(self) -> Journey | None:
        if self._selection.journey_id is None:
            return None
        return self._data.journey(self._selection.journey_id)

    def subscribe(self, listener: SceneListener) -> Callable[[], None]:
        """Call ``listener`` with the new scene after every redraw.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def scene(self) -> Scene:
        """Current scene, including the transient hover enlargement."""
        if self._scene is None:
            scene = SceneComposer(self._projector.state, self._settings).compose(
                self._data,
                filter=self._filter,
                selection=self._selection,
                boundaries=self._boundaries,
            )
            if self._hovered_id is not None:
                factor = self._settings.markers.hover_factor
                scene = replace(
                    scene,
                    markers=tuple(
                        replace(m, radius=m.radius * factor)
                        if m.location.id == self._hovered_id
                        else m
                        for m in scene.markers
                    ),
                )
            self._scene = scene
        return self._scene

    # -- content ----------------------------------------------------------

    def set_data(self, data: GlobeData) -> None:
        """Swap in freshly loaded data; selections that no longer resolve are dropped."""
        self._data = data
        sel = self._selection
        if (sel.location_id and data.location(sel.location_id) is None) or (
            sel.journey_id and data.journey(sel.journey_id) is None
        ):
            self._selection = NO_SELECTION
        self._hover_clear()
        self._redraw()

    def set_boundaries(self, boundaries: Sequence[CountryShape]) -> None:
        self._boundaries = tuple(boundaries)
        self._redraw()

    def set_filter(self, active: ActiveFilter) -> None:
        """Change the location filter; rotation and zoom are preserved."""
        self._filter = active
        self._hover_clear()
        self._redraw()

    # -- spinning ---------------------------------------------------------

    def play(self) -> None:
        if not self.is_globe:
            LOGGER.debug("Flat map does not spin; ignoring play")
            return
        if self._view_state is ViewState.SPINNING:
            return
        self._cancel_animation()
        self._ticker.stop()
        self._origin = self._projector.rotation
        self._view_state = ViewState.SPINNING
        self._ticker.start(self._on_tick)

    def pause(self) -> None:
        if self._view_state is ViewState.SPINNING:
            self._ticker.stop()
            self._view_state = ViewState.IDLE

    def toggle_play(self) -> bool:
        """Flip between spinning and paused; returns whether the globe now spins."""
        if self._view_state is ViewState.SPINNING:
            self.pause()
        else:
            self.play()
        return self.is_spinning

    def _on_tick(self, elapsed_ms: float) -> None:
        if self._view_state is ViewState.SPINNING:
            lam = self._origin[0] + self._settings.globe.speed * elapsed_ms
            self._set_rotation((lam, self._origin[1], self._origin[2]))
        elif self._view_state is ViewState.ANIMATING and self._target is not None:
            duration = self._settings.globe.focus_duration_ms
            t = 1.0 if duration <= 0 else min(1.0, elapsed_ms / duration)
            self._set_rotation(
                interpolate_rotation(self._origin, self._target, cubic_in_out(t))
            )
            if t >= 1.0:
                self._ticker.stop()
                self._target = None
                self._view_state = ViewState.IDLE
                self._set_animating(False)
        else:
            # stale tick from a driver that should have been stopped
            self._ticker.stop()
            return
        self._redraw()

    # -- dragging ---------------------------------------------------------

    def drag_start(self) -> None:
        self._ticker.stop()
        self._cancel_animation()
        self._view_state = ViewState.DRAGGING

    def drag_move(self, dx: float, dy: float) -> None:
        if self._view_state is not ViewState.DRAGGING:
            self.drag_start()
        if self.is_globe:
            g = self._settings.globe
            lam, phi, gamma = self._projector.rotation
            phi = max(-g.max_tilt, min(g.max_tilt, phi - dy * g.drag_sensitivity))
            self._set_rotation((lam + dx * g.drag_sensitivity, phi, gamma))
        else:
            self._projector = self._projector.pan_by(dx, dy)
        self._redraw()

    def drag_end(self) -> None:
        if self._view_state is ViewState.DRAGGING:
            self._view_state = ViewState.IDLE

    # -- clicks -----------------------------------------------------------

    def click_marker(self, location: Location) -> bool:
        """Select ``location`` and, on the globe, rotate to bring it front and center.

        Clicks on markers hidden behind the globe are ignored; returns whether
        the click was handled.
        """
        if self.is_globe and not self._projector.is_visible(
            location.longitude, location.latitude
        ):
            return False
        self._selection = self._selection.select_location(location.id)
        if not self.is_globe:
            self._tooltip = HIDDEN_TOOLTIP
            self._redraw()
            return True
        self._ticker.stop()
        g = self._settings.globe
        self._origin = self._projector.rotation
        self._target = shortest_target(
            self._origin,
            (-location.longitude, -location.latitude + g.focus_latitude_offset, 0.0),
        )
        self._view_state = ViewState.ANIMATING
        self._set_animating(True)
        self._ticker.start(self._on_tick)
        self._redraw()
        return True

    def click_journey(self, journey: Journey) -> None:
        self._selection = self._selection.select_journey(journey.id)
        self._redraw()

    def click_background(self) -> None:
        self._selection = self._selection.cleared()
        self._redraw()

    def click_at(self, x: float, y: float) -> Hit:
        """Dispatch a click at screen ``(x, y)`` to whatever lies underneath."""
        hit = self._hit(x, y)
        if hit.kind is HitKind.MARKER and hit.marker is not None:
            self.click_marker(hit.marker.location)
        elif hit.kind is HitKind.JOURNEY and hit.segment is not None:
            self.click_journey(hit.segment.journey)
        else:
            self.click_background()
        return hit

    # -- hover ------------------------------------------------------------

    def hover_marker(self, location: Location, position: tuple[float, float]) -> None:
        if self.is_globe:
            if not self._projector.is_visible(location.longitude, location.latitude):
                return
            title = location.title or f"{location.name}, {location.country}"
            subtitle = location.date or ""
        else:
            title = location.title or location.name
            subtitle = location.country + (f" • {location.date}" if location.date else "")
        self._hovered_id = location.id
        self._tooltip = Tooltip(
            visible=True,
            position=(float(position[0]), float(position[1])),
            content=TooltipContent(title=title, subtitle=subtitle, type=location.type),
        )
        self._redraw()

    def hover_journey(self, journey: Journey, position: tuple[float, float]) -> None:
        stops = len(self._data.resolve_journey(journey))
        self._hovered_id = None
        self._tooltip = Tooltip(
            visible=True,
            position=(float(position[0]), float(position[1])),
            content=TooltipContent(
                title=journey.name, subtitle=f"{stops} stops", type="journey"
            ),
        )
        self._redraw()

    def hover_end(self) -> None:
        self._hover_clear()
        self._redraw()

    def pointer_move(self, x: float, y: float) -> Hit:
        """Update the tooltip for a pointer at screen ``(x, y)``."""
        hit = self._hit(x, y)
        if hit.kind is HitKind.MARKER and hit.marker is not None:
            if self._hovered_id != hit.marker.location.id:
                self.hover_marker(hit.marker.location, (x, y))
            else:
                self._tooltip = replace(self._tooltip, position=(float(x), float(y)))
        elif hit.kind is HitKind.JOURNEY and hit.segment is not None:
            self.hover_journey(hit.segment.journey, (x, y))
        elif self._tooltip.visible or self._hovered_id is not None:
            self.hover_end()
        return hit

    # -- zoom / reset -----------------------------------------------------

    def zoom_by(self, factor: float, anchor: tuple[float, float] | None = None) -> None:
        self._projector = self._projector.zoom_by(factor, anchor)
        self._redraw()

    def zoom_in(self) -> None:
        self.zoom_by(self._settings.flat_map.zoom_in_factor)

    def zoom_out(self) -> None:
        self.zoom_by(self._settings.flat_map.zoom_out_factor)

    def wheel(self, delta_y: float, anchor: tuple[float, float] | None = None) -> None:
        self.zoom_by(2 ** (-delta_y * WHEEL_DELTA), anchor)

    def set_zoom(self, k: float, x: float | None = None, y: float | None = None) -> None:
        self._projector = self._projector.with_zoom(k, x, y)
        self._redraw()

    def reset_zoom(self) -> None:
        self._projector = self._projector.reset_zoom()
        self._redraw()

    def reset_rotation(self) -> None:
        if not self.is_globe:
            return
        self._cancel_animation()
        spinning = self.is_spinning
        self._ticker.stop()
        self._projector = self._projector.reset_rotation()
        self._origin = self._projector.rotation
        if spinning:
            self._ticker.start(self._on_tick)
        elif self._view_state is not ViewState.DRAGGING:
            self._view_state = ViewState.IDLE
        self._redraw()

    def resize(self, width: float, height: float | None = None) -> None:
        self._projector = self._projector.resize(width, height)
        self._redraw()

    # -- internals --------------------------------------------------------

    def _hit(self, x: float, y: float) -> Hit:
        return hit_test(
            self.scene(),
            x,
            y,
            tolerance=self._settings.markers.hit_tolerance,
        )

    def _hover_clear(self) -> None:
        self._hovered_id = None
        self._tooltip = HIDDEN_TOOLTIP

    def _set_rotation(self, rotation: Rotation) -> None:
        self._projector = self._projector.with_rotation(*rotation)

    def _set_animating(self, flag: bool) -> None:
        state = self._projector.state
        if state.is_animating != flag:
            self._projector = self._projector.with_state(replace(state, is_animating=flag))

    def _cancel_animation(self) -> None:
        if self._view_state is ViewState.ANIMATING:
            self._ticker.stop()
            self._target = None
            self._view_state = ViewState.IDLE
        self._set_animating(False)

    def _redraw(self) -> None:
        self._scene = None
        if not self._listeners:
            return
        scene = self.scene()
        for listener in list(self._listeners):
            listener(scene)
