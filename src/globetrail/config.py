# SPDX-License-Identifier: Apache-2.0
"""Settings for the globe, flat map, markers and work timeline.

Every tunable lives in a frozen dataclass so a view can be configured once and
shared safely. ``load_settings`` merges overrides from a JSON mapping, a JSON
file, or the file named by ``GLOBETRAIL_SETTINGS``.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields, replace
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Mapping

LOGGER = logging.getLogger(__name__)

SETTINGS_ENV = "GLOBETRAIL_SETTINGS"


@dataclass(frozen=True)
class GlobeSettings:
    """Orthographic globe view."""

    scale_divisor: float = 2.3
    initial_longitude: float = -30.0
    vertical_tilt: float = -20.0
    horizontal_tilt: float = 0.0
    # degrees of longitude per elapsed millisecond
    speed: float = 0.006
    drag_sensitivity: float = 0.4
    max_tilt: float = 60.0
    focus_duration_ms: float = 1000.0
    focus_latitude_offset: float = 10.0
    graticule_step: float = 15.0


@dataclass(frozen=True)
class FlatMapSettings:
    """Equirectangular flat map view."""

    scale_divisor: float = 6.5
    center: tuple[float, float] = (0.0, 10.0)
    height_ratio: float = 0.6
    max_height: float = 500.0
    min_zoom: float = 1.0
    max_zoom: float = 8.0
    # fraction of the viewport allowed to be dragged past each map edge
    pan_margin: float = 0.5
    zoom_in_factor: float = 1.5
    zoom_out_factor: float = 0.67
    graticule_step: float = 20.0


GLOBE_PALETTE: dict[str, str] = {
    "deployment": "#ef4444",
    "training": "#3b82f6",
    "travel": "#10b981",
}

FLAT_MAP_PALETTE: dict[str, str] = {
    "deployment": "#C34681",
    "training": "#3388F8",
    "travel": "#10b981",
}


@dataclass(frozen=True)
class MarkerSettings:
    """Marker and journey line styling shared by both views."""

    base_radius: Mapping[str, float] = field(
        default_factory=lambda: {"deployment": 6.0, "training": 5.0, "travel": 4.0}
    )
    default_radius: float = 4.0
    selected_factor: float = 1.5
    hover_factor: float = 1.3
    globe_palette: Mapping[str, str] = field(
        default_factory=lambda: dict(GLOBE_PALETTE)
    )
    flat_palette: Mapping[str, str] = field(
        default_factory=lambda: dict(FLAT_MAP_PALETTE)
    )
    globe_default_color: str = "#6b7280"
    flat_default_color: str = "#6A7A82"
    journey_color: str = "#10b981"
    journey_width: float = 2.0
    journey_selected_width: float = 3.0
    journey_opacity: float = 0.6
    journey_selected_opacity: float = 1.0
    # great-circle sampling resolution for journey paths, in degrees
    path_step: float = 2.0
    # extra pixels around a journey line that still count as a hit
    hit_tolerance: float = 4.0


@dataclass(frozen=True)
class TimelineSettings:
    """Gantt layout of work history."""

    margin: float = 2.5
    band: float = 95.0
    min_width: float = 0.5
    # "approximate" uses 30-day months, "calendar" uses relativedelta
    duration_mode: str = "approximate"


@dataclass(frozen=True)
class Settings:
    globe: GlobeSettings = field(default_factory=GlobeSettings)
    flat_map: FlatMapSettings = field(default_factory=FlatMapSettings)
    markers: MarkerSettings = field(default_factory=MarkerSettings)
    timeline: TimelineSettings = field(default_factory=TimelineSettings)
    regions: Mapping[str, str] = field(default_factory=dict)


_SECTIONS: dict[str, type] = {
    "globe": GlobeSettings,
    "flat_map": FlatMapSettings,
    "markers": MarkerSettings,
    "timeline": TimelineSettings,
}


def default_regions() -> dict[str, str]:
    """Return the bundled country -> region mapping."""

    path = importlib_resources.files("globetrail.assets").joinpath("regions.json")
    with importlib_resources.as_file(path) as p:
        data = json.loads(p.read_text(encoding="utf-8"))
    return {str(k): str(v) for k, v in data.items()}


def _apply_section(current: Any, overrides: Mapping[str, Any]) -> Any:
    known = {f.name for f in fields(current)}
    unknown = set(overrides) - known
    if unknown:
        LOGGER.warning(
            "Ignoring unknown %s settings: %s",
            type(current).__name__,
            ", ".join(sorted(unknown)),
        )
    values: dict[str, Any] = {}
    for key, value in overrides.items():
        if key not in known:
            continue
        if isinstance(value, list):
            value = tuple(value)
        values[key] = value
    return replace(current, **values)


def settings_from_mapping(
    data: Mapping[str, Any], *, base: Settings | None = None
) -> Settings:
    """Merge a nested mapping of overrides into ``base`` (or the defaults)."""

    settings = base or Settings(regions=default_regions())
    updates: dict[str, Any] = {}
    for name in _SECTIONS:
        section = data.get(name)
        if section is None:
            continue
        if not isinstance(section, Mapping):
            raise ValueError(f"Settings section '{name}' must be an object")
        updates[name] = _apply_section(getattr(settings, name), section)
    regions = data.get("regions")
    if regions is not None:
        if not isinstance(regions, Mapping):
            raise ValueError("Settings section 'regions' must be an object")
        updates["regions"] = {str(k): str(v) for k, v in regions.items()}
    return replace(settings, **updates)


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from ``path`` or ``$GLOBETRAIL_SETTINGS``.

    Missing paths fall back to the defaults so views always get a usable
    configuration.
    """

    candidate = path or os.environ.get(SETTINGS_ENV)
    if not candidate:
        return Settings(regions=default_regions())
    p = Path(candidate).expanduser()
    if not p.is_file():
        LOGGER.warning("Settings file not found: %s; using defaults", p)
        return Settings(regions=default_regions())
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, Mapping):
        raise ValueError(f"Settings file must contain a JSON object: {p}")
    LOGGER.debug("Loaded settings from %s", p)
    return settings_from_mapping(data)
