# SPDX-License-Identifier: Apache-2.0
"""Interactive globe, flat map and work timeline for portfolio sites.

Typical use::

    from globetrail import GeoProjector, InteractionController, load_globe_data

    data = load_globe_data("globe.json")
    view = InteractionController(GeoProjector.globe(600), data)
    scene = view.scene()
"""

from __future__ import annotations

from .config import Settings, load_settings
from .geo import GeoProjector, ProjectionMode, ProjectionState, load_boundaries
from .interaction import InteractionController, ManualTicker, ViewState
from .models import (
    GlobeData,
    Journey,
    Location,
    WorkInterval,
    load_globe_data,
    load_work_intervals,
)
from .scene import LocationFilter, Scene, SceneComposer, SelectionState, compose_scene
from .timeline import Timeline, TimelineLayout, layout_timeline

__version__ = "0.1.0"

__all__ = [
    "GeoProjector",
    "GlobeData",
    "InteractionController",
    "Journey",
    "Location",
    "LocationFilter",
    "ManualTicker",
    "ProjectionMode",
    "ProjectionState",
    "Scene",
    "SceneComposer",
    "SelectionState",
    "Settings",
    "Timeline",
    "TimelineLayout",
    "ViewState",
    "WorkInterval",
    "__version__",
    "compose_scene",
    "layout_timeline",
    "load_boundaries",
    "load_globe_data",
    "load_settings",
    "load_work_intervals",
]
